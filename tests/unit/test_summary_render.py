from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from pnl_ingest.models.processing_result import FileStat, ProcessingResult
from pnl_ingest.services.summary import render_summary_line

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"stores=([0-9]+)\s+line_items=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)$"
)

START = datetime(2025, 1, 6, 9, 0, 0, tzinfo=timezone.utc)


def _result(success: int, failed: int, stores: int, items: int, elapsed: float) -> ProcessingResult:
    return ProcessingResult(
        success_files=success,
        failed_files=failed,
        total_stores=stores,
        total_line_items=items,
        start_time=START,
        end_time=START,
        elapsed_seconds=elapsed,
    )


def test_render_summary_line_all_success():
    line = render_summary_line(_result(2, 0, 4, 14, 2.0))
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.group(1) == "2"
    assert m.group(3) == "2"
    assert m.group(4) == "0"
    assert m.group(5) == "4"
    assert m.group(6) == "14"
    assert m.group(7) == "2"


def test_render_summary_line_partial_failure():
    line = render_summary_line(_result(1, 2, 2, 10, 0.25))
    assert line == "SUMMARY files=3/3 success=1 failed=2 stores=2 line_items=10 elapsed_sec=0.25"


def test_render_summary_line_no_files():
    assert render_summary_line(_result(0, 0, 0, 0, 0.0)) == (
        "SUMMARY files=0/0 success=0 failed=0 stores=0 line_items=0 elapsed_sec=0"
    )


@pytest.mark.parametrize(
    "elapsed, text",
    [(1.23456, "1.235"), (0.0012, "0.0012"), (10.5, "10.5")],
)
def test_render_summary_elapsed_formatting(elapsed: float, text: str):
    line = render_summary_line(_result(1, 0, 1, 1, elapsed))
    assert line.endswith(f"elapsed_sec={text}")
    assert "e-" not in line


def test_from_stats_counts_only_successful_files():
    stats = [
        FileStat("a.csv", "success", "vertical", 2, 10, 0.1, output_path="output/a.json"),
        FileStat("b.csv", "failed", "unknown", 0, 0, 0.1, error="no rows"),
        FileStat("c.csv", "success", "horizontal", 3, 4, 0.1, output_path="output/c.json"),
    ]
    end = datetime(2025, 1, 6, 9, 0, 3, tzinfo=timezone.utc)
    result = ProcessingResult.from_stats(stats, START, end)
    assert (result.success_files, result.failed_files) == (2, 1)
    assert result.total_files == 3
    assert result.total_stores == 5
    assert result.total_line_items == 14
    assert result.elapsed_seconds == 3.0
    assert render_summary_line(result) == (
        "SUMMARY files=3/3 success=2 failed=1 stores=5 line_items=14 elapsed_sec=3"
    )
