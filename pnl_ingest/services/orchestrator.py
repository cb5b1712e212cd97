from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable
from datetime import UTC, date, datetime
from pathlib import Path

from ..config.loader import ParserConfig
from ..errors import ReportParseError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.financial_record import ParseResult
from ..models.processing_result import STATUS_FAILED, STATUS_SUCCESS, FileStat, ProcessingResult
from .ingest import parse_report

"""Batch orchestration: parse every report file in the configured directory.

Each file is independent: a failing file is logged (ERROR line + JSON Lines
error record) and the run moves on. Successful files are written as
<output_directory>/<stem>.json.
"""

__all__ = [
    "ProcessingError",
    "UNKNOWN_LAYOUT",
    "scan_report_files",
    "process_file",
    "process_all",
]

logger = logging.getLogger(__name__)

UNKNOWN_LAYOUT = "unknown"
READ_ERROR = "READ_ERROR"
WRITE_ERROR = "WRITE_ERROR"


class ProcessingError(Exception):
    """Fatal batch error (source directory missing or unreadable)."""
    pass


def scan_report_files(directory: Path, patterns: Iterable[str]) -> list[Path]:
    """Non-recursive scan for report files, sorted and de-duplicated.

    Raises:
        ProcessingError: directory missing, not a directory, or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        found = {p for pattern in patterns for p in directory.glob(pattern) if p.is_file()}
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e
    return sorted(found)


def _write_output(result: ParseResult, output_dir: Path, stem: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    out = output_dir / f"{stem}.json"
    out.write_text(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return out


def process_file(
    path: Path,
    config: ParserConfig,
    period_start_date: date,
    error_log: ErrorLogBuffer,
) -> FileStat:
    started = time.perf_counter()
    forced_layout = None if config.layout == "auto" else config.layout

    def _failed(error_type: str, message: str, layout: str) -> FileStat:
        logger.error(f"{path.name}: {message}")
        error_log.append(ErrorRecord.create(path.name, layout, error_type, message))
        return FileStat(
            file_name=path.name,
            status=STATUS_FAILED,
            layout=layout,
            stores=0,
            line_items=0,
            elapsed_seconds=time.perf_counter() - started,
            error=message,
        )

    try:
        text = path.read_text(encoding=config.encoding)
    except (UnicodeDecodeError, LookupError, OSError) as e:
        # LookupError: 未知の encoding 名
        return _failed(READ_ERROR, f"cannot read file: {e}", UNKNOWN_LAYOUT)

    try:
        layout, result = parse_report(
            text,
            period_start_date,
            config.period_type,
            layout=forced_layout,
            delimiter=config.delimiter,
            source_name=path.name,
        )
    except ReportParseError as e:
        layout_name = getattr(e, "layout", None) or forced_layout or UNKNOWN_LAYOUT
        return _failed(e.error_type, str(e), layout_name)

    records = result.records
    try:
        out = _write_output(result, Path(config.output_directory), path.stem)
    except OSError as e:
        return _failed(WRITE_ERROR, f"cannot write output: {e}", layout.value)
    line_items = len(records[0].line_items) if records else 0
    logger.info(f"{path.name}: layout={layout.value} stores={len(records)} -> {out}")
    return FileStat(
        file_name=path.name,
        status=STATUS_SUCCESS,
        layout=layout.value,
        stores=len(records),
        line_items=line_items,
        elapsed_seconds=time.perf_counter() - started,
        output_path=str(out),
    )


def process_all(
    config: ParserConfig,
    period_start_date: date,
    files: list[Path] | None = None,
    logs_dir: Path | None = None,
) -> ProcessingResult:
    """Parse every report file and aggregate the run.

    Args:
        config: parser configuration
        period_start_date: start of the reporting period for every record
        files: explicit file list; None scans config.source_directory
        logs_dir: error log directory (default ./logs)

    Raises:
        ProcessingError: the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(logs_dir)

    if files is None:
        files = scan_report_files(Path(config.source_directory), config.file_patterns)
    if not files:
        logger.info(f"no report files in {config.source_directory}")

    stats = [process_file(p, config, period_start_date, error_log) for p in files]

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log written: {log_path}")

    return ProcessingResult.from_stats(stats, start_time, datetime.now(UTC))
