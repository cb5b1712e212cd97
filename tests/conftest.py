# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from pnl_ingest.logging.init import reset_logging

VERTICAL_REPORT = """P&L Report - Period 11,,
Line Item,Actual,Actual
Store,01 - Denver,02 - Omaha
Month To Date Net Sales,"$100,000","$80,000"
Food COGS,"$25,000","$20,000"
Dairy,"$2,000",-
Total COGS,"$30,000","$24,000"
FOH Hourly,"$9,000","$7,000"
Variable Labor,"$18,000","$15,000"
Total Labor,"$30,000","$28,000"
Prime Cost,"$60,000","$52,000"
Marketing,"$1,500","$1,000"
Store Operating Profit,"$12,000","$6,400"
BUDGET:,,
Month To Date Net Sales,"$95,000","$85,000"
Total Labor,"$28,500","$25,500"
Labor %,30.0%,30.0%
SOP %,14.5,12.0
Catering Fee,"$500","$400"
"""

HORIZONTAL_REPORT = """Weekly Store Metrics,,,,,,,,,,
Store,COGS,,Variable Labor,,Total Labor,,Prime Cost,,Total Labor %,SOP %
,MTD Actual,Plan,MTD Actual,Plan,MTD Actual,Plan,MTD Actual,Plan,MTD,MTD
01 - Denver,"$5,000","$4,800","$3,000","$2,900","$6,000","$5,800","$11,000","$10,600",32.5%,12.0
02 - Omaha,"$4,000","$4,100",-,"$2,500","$5,500","$5,000","$9,500","$9,100",0.31,9.5%
"""


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def vertical_report() -> str:
    return VERTICAL_REPORT


@pytest.fixture()
def horizontal_report() -> str:
    return HORIZONTAL_REPORT


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
delimiter: ","
period_type: weekly
layout: auto
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "parser.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def report_files(temp_workdir: Path) -> list[Path]:
    vertical = temp_workdir / "data" / "pnl_vertical.csv"
    vertical.write_text(VERTICAL_REPORT, encoding="utf-8")
    horizontal = temp_workdir / "data" / "metrics_horizontal.csv"
    horizontal.write_text(HORIZONTAL_REPORT, encoding="utf-8")
    return [vertical, horizontal]
