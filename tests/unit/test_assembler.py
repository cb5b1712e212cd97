from __future__ import annotations
from datetime import date

import pytest

from pnl_ingest.grid.reader import parse_grid
from pnl_ingest.parsing.assembler import assemble_horizontal, assemble_vertical, derive_ratio
from pnl_ingest.parsing.horizontal import extract_horizontal
from pnl_ingest.parsing.vertical import extract_vertical

PERIOD = date(2025, 11, 3)
HEAD = "P&L,,\nLine Item,Actual,Actual\nStore,01 - Denver,02 - Omaha\n"


def _vertical(text: str):
    return assemble_vertical(extract_vertical(parse_grid(text)), PERIOD)


@pytest.mark.parametrize(
    "numerator, sales, expected",
    [
        (30000, 100000, 0.3),
        (1, 3, 0.3333),
        (500, 0, 0.0),
        (500, -10, 0.0),
    ],
)
def test_derive_ratio(numerator, sales, expected):
    assert derive_ratio(numerator, sales) == expected


def test_vertical_fixture_records(vertical_report: str):
    denver, omaha = _vertical(vertical_report)
    assert denver.store_name == "Denver"
    assert denver.period_start_date == PERIOD
    assert denver.sales == 100000.0
    assert denver.prime_cost == 60000.0
    assert denver.food_cost == 25000.0
    assert denver.cogs == 25000.0
    assert denver.variable_labor == 18000.0
    # dedicated percentage rows win over division
    assert denver.labor_percent == pytest.approx(0.30)
    assert denver.store_operating_profit_percent == pytest.approx(0.145)
    assert omaha.store_operating_profit_percent == pytest.approx(0.12)


def test_vertical_percentages_derived_without_percentage_rows():
    text = HEAD + (
        'Month To Date Net Sales,"$100,000","$0"\n'
        'Total Labor,"$31,234","$5,000"\n'
        'Store Operating Profit,"$12,346",-\n'
    )
    denver, omaha = _vertical(text)
    assert denver.labor_percent == 0.3123
    assert denver.store_operating_profit_percent == 0.1235
    # zero sales never divides
    assert omaha.labor_percent == 0.0
    assert omaha.store_operating_profit_percent == 0.0


def test_absent_percentage_cell_falls_back_to_division():
    text = HEAD + (
        "Month To Date Net Sales,1000,2000\n"
        "Total Labor,300,500\n"
        "BUDGET,,\n"
        "Labor %,28%,-\n"
    )
    denver, omaha = _vertical(text)
    assert denver.labor_percent == pytest.approx(0.28)
    assert omaha.labor_percent == 0.25


def test_line_item_rows_default_absent_to_zero_and_carry_variance(vertical_report: str):
    denver, omaha = _vertical(vertical_report)
    labor = denver.line_item("Total Labor")
    assert (labor.actual, labor.budget) == (30000.0, 28500.0)
    assert labor.variance == 1500.0
    dairy = omaha.line_item("Dairy")
    assert (dairy.actual, dairy.budget, dairy.variance) == (0.0, 0.0, 0.0)
    assert len(denver.line_items) == 10


def test_missing_kpi_rows_assemble_as_zero():
    denver, _ = _vertical(HEAD + "Marketing,10,20\n")
    assert denver.sales == 0.0
    assert denver.prime_cost == 0.0
    assert denver.labor_percent == 0.0


def test_horizontal_records(horizontal_report: str):
    denver, omaha = assemble_horizontal(extract_horizontal(parse_grid(horizontal_report)), PERIOD)
    assert denver.sales == 0.0
    assert denver.food_cost == 5000.0
    assert denver.variable_labor == 3000.0
    assert denver.prime_cost == 11000.0
    assert denver.labor_percent == pytest.approx(0.325)
    assert omaha.store_operating_profit_percent == pytest.approx(0.095)
    assert denver.line_item("Total COGS").budget == 4800.0
    assert [r.name for r in denver.line_items] == ["Total COGS", "Variable Labor", "Total Labor", "Prime Cost"]


def test_horizontal_without_percent_columns_is_zero():
    text = "T\nStore,COGS,\n,MTD Actual,Plan\n01 - Denver,5000,4800\n"
    (denver,) = assemble_horizontal(extract_horizontal(parse_grid(text)), PERIOD)
    assert denver.labor_percent == 0.0
    assert denver.store_operating_profit_percent == 0.0


def test_horizontal_percent_columns_without_sub_labels():
    text = "T\nStore,COGS,MTD Actual,Plan,Total Labor %,SOP %\n01 - Denver,,5000,4800,32.5,12\n"
    (denver,) = assemble_horizontal(extract_horizontal(parse_grid(text)), PERIOD)
    assert denver.labor_percent == pytest.approx(0.325)
    assert denver.store_operating_profit_percent == pytest.approx(0.12)
