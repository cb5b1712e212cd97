from __future__ import annotations
import pytest

from pnl_ingest.models.line_item import Category
from pnl_ingest.parsing.categorizer import categorize, classify_name, indent_for


@pytest.mark.parametrize(
    "name, category",
    [
        ("Month To Date Net Sales", Category.REVENUE),
        ("Gross Revenue", Category.REVENUE),
        ("Food COGS", Category.COGS),
        ("Beer & Wine", Category.COGS),
        ("FOH Hourly", Category.LABOR),
        ("Employee Benefits", Category.LABOR),
        ("Prime Cost", Category.PRIME_COST),
        ("Marketing", Category.OPERATING_EXPENSES),
        ("Merchant Fees", Category.OPERATING_EXPENSES),
        ("Property Tax", Category.OPERATING_EXPENSES),
        ("Store Operating Profit", Category.OTHER),
        ("Miscellaneous", Category.OTHER),
    ],
)
def test_categorize(name: str, category: Category):
    assert categorize(name) is category


def test_categorize_first_match_wins():
    # "sales" (Revenue) outranks "beverage" (COGS)
    assert categorize("Beverage Sales") is Category.REVENUE
    # "food" (COGS) outranks "labor"
    assert categorize("Food Labor Allocation") is Category.COGS


@pytest.mark.parametrize(
    "name, indent",
    [
        ("Total COGS", 0),
        ("Month To Date Net Sales", 0),
        ("Prime Cost", 0),
        ("Store Operating Profit", 0),
        ("FOH Hourly", 2),
        ("BOH Salary", 2),
        ("Dairy", 2),
        ("Protein", 2),
        ("Produce", 2),
        ("Variable Labor", 1),
        ("Marketing", 1),
    ],
)
def test_indent_for(name: str, indent: int):
    assert indent_for(name) == indent


def test_total_outranks_nested_keywords():
    category, indent = classify_name("Total Labor - BOH")
    assert category is Category.LABOR
    assert indent == 0


def test_indent_two_keywords_need_trailing_space():
    # "foh " / "boh " only match as a word followed by a space
    assert indent_for("FOH") == 1
    assert indent_for("FOH Training") == 2


def test_matching_is_case_insensitive():
    assert classify_name("TOTAL labor") == classify_name("total LABOR")
