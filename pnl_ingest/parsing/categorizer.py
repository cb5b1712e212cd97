from __future__ import annotations

from ..models.line_item import Category

"""Categorizer & indenter.

Both are pure functions of the line-item name: lower-cased substring matching
over ordered rule tables, first match wins. Row position never matters.
"""

__all__ = [
    "CATEGORY_RULES",
    "INDENT_RULES",
    "DEFAULT_INDENT",
    "categorize",
    "indent_for",
    "classify_name",
]

CATEGORY_RULES: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.REVENUE, ("sales", "revenue", "gross")),
    (Category.COGS, ("cogs", "food", "beverage", "wine", "liquor", "beer", "merchandise")),
    (Category.LABOR, ("labor", "foh", "boh", "salary", "hourly", "payroll", "benefit")),
    (Category.PRIME_COST, ("prime cost",)),
    (
        Category.OPERATING_EXPENSES,
        (
            "supplies",
            "small wares",
            "equipment",
            "facility",
            "utility",
            "marketing",
            "technology",
            "rent",
            "cam",
            "property tax",
            "fee",
            "administration",
            "merchant",
        ),
    ),
)

# "total" 判定を先に評価する ("Total Labor - BOH" は indent 0)
INDENT_RULES: tuple[tuple[int, tuple[str, ...]], ...] = (
    (0, ("total", "month to date", "prime cost", "operating profit")),
    (2, ("foh ", "boh ", "dairy", "protein", "produce")),
)

DEFAULT_INDENT = 1


def categorize(name: str) -> Category:
    lowered = name.lower()
    for category, keywords in CATEGORY_RULES:
        if any(k in lowered for k in keywords):
            return category
    return Category.OTHER


def indent_for(name: str) -> int:
    lowered = name.lower()
    for indent, keywords in INDENT_RULES:
        if any(k in lowered for k in keywords):
            return indent
    return DEFAULT_INDENT


def classify_name(name: str) -> tuple[Category, int]:
    return categorize(name), indent_for(name)
