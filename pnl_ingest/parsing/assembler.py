from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date

from ..models.financial_record import LineItemRow, StoreFinancialRecord
from ..models.line_item import LineItem, PercentageRow
from ..models.values import ABSENT, NormalizedValue, value_or
from .horizontal import LABOR_PERCENT_KEYS, SOP_PERCENT_KEYS, HorizontalExtraction
from .vertical import VerticalExtraction

"""Record assembler: extracted line items -> one StoreFinancialRecord per store.

This is the only step where ABSENT turns into a number (0). Summary KPIs come
from dedicated percentage rows when the report has them, otherwise by division
against sales.
"""

__all__ = [
    "PERCENT_DECIMALS",
    "find_line_item",
    "derive_ratio",
    "line_item_rows",
    "assemble_vertical",
    "assemble_horizontal",
]

logger = logging.getLogger(__name__)

PERCENT_DECIMALS = 4


def _name_has(*parts: str) -> Callable[[LineItem], bool]:
    def predicate(item: LineItem) -> bool:
        lowered = item.lowered()
        return all(p in lowered for p in parts)
    return predicate


IS_NET_SALES = _name_has("month to date", "net sales")
IS_PRIME_COST = _name_has("prime cost")
IS_TOTAL_LABOR = _name_has("total labor")
IS_STORE_OPERATING_PROFIT = _name_has("store operating profit")
IS_FOOD_COGS = _name_has("food", "cogs")
IS_VARIABLE_LABOR = _name_has("variable labor")


def find_line_item(items: Iterable[LineItem], predicate: Callable[[LineItem], bool]) -> LineItem | None:
    return next((i for i in items if predicate(i)), None)


def _actual(item: LineItem | None, store_index: int) -> float:
    if item is None:
        return 0.0
    return value_or(item.actual(store_index))


def derive_ratio(numerator: float, sales: float) -> float:
    """numerator / sales rounded to 4 places; non-positive sales gives 0."""
    if sales <= 0:
        return 0.0
    return round(numerator / sales, PERCENT_DECIMALS)


def _percentage_value(
    rows: dict[str, PercentageRow], keys: tuple[str, ...], store_index: int
) -> NormalizedValue:
    for key in keys:
        row = rows.get(key)
        if row is None:
            continue
        value = row.value(store_index)
        if value is not ABSENT:
            return value
    return ABSENT


def line_item_rows(items: Iterable[LineItem], store_index: int) -> tuple[LineItemRow, ...]:
    return tuple(
        LineItemRow(
            name=item.name,
            category=item.category,
            indent=item.indent,
            actual=value_or(item.actual(store_index)),
            budget=value_or(item.budget(store_index)),
        )
        for item in items
    )


def assemble_vertical(extraction: VerticalExtraction, period_start_date: date) -> tuple[StoreFinancialRecord, ...]:
    items = extraction.line_items
    sales_item = find_line_item(items, IS_NET_SALES)
    prime_item = find_line_item(items, IS_PRIME_COST)
    labor_item = find_line_item(items, IS_TOTAL_LABOR)
    sop_item = find_line_item(items, IS_STORE_OPERATING_PROFIT)
    food_item = find_line_item(items, IS_FOOD_COGS)
    variable_item = find_line_item(items, IS_VARIABLE_LABOR)
    if sales_item is None:
        logger.debug("vertical: no 'month to date net sales' row; sales default to 0")

    records: list[StoreFinancialRecord] = []
    for idx, store in enumerate(extraction.stores):
        sales = _actual(sales_item, idx)

        labor_percent = _percentage_value(extraction.percentage_rows, LABOR_PERCENT_KEYS, idx)
        if labor_percent is ABSENT:
            labor_percent = derive_ratio(_actual(labor_item, idx), sales)

        sop_percent = _percentage_value(extraction.percentage_rows, SOP_PERCENT_KEYS, idx)
        if sop_percent is ABSENT:
            sop_percent = derive_ratio(_actual(sop_item, idx), sales)

        records.append(
            StoreFinancialRecord(
                store_name=store.name,
                period_start_date=period_start_date,
                sales=sales,
                prime_cost=_actual(prime_item, idx),
                labor_percent=float(labor_percent),  # type: ignore[arg-type]
                store_operating_profit_percent=float(sop_percent),  # type: ignore[arg-type]
                food_cost=_actual(food_item, idx),
                variable_labor=_actual(variable_item, idx),
                line_items=line_item_rows(items, idx),
            )
        )
    return tuple(records)


def assemble_horizontal(extraction: HorizontalExtraction, period_start_date: date) -> tuple[StoreFinancialRecord, ...]:
    cogs_item = extraction.line_item("Total COGS")
    variable_item = extraction.line_item("Variable Labor")
    prime_item = extraction.line_item("Prime Cost")

    records: list[StoreFinancialRecord] = []
    for idx, store in enumerate(extraction.stores):
        records.append(
            StoreFinancialRecord(
                store_name=store.name,
                period_start_date=period_start_date,
                sales=0.0,  # not in this layout; entered manually downstream
                prime_cost=_actual(prime_item, idx),
                labor_percent=value_or(extraction.labor_percent[idx]),
                store_operating_profit_percent=value_or(extraction.sop_percent[idx]),
                food_cost=_actual(cogs_item, idx),
                variable_labor=_actual(variable_item, idx),
                line_items=line_item_rows(extraction.line_items, idx),
            )
        )
    return tuple(records)
