from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ..errors import InsufficientRowsError
from ..grid.reader import Grid, cell
from ..models.layout import LayoutKind
from ..models.line_item import LineItem, PercentageRow
from ..models.values import ABSENT, NormalizedValue
from .categorizer import classify_name
from .normalizer import normalize, normalize_percent, strip_store_prefix

"""Vertical extractor: stores as columns, line items as rows.

Grid shape:
    row 0      title
    row 1      header
    row 2      store names ("01 - Denver", "02 - Omaha", ...) from column 1
    row 3..    actual line items
    row k      marker whose column 0 contains "budget" (optional)
    row k+1..  budget rows: percentage rows ("Labor %") or value rows matching an actual item
"""

__all__ = [
    "MIN_ROWS",
    "StoreColumn",
    "VerticalExtraction",
    "extract_vertical",
    "read_store_columns",
    "find_budget_start",
    "is_percentage_row",
    "percentage_key",
]

logger = logging.getLogger(__name__)

MIN_ROWS = 4
STORE_ROW = 2
FIRST_DATA_ROW = 3
MIN_STORE_NAME_LENGTH = 3  # 2 文字以下は数値だけの迷子列とみなす
BUDGET_MARKER = "budget"
PERCENT_PROBE_CELLS = 3
PERCENT_CEILING = 100


@dataclass(frozen=True)
class StoreColumn:
    """A store and the grid column its values live in."""
    name: str
    column: int


@dataclass(frozen=True)
class VerticalExtraction:
    stores: tuple[StoreColumn, ...]
    line_items: tuple[LineItem, ...]
    percentage_rows: dict[str, PercentageRow]
    budget_start_row: int | None = None

    @property
    def store_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.stores)


def read_store_columns(grid: Grid) -> tuple[StoreColumn, ...]:
    """Build the store -> column mapping once from the store-name row."""
    stores: list[StoreColumn] = []
    for col, raw in enumerate(grid[STORE_ROW]):
        if col == 0:
            continue
        name = strip_store_prefix(raw)
        if len(name) < MIN_STORE_NAME_LENGTH:
            continue
        stores.append(StoreColumn(name=name, column=col))
    return tuple(stores)


def find_budget_start(grid: Grid) -> int | None:
    for idx in range(FIRST_DATA_ROW, len(grid)):
        if BUDGET_MARKER in cell(grid, idx, 0).lower():
            return idx
    return None


def _store_values(grid: Grid, row: int, stores: tuple[StoreColumn, ...]) -> tuple[NormalizedValue, ...]:
    return tuple(normalize(cell(grid, row, s.column)) for s in stores)


def is_percentage_row(cells: list[str]) -> bool:
    """Classify a budget row by its first non-empty data cells.

    A row is a percentage row when any inspected cell carries ``%`` or every
    inspected cell parses to a number below 100. Known false positive: a
    dollar row whose first values are all small (a $40 fee) reads as a
    percentage row.
    """
    probe = [c for c in cells if c.strip()][:PERCENT_PROBE_CELLS]
    if not probe:
        return False
    if any("%" in c for c in probe):
        return True
    values = [normalize(c) for c in probe]
    return all(v is not ABSENT and v < PERCENT_CEILING for v in values)  # type: ignore[operator]


def percentage_key(name: str) -> str:
    """'Labor %' -> 'labor'"""
    key = name.strip()
    if key.endswith("%"):
        key = key[:-1]
    return key.strip().lower()


def extract_vertical(grid: Grid) -> VerticalExtraction:
    """Recover stores, line items and percentage rows from a vertical grid.

    Raises
    ------
    InsufficientRowsError: fewer than MIN_ROWS rows
    """
    if len(grid) < MIN_ROWS:
        raise InsufficientRowsError(LayoutKind.VERTICAL.value, MIN_ROWS, len(grid))

    stores = read_store_columns(grid)
    logger.debug(f"vertical: stores={[f'{s.name}@{s.column}' for s in stores]}")

    budget_start = find_budget_start(grid)
    actual_end = budget_start if budget_start is not None else len(grid)
    if budget_start is not None:
        logger.debug(f"vertical: budget section starts at row {budget_start}")

    items: list[LineItem] = []
    for row in range(FIRST_DATA_ROW, actual_end):
        name = cell(grid, row, 0)
        if not name:
            continue
        category, indent = classify_name(name)
        items.append(
            LineItem(
                name=name,
                category=category,
                indent=indent,
                actual_per_store=_store_values(grid, row, stores),
                budget_per_store=(ABSENT,) * len(stores),
            )
        )

    percentage_rows: dict[str, PercentageRow] = {}
    if budget_start is not None:
        for row in range(budget_start + 1, len(grid)):
            name = cell(grid, row, 0)
            if not name:
                continue
            data_cells = [cell(grid, row, s.column) for s in stores]
            if not any(c.strip() for c in data_cells):
                continue
            if is_percentage_row(data_cells):
                key = percentage_key(name)
                percentage_rows[key] = PercentageRow(
                    key=key,
                    values_per_store=tuple(normalize_percent(c) for c in data_cells),
                )
                logger.debug(f"vertical: row {row} {name!r} -> percentage row '{key}'")
                continue

            match = next((i for i, item in enumerate(items) if item.name == name), None)
            if match is None:
                # 実績側に対応行が無い予算行は対象外
                logger.debug(f"vertical: row {row} budget-only {name!r} dropped")
                continue
            items[match] = replace(items[match], budget_per_store=_store_values(grid, row, stores))
            logger.debug(f"vertical: row {row} {name!r} -> budget values")

    return VerticalExtraction(
        stores=stores,
        line_items=tuple(items),
        percentage_rows=percentage_rows,
        budget_start_row=budget_start,
    )
