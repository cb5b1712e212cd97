from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import InsufficientRowsError
from ..grid.reader import Grid, cell
from ..models.layout import LayoutKind
from ..models.line_item import LineItem
from ..models.values import ABSENT, NormalizedValue, value_or
from .categorizer import classify_name
from .normalizer import normalize, normalize_percent, strip_store_prefix

"""Horizontal extractor: stores as rows, metrics as columns.

Grid shape:
    row 0   title
    row 1   metric header: "COGS", "", "", "Variable Labor", ... with the
            sub-column labels (Week / MTD Actual / Plan / O/U) either in the
            same row or in a sub-header row 2 whose column 0 is blank
    row 2.. store rows ("01 - Denver", 5000, 4800, ...)

Each metric keeps an actual column (label contains "mtd") and a plan column
(label contains "plan"). This layout has no nested breakdown, so exactly four
line items are produced.
"""

__all__ = [
    "MIN_ROWS",
    "FIXED_METRICS",
    "MetricColumns",
    "HorizontalStore",
    "HorizontalExtraction",
    "read_metric_columns",
    "extract_horizontal",
]

logger = logging.getLogger(__name__)

MIN_ROWS = 3
HEADER_ROW = 1
FIRST_STORE_ROW = 2
MIN_STORE_CELL_LENGTH = 2
SUB_COLUMN_TOKENS = ("week", "mtd", "plan", "o/u")
MIN_METRIC_NAME_LENGTH = 3

# (metric key, line item name)
FIXED_METRICS: tuple[tuple[str, str], ...] = (
    ("cogs", "Total COGS"),
    ("variable labor", "Variable Labor"),
    ("total labor", "Total Labor"),
    ("prime cost", "Prime Cost"),
)
LABOR_PERCENT_KEYS = ("total labor", "labor")
SOP_PERCENT_KEYS = ("sop", "store operating profit")


@dataclass
class MetricColumns:
    name: str
    name_column: int
    actual_column: int | None = None
    plan_column: int | None = None

    @property
    def key(self) -> str:
        return self.name.strip().lower()


@dataclass(frozen=True)
class HorizontalStore:
    name: str
    row: int


@dataclass(frozen=True)
class HorizontalExtraction:
    stores: tuple[HorizontalStore, ...]
    metrics: dict[str, MetricColumns]
    line_items: tuple[LineItem, ...]
    labor_percent: tuple[NormalizedValue, ...] = field(default=())
    sop_percent: tuple[NormalizedValue, ...] = field(default=())

    @property
    def store_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.stores)

    def line_item(self, name: str) -> LineItem | None:
        return next((i for i in self.line_items if i.name == name), None)


def _has_sub_header(grid: Grid) -> bool:
    return len(grid) > FIRST_STORE_ROW and not cell(grid, FIRST_STORE_ROW, 0).strip()


def _is_metric_name(text: str) -> bool:
    lowered = text.strip().lower()
    if not lowered or len(lowered) < MIN_METRIC_NAME_LENGTH:
        return False
    return not any(t in lowered for t in SUB_COLUMN_TOKENS)


def read_metric_columns(grid: Grid) -> dict[str, MetricColumns]:
    """Walk the header left to right and record each metric's actual/plan columns."""
    label_rows = [HEADER_ROW]
    if _has_sub_header(grid):
        label_rows.append(FIRST_STORE_ROW)
    width = max(len(grid[r]) for r in label_rows)

    metrics: dict[str, MetricColumns] = {}
    current: MetricColumns | None = None
    for col in range(1, width):
        header = cell(grid, HEADER_ROW, col)
        if _is_metric_name(header):
            current = MetricColumns(name=header.strip(), name_column=col)
            metrics.setdefault(current.key, current)
            current = metrics[current.key]
        if current is None:
            continue
        for r in label_rows:
            label = cell(grid, r, col).lower()
            if "plan" in label:
                current.plan_column = col
            elif "mtd" in label:
                current.actual_column = col
    return metrics


def _find_metric(metrics: dict[str, MetricColumns], target: str) -> MetricColumns | None:
    if target in metrics:
        return metrics[target]
    for key, metric in metrics.items():
        if target in key and "%" not in key:
            return metric
    return None


def _find_percent_metric(metrics: dict[str, MetricColumns], targets: tuple[str, ...]) -> MetricColumns | None:
    for target in targets:
        for key, metric in metrics.items():
            if "%" in key and target in key:
                return metric
    return None


def _read(grid: Grid, row: int, column: int | None) -> NormalizedValue:
    if column is None:
        return ABSENT
    return normalize(cell(grid, row, column))


def extract_horizontal(grid: Grid) -> HorizontalExtraction:
    """Recover per-store rows and the fixed metric line items from a horizontal grid.

    Raises
    ------
    InsufficientRowsError: fewer than MIN_ROWS rows
    """
    if len(grid) < MIN_ROWS:
        raise InsufficientRowsError(LayoutKind.HORIZONTAL.value, MIN_ROWS, len(grid))

    metrics = read_metric_columns(grid)
    logger.debug(
        "horizontal: metrics="
        + str({k: (m.actual_column, m.plan_column) for k, m in metrics.items()})
    )

    stores: list[HorizontalStore] = []
    for row in range(FIRST_STORE_ROW, len(grid)):
        raw = cell(grid, row, 0)
        if len(raw) < MIN_STORE_CELL_LENGTH:
            continue
        stores.append(HorizontalStore(name=strip_store_prefix(raw), row=row))

    items: list[LineItem] = []
    for key, item_name in FIXED_METRICS:
        metric = _find_metric(metrics, key)
        if metric is None:
            logger.debug(f"horizontal: metric '{key}' not in header -> 0")
        actual_col = metric.actual_column if metric else None
        plan_col = metric.plan_column if metric else None
        category, indent = classify_name(item_name)
        # 列が無い指標は未計測扱いで 0
        items.append(
            LineItem(
                name=item_name,
                category=category,
                indent=indent,
                actual_per_store=tuple(value_or(_read(grid, s.row, actual_col)) for s in stores),
                budget_per_store=tuple(value_or(_read(grid, s.row, plan_col)) for s in stores),
            )
        )

    labor_metric = _find_percent_metric(metrics, LABOR_PERCENT_KEYS)
    sop_metric = _find_percent_metric(metrics, SOP_PERCENT_KEYS)

    def _percent_values(metric: MetricColumns | None) -> tuple[NormalizedValue, ...]:
        if metric is None:
            return (ABSENT,) * len(stores)
        # MTD ラベルが無い % 列は見出し列そのものが値列
        column = metric.actual_column if metric.actual_column is not None else metric.name_column
        return tuple(normalize_percent(cell(grid, s.row, column)) for s in stores)

    return HorizontalExtraction(
        stores=tuple(stores),
        metrics=metrics,
        line_items=tuple(items),
        labor_percent=_percent_values(labor_metric),
        sop_percent=_percent_values(sop_metric),
    )
