from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..grid.reader import DEFAULT_DELIMITER, Grid, parse_grid
from ..models.financial_record import ACTUALS, DataBatch, ParseResult, StoreFinancialRecord
from ..models.layout import LayoutKind, PeriodType
from ..parsing.assembler import assemble_horizontal, assemble_vertical
from ..parsing.horizontal import extract_horizontal
from ..parsing.layout import detect_layout
from ..parsing.vertical import extract_vertical

"""Public parse entry points.

parse_vertical() / parse_horizontal() run one extractor; detect_format() lets a
caller pick without trying both; parse_report() does detect + dispatch in one
call. Every entry point is a pure function of its arguments.
"""

__all__ = [
    "detect_format",
    "parse_vertical",
    "parse_horizontal",
    "parse_report",
    "source_label",
    "coerce_period_start",
    "coerce_period_type",
]

logger = logging.getLogger(__name__)

PeriodStart = date | str


def coerce_period_start(value: PeriodStart) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise ValueError(f"invalid period start date: {value!r}") from e


def coerce_period_type(value: PeriodType | str) -> PeriodType:
    try:
        return PeriodType(value)
    except ValueError as e:
        raise ValueError(f"invalid period type: {value!r} (expected weekly|monthly)") from e


def source_label(layout: LayoutKind, period_start_date: date, period_type: PeriodType) -> str:
    return f"{period_type.label} P&L ({layout.value}) - period starting {period_start_date.isoformat()}"


def _vertical_records(grid: Grid, period_start_date: date) -> tuple[StoreFinancialRecord, ...]:
    extraction = extract_vertical(grid)
    logger.info(
        f"parsed layout=vertical stores={len(extraction.stores)} "
        f"line_items={len(extraction.line_items)} percentage_rows={len(extraction.percentage_rows)}"
    )
    return assemble_vertical(extraction, period_start_date)


def _horizontal_records(grid: Grid, period_start_date: date) -> tuple[StoreFinancialRecord, ...]:
    extraction = extract_horizontal(grid)
    logger.info(
        f"parsed layout=horizontal stores={len(extraction.stores)} "
        f"line_items={len(extraction.line_items)} metrics={len(extraction.metrics)}"
    )
    return assemble_horizontal(extraction, period_start_date)


_EXTRACTORS: dict[LayoutKind, Callable[[Grid, date], tuple[StoreFinancialRecord, ...]]] = {
    LayoutKind.VERTICAL: _vertical_records,
    LayoutKind.HORIZONTAL: _horizontal_records,
}


def _parse(
    layout: LayoutKind,
    grid: Grid,
    period_start_date: PeriodStart,
    period_type: PeriodType | str,
    source_name: str | None,
) -> ParseResult:
    start = coerce_period_start(period_start_date)
    ptype = coerce_period_type(period_type)
    records = _EXTRACTORS[layout](grid, start)
    batch = DataBatch(
        data_type=ACTUALS,
        source_name=source_name or source_label(layout, start, ptype),
        data=records,
    )
    return ParseResult(results=(batch,))


def detect_format(
    text: str,
    period_type: PeriodType | str | None = None,
    *,
    delimiter: str = DEFAULT_DELIMITER,
) -> LayoutKind:
    """Return the layout of a report without extracting it.

    ``period_type`` is validated but never changes the detected layout.

    Raises MalformedInputError for text without rows.
    """
    if period_type is not None:
        coerce_period_type(period_type)
    return detect_layout(parse_grid(text, delimiter))


def parse_vertical(
    text: str,
    period_start_date: PeriodStart,
    period_type: PeriodType | str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    source_name: str | None = None,
) -> ParseResult:
    """Parse a report with stores as columns.

    Raises
    ------
    MalformedInputError: no usable rows
    InsufficientRowsError: fewer than 4 rows
    """
    return _parse(LayoutKind.VERTICAL, parse_grid(text, delimiter), period_start_date, period_type, source_name)


def parse_horizontal(
    text: str,
    period_start_date: PeriodStart,
    period_type: PeriodType | str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    source_name: str | None = None,
) -> ParseResult:
    """Parse a report with stores as rows.

    Raises
    ------
    MalformedInputError: no usable rows
    InsufficientRowsError: fewer than 3 rows
    """
    return _parse(LayoutKind.HORIZONTAL, parse_grid(text, delimiter), period_start_date, period_type, source_name)


def parse_report(
    text: str,
    period_start_date: PeriodStart,
    period_type: PeriodType | str,
    *,
    layout: LayoutKind | str | None = None,
    delimiter: str = DEFAULT_DELIMITER,
    source_name: str | None = None,
) -> tuple[LayoutKind, ParseResult]:
    """Detect (or force) the layout and parse in one pass over the text.

    Returns the layout actually used together with the result.
    """
    grid = parse_grid(text, delimiter)
    kind = LayoutKind(layout) if layout else detect_layout(grid)
    return kind, _parse(kind, grid, period_start_date, period_type, source_name)
