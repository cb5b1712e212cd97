"""P&L report ingestion parser.

Turns a delimited profit-and-loss export (stores as columns or stores as rows)
into one normalized record per store for a reporting period.
"""

from .errors import InsufficientRowsError, MalformedInputError, ReportParseError
from .models import (
    ABSENT,
    Category,
    DataBatch,
    LayoutKind,
    LineItem,
    LineItemRow,
    ParseResult,
    PercentageRow,
    PeriodType,
    StoreFinancialRecord,
)
from .services.ingest import detect_format, parse_horizontal, parse_report, parse_vertical

__all__ = [
    # Entry points
    "detect_format",
    "parse_vertical",
    "parse_horizontal",
    "parse_report",
    # Errors
    "ReportParseError",
    "MalformedInputError",
    "InsufficientRowsError",
    # Models
    "ABSENT",
    "Category",
    "DataBatch",
    "LayoutKind",
    "LineItem",
    "LineItemRow",
    "ParseResult",
    "PercentageRow",
    "PeriodType",
    "StoreFinancialRecord",
]

__version__ = "0.1.0"
