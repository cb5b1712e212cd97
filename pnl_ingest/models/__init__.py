"""Domain models for the P&L report parser."""

from .financial_record import ACTUALS, DataBatch, LineItemRow, ParseResult, StoreFinancialRecord
from .layout import LayoutKind, PeriodType
from .line_item import Category, LineItem, PercentageRow
from .values import ABSENT, Absent, NormalizedValue, is_absent, value_or

__all__ = [
    # Values
    "ABSENT",
    "Absent",
    "NormalizedValue",
    "is_absent",
    "value_or",
    # Extraction models
    "Category",
    "LineItem",
    "PercentageRow",
    "LayoutKind",
    "PeriodType",
    # Output models
    "ACTUALS",
    "LineItemRow",
    "StoreFinancialRecord",
    "DataBatch",
    "ParseResult",
]
