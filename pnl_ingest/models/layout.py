from __future__ import annotations

from enum import Enum

"""Layout and period enums shared by the extractors and entry points."""

__all__ = [
    "LayoutKind",
    "PeriodType",
]


class LayoutKind(str, Enum):
    """Physical orientation of a P&L export.

    - VERTICAL: stores are columns, line items are rows
    - HORIZONTAL: stores are rows, metrics are columns
    """
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class PeriodType(str, Enum):
    """Reporting cadence. Only affects the label attached to the output batch."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @property
    def label(self) -> str:
        return self.value.capitalize()
