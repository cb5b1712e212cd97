from __future__ import annotations

"""Exception taxonomy for report parsing.

Only whole-report problems raise. Individual cells that fail to parse become
``ABSENT`` instead (see ``pnl_ingest.parsing.normalizer``).
"""

__all__ = [
    "ReportParseError",
    "MalformedInputError",
    "InsufficientRowsError",
]


class ReportParseError(Exception):
    """Base class for fatal parse errors."""

    error_type = "PARSE_ERROR"


class MalformedInputError(ReportParseError):
    """Raised when the raw text contains no usable rows at all."""

    error_type = "MALFORMED_INPUT"


class InsufficientRowsError(ReportParseError):
    """Raised when the grid is shorter than the selected layout requires."""

    error_type = "INSUFFICIENT_ROWS"

    def __init__(self, layout: str, required: int, actual: int) -> None:
        self.layout = layout
        self.required = required
        self.actual = actual
        super().__init__(f"{layout} layout requires at least {required} rows, got {actual}")
