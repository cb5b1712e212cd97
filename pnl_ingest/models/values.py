from __future__ import annotations

from typing import Final, Union

"""Normalized cell values.

A normalized cell is either a finite float or the ``ABSENT`` marker. Absence is
never the same thing as zero: it survives extraction untouched and is only
replaced by a default when a record is assembled.
"""

__all__ = [
    "ABSENT",
    "Absent",
    "NormalizedValue",
    "is_absent",
    "value_or",
]


class Absent:
    """Singleton marker for a cell that holds no usable number."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT: Final = Absent()

NormalizedValue = Union[float, Absent]


def is_absent(value: NormalizedValue) -> bool:
    return value is ABSENT


def value_or(value: NormalizedValue, default: float = 0.0) -> float:
    """Return ``value`` as a float, substituting ``default`` for ``ABSENT``."""
    if value is ABSENT:
        return default
    return float(value)  # type: ignore[arg-type]
