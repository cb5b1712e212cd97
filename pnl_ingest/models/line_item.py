from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .values import ABSENT, NormalizedValue

"""Line item and percentage row models produced by the extractors.

``LineItem`` pairs an actual and a budget value per store. ``PercentageRow``
holds a ratio already computed in the source report (decimal fraction, e.g.
0.325) and is never divided again.
"""

__all__ = [
    "Category",
    "LineItem",
    "PercentageRow",
]


class Category(str, Enum):
    """Reporting category of a P&L line item."""
    REVENUE = "Revenue"
    COGS = "COGS"
    LABOR = "Labor"
    PRIME_COST = "PrimeCost"
    OPERATING_EXPENSES = "OperatingExpenses"
    OTHER = "Other"


@dataclass(frozen=True)
class LineItem:
    """One named report row with per-store actual and budget values.

    ``actual_per_store[i]`` and ``budget_per_store[i]`` refer to the same store
    for every line item of one parse.
    """
    name: str
    category: Category
    indent: int  # 0 | 1 | 2
    actual_per_store: tuple[NormalizedValue, ...]
    budget_per_store: tuple[NormalizedValue, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.budget_per_store:
            # 予算未設定: 店舗数ぶん ABSENT で埋める
            object.__setattr__(self, "budget_per_store", (ABSENT,) * len(self.actual_per_store))
        if len(self.budget_per_store) != len(self.actual_per_store):
            raise ValueError(
                f"line item '{self.name}' has {len(self.actual_per_store)} actual values "
                f"but {len(self.budget_per_store)} budget values"
            )

    @property
    def store_count(self) -> int:
        return len(self.actual_per_store)

    def actual(self, store_index: int) -> NormalizedValue:
        return self.actual_per_store[store_index]

    def budget(self, store_index: int) -> NormalizedValue:
        return self.budget_per_store[store_index]

    def lowered(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class PercentageRow:
    key: str  # lower-cased, trailing '%' removed
    values_per_store: tuple[NormalizedValue, ...]

    def value(self, store_index: int) -> NormalizedValue:
        if store_index >= len(self.values_per_store):
            return ABSENT
        return self.values_per_store[store_index]
