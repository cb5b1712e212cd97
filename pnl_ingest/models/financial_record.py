from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .line_item import Category

"""Terminal output models of a parse.

One ``StoreFinancialRecord`` per store, wrapped in a ``DataBatch`` and a
``ParseResult`` envelope. ``to_dict()`` emits the camelCase shape the import
pipeline consumes.
"""

__all__ = [
    "LineItemRow",
    "StoreFinancialRecord",
    "DataBatch",
    "ParseResult",
    "ACTUALS",
]

ACTUALS = "Actuals"


@dataclass(frozen=True)
class LineItemRow:
    """A line item resolved for a single store (ABSENT already defaulted to 0)."""
    name: str
    category: Category
    indent: int
    actual: float
    budget: float

    @property
    def variance(self) -> float:
        return self.actual - self.budget

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category.value,
            "indent": self.indent,
            "actual": self.actual,
            "budget": self.budget,
            "variance": self.variance,
        }


@dataclass(frozen=True)
class StoreFinancialRecord:
    """Normalized P&L figures for one store and one reporting period.

    Percentages (``labor_percent``, ``store_operating_profit_percent``) are
    decimal fractions. ``food_cost`` is the COGS actual; ``cogs`` is kept as
    an alias because the dashboard renamed the KPI.
    """
    store_name: str
    period_start_date: date
    sales: float
    prime_cost: float
    labor_percent: float
    store_operating_profit_percent: float
    food_cost: float
    variable_labor: float
    line_items: tuple[LineItemRow, ...] = field(default=())

    @property
    def cogs(self) -> float:
        return self.food_cost

    def line_item(self, name: str) -> LineItemRow | None:
        for row in self.line_items:
            if row.name == name:
                return row
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "storeName": self.store_name,
            "periodStartDate": self.period_start_date.isoformat(),
            "sales": self.sales,
            "primeCost": self.prime_cost,
            "laborPercent": self.labor_percent,
            "storeOperatingProfitPercent": self.store_operating_profit_percent,
            "foodCost": self.food_cost,
            "cogs": self.cogs,
            "variableLabor": self.variable_labor,
            "lineItems": [r.to_dict() for r in self.line_items],
        }

    def to_kpi_dict(self) -> dict[str, Any]:
        """Flatten to the dashboard's KPI names (``Labor%``, ``SOP%`` ...)."""
        return {
            "Store Name": self.store_name,
            "Week Start Date": self.period_start_date.isoformat(),
            "Sales": self.sales,
            "Prime Cost": self.prime_cost,
            "Labor%": self.labor_percent,
            "SOP%": self.store_operating_profit_percent,
            "Food Cost": self.food_cost,
            "COGS": self.cogs,
            "Variable Labor": self.variable_labor,
        }


@dataclass(frozen=True)
class DataBatch:
    data_type: str  # always "Actuals" for this parser
    source_name: str
    data: tuple[StoreFinancialRecord, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "dataType": self.data_type,
            "sourceName": self.source_name,
            "data": [r.to_dict() for r in self.data],
        }


@dataclass(frozen=True)
class ParseResult:
    """Envelope handed to the import pipeline.

    Kept as a list of batches because the pipeline's generic handler accepts
    heterogeneous batches; this parser always emits exactly one.
    """
    results: tuple[DataBatch, ...]

    @property
    def records(self) -> tuple[StoreFinancialRecord, ...]:
        return tuple(r for batch in self.results for r in batch.data)

    def to_dict(self) -> dict[str, Any]:
        return {"results": [b.to_dict() for b in self.results]}
