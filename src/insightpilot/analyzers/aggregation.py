"""
Department aggregation — roll records up to one line per department.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from insightpilot.analyzers.scoring import variance_percentage
from insightpilot.errors import InvalidRecordError
from insightpilot.models.records import FinancialRecord


@dataclass(frozen=True)
class DepartmentAggregate:
    """Summed budget and actual for one department."""

    name: str
    budget: float = 0.0
    actual: float = 0.0

    @property
    def variance(self) -> float:
        return self.actual - self.budget

    @property
    def variance_percentage(self) -> float:
        return variance_percentage(self.budget, self.actual)

    @property
    def is_over_budget(self) -> bool:
        return self.variance_percentage > 0


def aggregate_by_department(records: Iterable[FinancialRecord]) -> list[DepartmentAggregate]:
    """Sum budget and actual per department name, in first-seen order.

    Category and period are ignored: records from different quarters are
    summed, not averaged. Pre-filter the records to analyse a single period.

    Raises:
        InvalidRecordError: If a department total overflows to infinity.
    """
    totals: dict[str, list[float]] = {}
    for index, record in enumerate(records):
        bucket = totals.setdefault(record.department.name, [0.0, 0.0])
        bucket[0] += record.metrics.budget
        bucket[1] += record.metrics.actual
        _check_finite(index, bucket, f"department {record.department.name!r}")

    return [
        DepartmentAggregate(name=name, budget=budget, actual=actual)
        for name, (budget, actual) in totals.items()
    ]


def total_metrics(records: Iterable[FinancialRecord]) -> tuple[float, float]:
    """Overall (budget, actual) across every record.

    Raises:
        InvalidRecordError: If either total overflows to infinity.
    """
    totals = [0.0, 0.0]
    for index, record in enumerate(records):
        totals[0] += record.metrics.budget
        totals[1] += record.metrics.actual
        _check_finite(index, totals, "record set")
    return totals[0], totals[1]


def _check_finite(index: int, totals: list[float], scope: str) -> None:
    if not (math.isfinite(totals[0]) and math.isfinite(totals[1])):
        raise InvalidRecordError(index, f"{scope} total is out of range")
