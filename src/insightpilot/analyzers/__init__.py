"""Analyzers — pure scoring primitives and department aggregation."""

from insightpilot.analyzers.aggregation import (
    DepartmentAggregate,
    aggregate_by_department,
    total_metrics,
)
from insightpilot.analyzers.scoring import (
    PRIORITY_RANK,
    SEVERITY_RANK,
    efficiency,
    performance_score,
    risk_score,
    severity_from_variance,
    variance_percentage,
)

__all__ = [
    "DepartmentAggregate",
    "PRIORITY_RANK",
    "SEVERITY_RANK",
    "aggregate_by_department",
    "efficiency",
    "performance_score",
    "risk_score",
    "severity_from_variance",
    "total_metrics",
    "variance_percentage",
]
