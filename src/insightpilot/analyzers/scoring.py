"""
Scoring primitives shared by every agent.

Pure functions, no state. The severity boundaries are fixed:

    |variance| < 10%   -> low
    10% <= |v| < 15%   -> medium
    15% <= |v| < 20%   -> high
    |v| >= 20%         -> critical
"""

from __future__ import annotations

from insightpilot.models.insights import AlertPriority, Severity

MEDIUM_VARIANCE_PCT = 10.0
HIGH_VARIANCE_PCT = 15.0
CRITICAL_VARIANCE_PCT = 20.0

MAX_SCORE = 10.0

SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}

PRIORITY_RANK: dict[AlertPriority, int] = {
    AlertPriority.URGENT: 4,
    AlertPriority.HIGH: 3,
    AlertPriority.MEDIUM: 2,
    AlertPriority.LOW: 1,
}


def variance_percentage(budget: float, actual: float) -> float:
    """Variance of actual against budget, in percent of budget.

    A budget of zero (or below) yields 0 rather than a division error, so an
    unbudgeted department never shows up as a critical variance.
    """
    if budget <= 0:
        return 0.0
    return (actual - budget) / budget * 100


def severity_from_variance(percent: float) -> Severity:
    magnitude = abs(percent)
    if magnitude >= CRITICAL_VARIANCE_PCT:
        return Severity.CRITICAL
    if magnitude >= HIGH_VARIANCE_PCT:
        return Severity.HIGH
    if magnitude >= MEDIUM_VARIANCE_PCT:
        return Severity.MEDIUM
    return Severity.LOW


def risk_score(percent: float) -> float:
    """Risk on a 0-10 scale: half the absolute variance, capped at 10."""
    return min(abs(percent) / 2, MAX_SCORE)


def performance_score(percent: float) -> float:
    """Performance on a 0-10 scale: 10 minus a tenth of the absolute variance."""
    return max(0.0, MAX_SCORE - abs(percent) / 10)


def efficiency(budget: float, actual: float) -> float:
    """Budget as a percent of actual spend; 0 when nothing was spent."""
    if actual > 0:
        return budget / actual * 100
    return 0.0
