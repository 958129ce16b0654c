"""
Budget Analyst Agent — flags departments drifting from their budget.

Looks at each department's variance against budget:
- |variance| >= 10% becomes an insight (risk when over, opportunity when under)
- |variance| >= 20% also raises an urgent alert
- The three largest variances get a "what's driving this?" suggestion
"""

from __future__ import annotations

from insightpilot.agents.base import FinancialAgent
from insightpilot.analyzers.aggregation import DepartmentAggregate
from insightpilot.analyzers.scoring import (
    CRITICAL_VARIANCE_PCT,
    MEDIUM_VARIANCE_PCT,
    severity_from_variance,
)
from insightpilot.models.insights import (
    Alert,
    AlertPriority,
    Insight,
    InsightType,
    QueryCategory,
    QuerySuggestion,
)

OVERSPEND_ACTIONS = [
    "Review recent expenses and identify cost drivers",
    "Implement cost control measures",
    "Update budget forecast for remaining periods",
]

UNDERSPEND_ACTIONS = [
    "Analyze underspending reasons",
    "Consider reallocating unused budget",
    "Accelerate planned initiatives",
]

ALERT_ACTIONS = [
    "Schedule immediate budget review meeting",
    "Freeze non-essential spending",
    "Prepare variance explanation report",
]

MAX_VARIANCE_SUGGESTIONS = 3


class BudgetAnalystAgent(FinancialAgent):
    """Specialist agent for budget variance detection."""

    id = "budget-analyst"
    name = "Alex Chen"
    specialty = "Budget Analysis & Variance Detection"
    personality = "Detail-oriented, analytical, proactive in identifying budget discrepancies"
    avatar = "👩‍💼"

    def _analyze(self, departments: list[DepartmentAggregate]) -> list[Insight]:
        insights: list[Insight] = []
        for dept in departments:
            pct = dept.variance_percentage
            if abs(pct) < MEDIUM_VARIANCE_PCT:
                continue
            over = pct > 0
            insights.append(self._insight(
                type=InsightType.RISK if over else InsightType.OPPORTUNITY,
                severity=severity_from_variance(pct),
                title=f"{dept.name} Department Variance Alert",
                description=(
                    f"{dept.name} is {'over' if over else 'under'} budget by {abs(pct):.1f}%"
                ),
                details=(
                    f"Budget: ${dept.budget:,.2f}, Actual: ${dept.actual:,.2f}, "
                    f"Variance: ${dept.variance:,.2f}"
                ),
                action_items=list(OVERSPEND_ACTIONS if over else UNDERSPEND_ACTIONS),
                departments=[dept.name],
                confidence=0.9,
            ))
        return insights

    def _alert(self, departments: list[DepartmentAggregate]) -> list[Alert]:
        alerts: list[Alert] = []
        for dept in departments:
            pct = dept.variance_percentage
            if abs(pct) < CRITICAL_VARIANCE_PCT:
                continue
            alerts.append(self._new_alert(
                prefix="alert",
                priority=AlertPriority.URGENT,
                title=f"Critical Budget Variance - {dept.name}",
                message=(
                    f"{dept.name} department has exceeded budget threshold "
                    f"with {pct:.1f}% variance"
                ),
                department=dept.name,
                suggested_actions=list(ALERT_ACTIONS),
            ))
        return alerts

    def _suggest(self, departments: list[DepartmentAggregate]) -> list[QuerySuggestion]:
        flagged = [d for d in departments if abs(d.variance_percentage) >= MEDIUM_VARIANCE_PCT]
        flagged.sort(key=lambda d: abs(d.variance_percentage), reverse=True)

        return [
            self._suggestion(
                prefix="suggestion",
                query=f"What's driving the {dept.name} budget variance?",
                reason=(
                    f"{dept.name} shows {abs(dept.variance_percentage):.1f}% variance "
                    "- worth investigating"
                ),
                category=QueryCategory.VARIANCE,
                relevance_score=min(abs(dept.variance_percentage) / CRITICAL_VARIANCE_PCT, 1.0),
                estimated_insights=3,
            )
            for dept in flagged[:MAX_VARIANCE_SUGGESTIONS]
        ]
