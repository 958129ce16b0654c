"""
Performance Analyst Agent — rates how closely departments land on budget.

Performance score is 10 minus a tenth of the absolute variance (floored at
0). Scores of 8+ are praised as opportunities; scores of 3 or less are
flagged for improvement and alerted on.
"""

from __future__ import annotations

from dataclasses import dataclass

from insightpilot.agents.base import FinancialAgent
from insightpilot.analyzers.aggregation import DepartmentAggregate
from insightpilot.analyzers.scoring import efficiency, performance_score
from insightpilot.models.insights import (
    Alert,
    AlertPriority,
    Insight,
    InsightType,
    QueryCategory,
    QuerySuggestion,
    Severity,
)

EXCELLENT_SCORE = 8.0
POOR_SCORE = 3.0

EXCELLENCE_ACTIONS = [
    "Document best practices for other departments",
    "Consider expanding successful initiatives",
]

IMPROVEMENT_ACTIONS = [
    "Review current processes and identify bottlenecks",
    "Implement performance improvement plan",
]

ALERT_ACTIONS = [
    "Schedule performance review meeting",
    "Analyze root causes of performance issues",
]


@dataclass(frozen=True)
class _DepartmentPerformance:
    department: str
    score: float
    efficiency: float

    @property
    def is_excellent(self) -> bool:
        return self.score >= EXCELLENT_SCORE

    @property
    def is_poor(self) -> bool:
        return self.score <= POOR_SCORE


class PerformanceAnalystAgent(FinancialAgent):
    """Specialist agent for performance metrics."""

    id = "performance-analyst"
    name = "Jamie Rivera"
    specialty = "Performance Metrics & Optimization"
    personality = "Results-driven, optimization-focused, always looking for improvement opportunities"
    avatar = "📈"

    def _analyze(self, departments: list[DepartmentAggregate]) -> list[Insight]:
        insights: list[Insight] = []
        for metric in self._measure(departments):
            if metric.is_excellent:
                insights.append(self._insight(
                    type=InsightType.OPPORTUNITY,
                    severity=Severity.MEDIUM,
                    title=f"{metric.department} Performance Excellence",
                    description=f"{metric.department} demonstrates exceptional financial performance",
                    details=self._details(metric),
                    action_items=list(EXCELLENCE_ACTIONS),
                    departments=[metric.department],
                    confidence=0.8,
                ))
            elif metric.is_poor:
                insights.append(self._insight(
                    type=InsightType.RECOMMENDATION,
                    severity=Severity.HIGH,
                    title=f"{metric.department} Performance Improvement",
                    description=f"{metric.department} shows opportunity for performance improvement",
                    details=self._details(metric),
                    action_items=list(IMPROVEMENT_ACTIONS),
                    departments=[metric.department],
                    confidence=0.8,
                ))
        return insights

    def _alert(self, departments: list[DepartmentAggregate]) -> list[Alert]:
        return [
            self._new_alert(
                prefix="performance-alert",
                priority=AlertPriority.HIGH,
                title=f"Performance Alert - {metric.department}",
                message=(
                    f"{metric.department} performance score is critically low "
                    f"({metric.score:.1f}/10)"
                ),
                department=metric.department,
                suggested_actions=list(ALERT_ACTIONS),
            )
            for metric in self._measure(departments)
            if metric.is_poor
        ]

    def _suggest(self, departments: list[DepartmentAggregate]) -> list[QuerySuggestion]:
        return [
            self._suggestion(
                prefix="perf-suggestion",
                query="Compare department performance metrics",
                reason="Identify top and bottom performers for learning opportunities",
                category=QueryCategory.PERFORMANCE,
                relevance_score=0.9,
                estimated_insights=3,
            ),
            self._suggestion(
                prefix="perf-suggestion",
                query="Show efficiency trends by category",
                reason="Track performance improvements over time",
                category=QueryCategory.TREND,
                relevance_score=0.8,
                estimated_insights=2,
            ),
        ]

    @staticmethod
    def _measure(departments: list[DepartmentAggregate]) -> list[_DepartmentPerformance]:
        return [
            _DepartmentPerformance(
                department=dept.name,
                score=performance_score(dept.variance_percentage),
                efficiency=efficiency(dept.budget, dept.actual),
            )
            for dept in departments
        ]

    @staticmethod
    def _details(metric: _DepartmentPerformance) -> str:
        return f"Performance Score: {metric.score:.1f}/10, Efficiency: {metric.efficiency:.1f}%"
