"""
Risk Advisor Agent — scores each department's financial risk.

Risk score is half the absolute budget variance, capped at 10. Departments
scoring 7 or more are reported (critical from 8 up) and alerted on.
"""

from __future__ import annotations

from dataclasses import dataclass

from insightpilot.agents.base import FinancialAgent
from insightpilot.analyzers.aggregation import DepartmentAggregate
from insightpilot.analyzers.scoring import risk_score
from insightpilot.models.insights import (
    Alert,
    AlertPriority,
    Insight,
    InsightType,
    QueryCategory,
    QuerySuggestion,
    Severity,
)

HIGH_RISK_SCORE = 7.0
CRITICAL_RISK_SCORE = 8.0

RISK_ACTIONS = [
    "Conduct comprehensive financial review",
    "Implement enhanced monitoring controls",
    "Develop risk mitigation plan",
]


@dataclass(frozen=True)
class _DepartmentRisk:
    department: str
    variance_percentage: float
    score: float
    severity: Severity


class RiskAdvisorAgent(FinancialAgent):
    """Specialist agent for risk assessment."""

    id = "risk-advisor"
    name = "Morgan Taylor"
    specialty = "Risk Assessment & Strategic Planning"
    personality = "Strategic thinker, risk-aware, focused on long-term financial health"
    avatar = "🛡️"

    def _analyze(self, departments: list[DepartmentAggregate]) -> list[Insight]:
        return [
            self._insight(
                type=InsightType.RISK,
                severity=risk.severity,
                title=f"High Financial Risk - {risk.department}",
                description=f"{risk.department} department shows high financial risk indicators",
                details=(
                    f"Risk Score: {risk.score:.1f}/10, "
                    f"Variance: {risk.variance_percentage:.1f}%"
                ),
                action_items=list(RISK_ACTIONS),
                departments=[risk.department],
                confidence=0.85,
            )
            for risk in self._assess(departments)
        ]

    def _alert(self, departments: list[DepartmentAggregate]) -> list[Alert]:
        return [
            self._new_alert(
                prefix="risk-alert",
                priority=AlertPriority.URGENT if risk.severity == Severity.CRITICAL else AlertPriority.HIGH,
                title=f"High Financial Risk - {risk.department}",
                message=f"{risk.department} department shows high financial risk indicators",
                department=risk.department,
                suggested_actions=list(RISK_ACTIONS),
            )
            for risk in self._assess(departments)
        ]

    def _suggest(self, departments: list[DepartmentAggregate]) -> list[QuerySuggestion]:
        return [
            self._suggestion(
                prefix="risk-suggestion",
                query="Show me departments with highest financial risk",
                reason="Identify departments requiring immediate attention",
                category=QueryCategory.RISK,
                relevance_score=0.9,
                estimated_insights=4,
            ),
            self._suggestion(
                prefix="risk-suggestion",
                query="Analyze spending volatility by category",
                reason="Understand expense predictability and control",
                category=QueryCategory.VARIANCE,
                relevance_score=0.8,
                estimated_insights=3,
            ),
        ]

    def _assess(self, departments: list[DepartmentAggregate]) -> list[_DepartmentRisk]:
        risks = []
        for dept in departments:
            pct = dept.variance_percentage
            score = risk_score(pct)
            if score < HIGH_RISK_SCORE:
                continue
            risks.append(_DepartmentRisk(
                department=dept.name,
                variance_percentage=pct,
                score=score,
                severity=Severity.CRITICAL if score >= CRITICAL_RISK_SCORE else Severity.HIGH,
            ))
        return risks
