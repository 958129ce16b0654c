"""
Base agent — shared contract for all InsightPilot agents.

Each agent is a rule-based specialist that reads the same record set and
reports on it from its own angle. Agents hold no state between calls: the
same records always produce the same findings, differing only in ids and
timestamps.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from insightpilot.analyzers.aggregation import DepartmentAggregate, aggregate_by_department
from insightpilot.ids import IdFactory
from insightpilot.models.agent import AgentProfile
from insightpilot.models.insights import (
    Alert,
    AlertPriority,
    AlertType,
    Insight,
    InsightType,
    QueryCategory,
    QuerySuggestion,
    Severity,
)
from insightpilot.models.records import RecordInput, coerce_records

logger = logging.getLogger("insightpilot.agents")


class FinancialAgent(ABC):
    """Abstract base class for all InsightPilot agents.

    Subclass this to create a new specialist. Each agent:
    - Has an identity (id, display name, specialty, personality, avatar).
    - Works on department aggregates built from the validated records.
    - Returns insights, alerts and query suggestions.
    """

    id: str = "base-agent"
    name: str = "Base Agent"
    specialty: str = "General financial analysis"
    personality: str = ""
    avatar: str = "🤖"

    def __init__(self, id_factory: IdFactory | None = None) -> None:
        self.ids = id_factory or IdFactory()

    def profile(self) -> AgentProfile:
        return AgentProfile(
            id=self.id,
            name=self.name,
            specialty=self.specialty,
            personality=self.personality,
            avatar=self.avatar,
        )

    def analyze(self, records: Iterable[RecordInput]) -> list[Insight]:
        """Produce insights for the given records.

        Raises:
            InvalidRecordError: If any record is malformed.
        """
        insights = self._analyze(self._departments(records))
        logger.debug("[%s] %d insights", self.id, len(insights))
        return insights

    def alert(self, records: Iterable[RecordInput]) -> list[Alert]:
        """Produce alerts for the given records."""
        alerts = self._alert(self._departments(records))
        logger.debug("[%s] %d alerts", self.id, len(alerts))
        return alerts

    def suggest(self, records: Iterable[RecordInput]) -> list[QuerySuggestion]:
        """Produce follow-up query suggestions for the given records."""
        suggestions = self._suggest(self._departments(records))
        logger.debug("[%s] %d suggestions", self.id, len(suggestions))
        return suggestions

    @abstractmethod
    def _analyze(self, departments: list[DepartmentAggregate]) -> list[Insight]:
        ...

    @abstractmethod
    def _alert(self, departments: list[DepartmentAggregate]) -> list[Alert]:
        ...

    @abstractmethod
    def _suggest(self, departments: list[DepartmentAggregate]) -> list[QuerySuggestion]:
        ...

    def _departments(self, records: Iterable[RecordInput]) -> list[DepartmentAggregate]:
        return aggregate_by_department(coerce_records(records))

    # ── Output builders ────────────────────────────────────────────

    def _insight(
        self,
        *,
        type: InsightType,
        severity: Severity,
        title: str,
        description: str,
        details: str,
        action_items: list[str] | None,
        departments: list[str],
        confidence: float,
    ) -> Insight:
        return Insight(
            id=self.ids.new_id("insight"),
            agent_id=self.id,
            type=type,
            severity=severity,
            title=title,
            description=description,
            details=details,
            action_items=action_items,
            affected_departments=departments,
            confidence=confidence,
            timestamp=self.ids.now(),
        )

    def _new_alert(
        self,
        *,
        prefix: str,
        priority: AlertPriority,
        title: str,
        message: str,
        department: str | None,
        suggested_actions: list[str],
        type: AlertType = AlertType.BUDGET_RISK,
    ) -> Alert:
        return Alert(
            id=self.ids.new_id(prefix),
            agent_id=self.id,
            type=type,
            priority=priority,
            title=title,
            message=message,
            department=department,
            suggested_actions=suggested_actions,
            timestamp=self.ids.now(),
        )

    def _suggestion(
        self,
        *,
        prefix: str,
        query: str,
        reason: str,
        category: QueryCategory,
        relevance_score: float,
        estimated_insights: int,
    ) -> QuerySuggestion:
        return QuerySuggestion(
            id=self.ids.new_id(prefix),
            agent_id=self.id,
            query=query,
            reason=reason,
            category=category,
            relevance_score=relevance_score,
            estimated_insights=estimated_insights,
        )
