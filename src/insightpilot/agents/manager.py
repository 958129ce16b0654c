"""
Agent Manager — fans a record set out to every agent and ranks the results.

The manager:
1. Validates the record set once, up front.
2. Runs each agent in roster order.
3. Merges the outputs and applies one global, stable ranking.
4. Rolls everything up into an executive summary.

The roster is an immutable tuple fixed at construction. Roster order is the
final tie-break whenever two outputs rank equally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from insightpilot.agents.base import FinancialAgent
from insightpilot.agents.budget_analyst import BudgetAnalystAgent
from insightpilot.agents.performance_analyst import PerformanceAnalystAgent
from insightpilot.agents.risk_advisor import RiskAdvisorAgent
from insightpilot.analyzers.aggregation import total_metrics
from insightpilot.analyzers.scoring import PRIORITY_RANK, SEVERITY_RANK, variance_percentage
from insightpilot.config import InsightPilotConfig, SummaryConfig
from insightpilot.ids import IdFactory
from insightpilot.models.agent import AgentActivity
from insightpilot.models.insights import (
    Alert,
    AlertPriority,
    ExecutiveSummary,
    Insight,
    InsightType,
    QuerySuggestion,
    Severity,
    SummaryMetrics,
)
from insightpilot.models.records import RecordInput, coerce_records

logger = logging.getLogger("insightpilot.agents.manager")

AGENT_TYPES: tuple[type[FinancialAgent], ...] = (
    BudgetAnalystAgent,
    RiskAdvisorAgent,
    PerformanceAnalystAgent,
)
AGENT_IDS = frozenset(agent_type.id for agent_type in AGENT_TYPES)

MAX_SUGGESTIONS = 6
MAX_RECOMMENDATIONS = 5


def default_roster(id_factory: IdFactory | None = None) -> tuple[FinancialAgent, ...]:
    """Budget, risk and performance agents, in that order."""
    ids = id_factory or IdFactory()
    return tuple(agent_type(ids) for agent_type in AGENT_TYPES)


class AgentManager:
    """Orchestrates all specialist agents and produces the ranked output.

    Usage::

        manager = AgentManager()
        insights = manager.analyze_all(records)
        summary = manager.summarize(records)
    """

    def __init__(
        self,
        agents: Sequence[FinancialAgent] | None = None,
        *,
        id_factory: IdFactory | None = None,
        summary: SummaryConfig | None = None,
    ) -> None:
        self.ids = id_factory or IdFactory()
        roster = tuple(agents) if agents is not None else default_roster(self.ids)
        self._check_roster(roster)
        self._agents = roster
        self.summary_config = summary or SummaryConfig()
        logger.info("Agent manager initialized with %d agents", len(self._agents))

    @classmethod
    def from_config(
        cls,
        config: InsightPilotConfig | None = None,
        id_factory: IdFactory | None = None,
    ) -> AgentManager:
        """Build a manager whose roster follows the ``agents`` config section."""
        config = config or InsightPilotConfig()
        ids = id_factory or IdFactory()
        enabled = config.agents

        agents: list[FinancialAgent] = []
        if enabled.budget_analysis:
            agents.append(BudgetAnalystAgent(ids))
        if enabled.risk_assessment:
            agents.append(RiskAdvisorAgent(ids))
        if enabled.performance_analysis:
            agents.append(PerformanceAnalystAgent(ids))

        return cls(agents, id_factory=ids, summary=config.summary)

    @staticmethod
    def _check_roster(roster: tuple[FinancialAgent, ...]) -> None:
        if not roster:
            raise ValueError("Agent roster must contain at least one agent")
        seen: set[str] = set()
        for agent in roster:
            if not isinstance(agent, FinancialAgent):
                raise ValueError(f"Not a financial agent: {agent!r}")
            if agent.id not in AGENT_IDS:
                raise ValueError(f"Unknown agent id: {agent.id}")
            if agent.id in seen:
                raise ValueError(f"Duplicate agent id in roster: {agent.id}")
            seen.add(agent.id)

    # ── Roster ─────────────────────────────────────────────────────

    @property
    def agents(self) -> tuple[FinancialAgent, ...]:
        return self._agents

    def get_agent(self, agent_id: str) -> FinancialAgent | None:
        for agent in self._agents:
            if agent.id == agent_id:
                return agent
        return None

    def __len__(self) -> int:
        return len(self._agents)

    # ── Ranked output ──────────────────────────────────────────────

    def analyze_all(self, records: Iterable[RecordInput]) -> list[Insight]:
        """All agents' insights, most severe first.

        Ties on severity go to the higher confidence; remaining ties keep
        roster order (the sort is stable).
        """
        validated = coerce_records(records)
        insights: list[Insight] = []
        for agent in self._agents:
            insights.extend(agent.analyze(validated))

        insights.sort(key=lambda i: (SEVERITY_RANK[i.severity], i.confidence), reverse=True)
        logger.info("Analysis complete: %d insights from %d agents", len(insights), len(self._agents))
        return insights

    def alert_all(self, records: Iterable[RecordInput]) -> list[Alert]:
        """All agents' alerts, most urgent first (stable)."""
        validated = coerce_records(records)
        alerts: list[Alert] = []
        for agent in self._agents:
            alerts.extend(agent.alert(validated))

        alerts.sort(key=lambda a: PRIORITY_RANK[a.priority], reverse=True)
        logger.info("Alerting complete: %d alerts", len(alerts))
        return alerts

    def suggest_all(self, records: Iterable[RecordInput]) -> list[QuerySuggestion]:
        """The six most relevant query suggestions across all agents."""
        validated = coerce_records(records)
        suggestions: list[QuerySuggestion] = []
        for agent in self._agents:
            suggestions.extend(agent.suggest(validated))

        suggestions.sort(key=lambda s: s.relevance_score, reverse=True)
        return suggestions[:MAX_SUGGESTIONS]

    def summarize(self, records: Iterable[RecordInput]) -> ExecutiveSummary:
        """Roll the full analysis up into one executive summary."""
        validated = coerce_records(records)
        total_budget, total_actual = total_metrics(validated)
        insights = self.analyze_all(validated)
        alerts = self.alert_all(validated)

        overall_variance = variance_percentage(total_budget, total_actual)

        department_count = len(dict.fromkeys(r.department.name for r in validated))
        at_risk = {
            name
            for insight in insights
            if insight.severity in (Severity.HIGH, Severity.CRITICAL)
            for name in insight.affected_departments
        }
        urgent_alerts = sum(
            1 for a in alerts if a.priority in (AlertPriority.URGENT, AlertPriority.HIGH)
        )
        sign = "+" if overall_variance > 0 else ""

        recommendations = [item for i in insights for item in (i.action_items or [])]

        return ExecutiveSummary(
            id=self.ids.new_id("exec-summary"),
            generated_by=self.summary_config.generated_by,
            period=self.summary_config.period_label,
            key_findings=[
                f"Overall budget variance: {sign}{overall_variance:.1f}%",
                f"{len(insights)} insights identified across {department_count} departments",
                f"{urgent_alerts} high-priority alerts require attention",
                f"{len(at_risk)} departments show elevated risk levels",
            ],
            risks=[i.title for i in insights if i.type == InsightType.RISK],
            opportunities=[i.title for i in insights if i.type == InsightType.OPPORTUNITY],
            recommendations=recommendations[:MAX_RECOMMENDATIONS],
            metrics=SummaryMetrics(
                total_budget=total_budget,
                total_actual=total_actual,
                overall_variance=overall_variance,
                departments_at_risk=len(at_risk),
                trends_identified=sum(1 for i in insights if i.type == InsightType.TREND),
            ),
            timestamp=self.ids.now(),
        )

    # ── Per-agent activity ─────────────────────────────────────────

    def agent_activity(self, agent_id: str, records: Iterable[RecordInput]) -> AgentActivity:
        """Insight/alert counts and a status label for one agent."""
        validated = coerce_records(records)
        agent = self.get_agent(agent_id)
        if agent is None or not validated:
            return AgentActivity(agent_id=agent_id)

        insights = agent.analyze(validated)
        alerts = agent.alert(validated)
        if alerts:
            status = "Alerting"
        elif insights:
            status = "Analyzing"
        else:
            status = "Active"
        return AgentActivity(
            agent_id=agent_id,
            insights=len(insights),
            alerts=len(alerts),
            status=status,
        )

    def activity(self, records: Iterable[RecordInput]) -> list[AgentActivity]:
        """Activity for every agent in the roster, in roster order."""
        validated = coerce_records(records)
        return [self.agent_activity(agent.id, validated) for agent in self._agents]
