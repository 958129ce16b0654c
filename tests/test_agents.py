"""
Tests for the specialist agents — budget analyst, risk advisor, performance analyst.

Agents are rule-based, so every test runs on small hand-built record sets
with a deterministic id factory.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from insightpilot.agents.budget_analyst import BudgetAnalystAgent
from insightpilot.agents.performance_analyst import PerformanceAnalystAgent
from insightpilot.agents.risk_advisor import RiskAdvisorAgent
from insightpilot.errors import InvalidRecordError
from insightpilot.ids import SequentialIdFactory
from insightpilot.models.insights import (
    AlertPriority,
    AlertType,
    InsightType,
    QueryCategory,
    Severity,
)
from insightpilot.models.records import FinancialRecord

FIXED_TIME = datetime(2024, 4, 1, 9, 30, tzinfo=timezone.utc)

# ── Fixtures ────────────────────────────────────────────────────────


def _record(department: str, budget: float, actual: float, quarter: str = "Q1") -> FinancialRecord:
    return FinancialRecord.model_validate({
        "department": {"id": department.lower(), "name": department},
        "category": {"id": "ops", "name": "Operations"},
        "period": {"year": 2024, "quarter": quarter},
        "metrics": {"budget": budget, "actual": actual},
    })


def _sample_records() -> list[FinancialRecord]:
    """Five departments, all within 10% of budget."""
    return [
        _record("Sales", 500_000, 520_000),
        _record("Marketing", 200_000, 185_000),
        _record("Operations", 300_000, 315_000),
        _record("HR", 150_000, 145_000),
        _record("IT", 180_000, 195_000),
    ]


@pytest.fixture
def ids() -> SequentialIdFactory:
    return SequentialIdFactory(FIXED_TIME)


# ── Budget analyst ──────────────────────────────────────────────────


class TestBudgetAnalystAgent:
    def test_identity(self) -> None:
        agent = BudgetAnalystAgent()
        profile = agent.profile()
        assert profile.id == "budget-analyst"
        assert profile.name == "Alex Chen"
        assert "Budget" in profile.specialty
        assert profile.avatar

    def test_small_variance_is_ignored(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        records = [_record("Marketing", 500_000, 520_000)]
        assert agent.analyze(records) == []
        assert agent.alert(records) == []
        assert agent.suggest(records) == []

    def test_twenty_percent_over_is_critical(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        records = [_record("IT", 200_000, 240_000)]

        (insight,) = agent.analyze(records)
        assert insight.type == InsightType.RISK
        assert insight.severity == Severity.CRITICAL
        assert insight.agent_id == "budget-analyst"
        assert insight.title == "IT Department Variance Alert"
        assert insight.description == "IT is over budget by 20.0%"
        assert insight.affected_departments == ["IT"]
        assert insight.confidence == 0.9
        assert insight.action_items is not None
        assert "Implement cost control measures" in insight.action_items
        assert insight.timestamp == FIXED_TIME

        (alert,) = agent.alert(records)
        assert alert.priority == AlertPriority.URGENT
        assert alert.type == AlertType.BUDGET_RISK
        assert alert.department == "IT"
        assert alert.acknowledged is False
        assert len(alert.suggested_actions) == 3

    def test_ten_percent_boundary_is_medium(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        records = [_record("Legal", 200_000, 220_000)]
        (insight,) = agent.analyze(records)
        assert insight.severity == Severity.MEDIUM
        assert agent.alert(records) == []

    def test_under_budget_is_opportunity(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        (insight,) = agent.analyze([_record("HR", 200_000, 180_000)])
        assert insight.type == InsightType.OPPORTUNITY
        assert insight.severity == Severity.MEDIUM
        assert insight.description == "HR is under budget by 10.0%"
        assert insight.action_items == [
            "Analyze underspending reasons",
            "Consider reallocating unused budget",
            "Accelerate planned initiatives",
        ]

    def test_large_underspend_alerts_too(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        (alert,) = agent.alert([_record("HR", 100_000, 20_000)])
        assert alert.priority == AlertPriority.URGENT
        assert "-80.0%" in alert.message

    def test_suggests_top_three_variances(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        records = [
            _record("A", 100_000, 112_000),  # 12%
            _record("B", 100_000, 150_000),  # 50%
            _record("C", 100_000, 85_000),  # -15%
            _record("D", 100_000, 111_000),  # 11%
            _record("E", 100_000, 105_000),  # 5%, ignored
        ]
        suggestions = agent.suggest(records)
        assert [s.query for s in suggestions] == [
            "What's driving the B budget variance?",
            "What's driving the C budget variance?",
            "What's driving the A budget variance?",
        ]
        assert [s.relevance_score for s in suggestions] == pytest.approx([1.0, 0.75, 0.6])
        assert all(s.category == QueryCategory.VARIANCE for s in suggestions)
        assert all(s.estimated_insights == 3 for s in suggestions)

    def test_zero_budget_never_flags(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        records = [_record("Facilities", 0, 75_000)]
        assert agent.analyze(records) == []
        assert agent.alert(records) == []

    def test_quarters_are_summed(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        records = [
            _record("Sales", 100_000, 100_000, quarter="Q1"),
            _record("Sales", 300_000, 360_000, quarter="Q2"),
        ]
        (insight,) = agent.analyze(records)
        # Summed: 460k vs 400k = 15%; averaging the quarters would give 10%.
        assert insight.severity == Severity.HIGH
        assert "15.0%" in insight.description

    def test_accepts_plain_mappings(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        raw = _record("IT", 200_000, 240_000).model_dump(by_alias=True)
        assert len(agent.analyze([raw])) == 1

    def test_malformed_record_fails_fast(self, ids: SequentialIdFactory) -> None:
        agent = BudgetAnalystAgent(ids)
        bad = {"department": {"id": "it", "name": "IT"}, "metrics": {"budget": 1}}
        with pytest.raises(InvalidRecordError):
            agent.analyze([bad])


# ── Risk advisor ────────────────────────────────────────────────────


class TestRiskAdvisorAgent:
    def test_identity(self) -> None:
        agent = RiskAdvisorAgent()
        assert agent.id == "risk-advisor"
        assert agent.name == "Morgan Taylor"

    def test_below_threshold(self, ids: SequentialIdFactory) -> None:
        agent = RiskAdvisorAgent(ids)
        # risk score = 13 / 2 = 6.5
        records = [_record("IT", 100_000, 113_000)]
        assert agent.analyze(records) == []
        assert agent.alert(records) == []

    def test_high_risk(self, ids: SequentialIdFactory) -> None:
        agent = RiskAdvisorAgent(ids)
        # risk score = 15 / 2 = 7.5
        records = [_record("Legal", 200_000, 230_000)]
        (insight,) = agent.analyze(records)
        assert insight.type == InsightType.RISK
        assert insight.severity == Severity.HIGH
        assert insight.confidence == 0.85
        assert insight.title == "High Financial Risk - Legal"
        assert insight.details == "Risk Score: 7.5/10, Variance: 15.0%"

        (alert,) = agent.alert(records)
        assert alert.priority == AlertPriority.HIGH
        assert alert.department == "Legal"

    def test_critical_risk(self, ids: SequentialIdFactory) -> None:
        agent = RiskAdvisorAgent(ids)
        records = [_record("IT", 100_000, 60_000)]
        (insight,) = agent.analyze(records)
        assert insight.severity == Severity.CRITICAL
        assert "Risk Score: 10.0/10" in insight.details
        (alert,) = agent.alert(records)
        assert alert.priority == AlertPriority.URGENT

    def test_fixed_suggestions(self, ids: SequentialIdFactory) -> None:
        agent = RiskAdvisorAgent(ids)
        for records in ([], _sample_records()):
            suggestions = agent.suggest(records)
            assert [s.query for s in suggestions] == [
                "Show me departments with highest financial risk",
                "Analyze spending volatility by category",
            ]
            assert [s.category for s in suggestions] == [QueryCategory.RISK, QueryCategory.VARIANCE]
            assert [s.relevance_score for s in suggestions] == [0.9, 0.8]
            assert [s.estimated_insights for s in suggestions] == [4, 3]

    def test_zero_budget_never_flags(self, ids: SequentialIdFactory) -> None:
        agent = RiskAdvisorAgent(ids)
        assert agent.alert([_record("Facilities", 0, 1_000_000)]) == []


# ── Performance analyst ─────────────────────────────────────────────


class TestPerformanceAnalystAgent:
    def test_identity(self) -> None:
        agent = PerformanceAnalystAgent()
        assert agent.id == "performance-analyst"
        assert agent.name == "Jamie Rivera"

    def test_excellent_performance(self, ids: SequentialIdFactory) -> None:
        agent = PerformanceAnalystAgent(ids)
        insights = agent.analyze(_sample_records())
        assert len(insights) == 5
        assert all(i.type == InsightType.OPPORTUNITY for i in insights)
        assert all(i.severity == Severity.MEDIUM for i in insights)
        assert insights[0].title == "Sales Performance Excellence"
        assert insights[0].details.startswith("Performance Score: 9.6/10")
        assert agent.alert(_sample_records()) == []

    def test_poor_performance(self, ids: SequentialIdFactory) -> None:
        agent = PerformanceAnalystAgent(ids)
        # 80% under budget: score = 10 - 8 = 2
        records = [_record("HR", 100_000, 20_000)]
        (insight,) = agent.analyze(records)
        assert insight.type == InsightType.RECOMMENDATION
        assert insight.severity == Severity.HIGH
        assert insight.title == "HR Performance Improvement"
        assert insight.details == "Performance Score: 2.0/10, Efficiency: 500.0%"

        (alert,) = agent.alert(records)
        assert alert.priority == AlertPriority.HIGH
        assert alert.message == "HR performance score is critically low (2.0/10)"

    def test_middle_scores_are_quiet(self, ids: SequentialIdFactory) -> None:
        agent = PerformanceAnalystAgent(ids)
        # 40% over: score = 6
        records = [_record("Ops", 100_000, 140_000)]
        assert agent.analyze(records) == []
        assert agent.alert(records) == []

    def test_fixed_suggestions(self, ids: SequentialIdFactory) -> None:
        agent = PerformanceAnalystAgent(ids)
        suggestions = agent.suggest([])
        assert [s.category for s in suggestions] == [QueryCategory.PERFORMANCE, QueryCategory.TREND]
        assert [s.estimated_insights for s in suggestions] == [3, 2]


# ── Shared behaviour ────────────────────────────────────────────────


class TestAgentContract:
    @pytest.mark.parametrize("agent_type", [BudgetAnalystAgent, RiskAdvisorAgent, PerformanceAnalystAgent])
    def test_empty_input(self, agent_type) -> None:  # noqa: ANN001
        agent = agent_type()
        assert agent.analyze([]) == []
        assert agent.alert([]) == []

    @pytest.mark.parametrize("agent_type", [BudgetAnalystAgent, RiskAdvisorAgent, PerformanceAnalystAgent])
    def test_repeat_calls_match(self, agent_type) -> None:  # noqa: ANN001
        agent = agent_type()
        records = _sample_records() + [_record("Legal", 100_000, 160_000)]
        volatile = {"id", "timestamp"}
        first = [i.model_dump(exclude=volatile) for i in agent.analyze(records)]
        second = [i.model_dump(exclude=volatile) for i in agent.analyze(records)]
        assert first == second

    def test_ids_are_unique(self) -> None:
        agent = BudgetAnalystAgent()
        records = [_record(name, 100_000, 150_000) for name in ("A", "B", "C", "D")]
        ids = [i.id for i in agent.analyze(records)]
        assert len(set(ids)) == len(ids)
        assert all(i.startswith("insight-") for i in ids)

    def test_deterministic_ids(self, ids: SequentialIdFactory) -> None:
        agent = RiskAdvisorAgent(ids)
        suggestions = agent.suggest([])
        assert [s.id for s in suggestions] == ["risk-suggestion-1", "risk-suggestion-2"]
