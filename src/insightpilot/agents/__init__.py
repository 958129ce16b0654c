"""Agents package — rule-based financial analysis agents."""
from insightpilot.agents.base import FinancialAgent
from insightpilot.agents.budget_analyst import BudgetAnalystAgent
from insightpilot.agents.manager import AgentManager, default_roster
from insightpilot.agents.performance_analyst import PerformanceAnalystAgent
from insightpilot.agents.risk_advisor import RiskAdvisorAgent

__all__ = [
    "AgentManager",
    "BudgetAnalystAgent",
    "FinancialAgent",
    "PerformanceAnalystAgent",
    "RiskAdvisorAgent",
    "default_roster",
]
