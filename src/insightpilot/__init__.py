"""
InsightPilot — multi-agent budget variance insights.

Feed it budget-vs-actual records; get back ranked insights, alerts,
follow-up questions and an executive summary.
"""

__version__ = "0.1.0"
__all__ = ["AgentManager", "FinancialRecord", "InvalidRecordError"]

from insightpilot.agents.manager import AgentManager  # noqa: E402
from insightpilot.errors import InvalidRecordError  # noqa: E402
from insightpilot.models.records import FinancialRecord  # noqa: E402
