"""
Engine output models — insights, alerts, query suggestions, executive summary.

Severity and priority are closed enumerations; pydantic rejects anything
outside them, so no other level can ever be produced.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class InsightType(str, Enum):
    """What kind of observation an insight is."""

    RISK = "risk"
    OPPORTUNITY = "opportunity"
    TREND = "trend"
    ANOMALY = "anomaly"
    RECOMMENDATION = "recommendation"


class Severity(str, Enum):
    """Insight severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlertType(str, Enum):
    """Alert categories."""

    BUDGET_RISK = "budget_risk"
    VARIANCE_ALERT = "variance_alert"
    TREND_CHANGE = "trend_change"
    DEADLINE_ALERT = "deadline_alert"


class AlertPriority(str, Enum):
    """Alert priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class QueryCategory(str, Enum):
    """Topic of a suggested follow-up question."""

    VARIANCE = "variance"
    TREND = "trend"
    PERFORMANCE = "performance"
    FORECAST = "forecast"
    RISK = "risk"


class Insight(BaseModel):
    """A single finding produced by one agent."""

    model_config = ConfigDict(frozen=True)

    id: str
    agent_id: str
    type: InsightType
    severity: Severity
    title: str
    description: str
    details: str = ""
    action_items: list[str] | None = None
    affected_departments: list[str] = Field(default_factory=list)
    confidence: float = Field(ge=0.0, le=1.0)
    timestamp: datetime


class Alert(BaseModel):
    """Something that needs attention now.

    ``acknowledged`` is caller-side state; the engine always emits False.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    agent_id: str
    type: AlertType
    priority: AlertPriority
    title: str
    message: str
    department: str | None = None
    suggested_actions: list[str] = Field(default_factory=list)
    timestamp: datetime
    acknowledged: bool = False

    def acknowledge(self) -> None:
        self.acknowledged = True


class QuerySuggestion(BaseModel):
    """A canned follow-up question worth asking about the data."""

    model_config = ConfigDict(frozen=True)

    id: str
    agent_id: str
    query: str
    reason: str
    category: QueryCategory
    relevance_score: float = Field(ge=0.0, le=1.0)
    estimated_insights: int = Field(default=0, ge=0)


class SummaryMetrics(BaseModel):
    """Headline numbers for the executive summary."""

    model_config = ConfigDict(frozen=True)

    total_budget: float = 0.0
    total_actual: float = 0.0
    overall_variance: float = Field(default=0.0, description="Overall variance in percent")
    departments_at_risk: int = 0
    trends_identified: int = 0


class ExecutiveSummary(BaseModel):
    """One-page roll-up of a full multi-agent analysis."""

    model_config = ConfigDict(frozen=True)

    id: str
    generated_by: str
    period: str
    key_findings: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    metrics: SummaryMetrics = Field(default_factory=SummaryMetrics)
    timestamp: datetime
