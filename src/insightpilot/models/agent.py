"""
Agent descriptors — identity cards and per-agent activity counts.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class AgentProfile(BaseModel):
    """Who an agent is, for rendering agent cards."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    specialty: str
    personality: str
    avatar: str


class AgentActivity(BaseModel):
    """How much one agent has to say about a record set.

    ``status`` is ``Ready`` with no data, ``Alerting`` when the agent raised
    any alert, ``Analyzing`` when it produced insights only, else ``Active``.
    """

    model_config = ConfigDict(frozen=True)

    agent_id: str
    insights: int = 0
    alerts: int = 0
    status: str = "Ready"
