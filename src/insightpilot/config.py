"""
InsightPilot configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
Scoring thresholds are fixed and deliberately not configurable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class AgentRosterConfig(BaseModel):
    """Which agents take part in an analysis.

    Disabled agents are dropped; the remaining ones keep their fixed order
    (budget, risk, performance).
    """

    budget_analysis: bool = True
    risk_assessment: bool = True
    performance_analysis: bool = True


class SummaryConfig(BaseModel):
    """Labels stamped on the executive summary."""

    generated_by: str = Field(default="Multi-Agent Analysis")
    period_label: str = Field(default="Current Period")


class LoggingConfig(BaseModel):
    """Log level used by the CLI."""

    level: str = Field(default="WARNING")

    @field_validator("level")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()


class InsightPilotConfig(BaseModel):
    """Root configuration for InsightPilot."""

    agents: AgentRosterConfig = Field(default_factory=AgentRosterConfig)
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> InsightPilotConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # 2. Override from environment variables
        env_level = os.environ.get("INSIGHTPILOT_LOG_LEVEL")
        env_period = os.environ.get("INSIGHTPILOT_PERIOD_LABEL")

        if env_level:
            log = data.get("logging", {})
            log["level"] = env_level
            data["logging"] = log

        if env_period:
            summary = data.get("summary", {})
            summary["period_label"] = env_period
            data["summary"] = summary

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
