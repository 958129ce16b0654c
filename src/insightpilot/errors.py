"""
Engine errors.

Only malformed input is an error. Empty record sets, single departments
and all-zero budgets are valid states and never raise.
"""

from __future__ import annotations


class InsightPilotError(Exception):
    """Base class for all InsightPilot errors."""


class InvalidRecordError(InsightPilotError, ValueError):
    """A financial record is missing a required field or has a bad metric.

    Raised before any scoring runs, so no partial results are returned.
    """

    def __init__(self, index: int, detail: str) -> None:
        self.index = index
        self.detail = detail
        super().__init__(f"Invalid financial record at index {index}: {detail}")
