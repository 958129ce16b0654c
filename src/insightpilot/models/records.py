"""
Financial record model — the engine's only input shape.

A record is one budget/actual line for a department, category and period.
Records are not unique: several records for the same department are summed
during aggregation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from insightpilot.errors import InvalidRecordError

logger = logging.getLogger("insightpilot.models.records")


class Department(BaseModel):
    """Organisational unit a record is booked against."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Category(BaseModel):
    """Spend or revenue category (Personnel, Technology, ...)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Period(BaseModel):
    """Fiscal period, e.g. ``2024`` / ``Q1``."""

    model_config = ConfigDict(frozen=True)

    year: int
    quarter: str

    @field_validator("quarter", mode="before")
    @classmethod
    def _normalize_quarter(cls, value: Any) -> Any:
        # Spreadsheets often carry the quarter as a bare number.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"Q{int(value)}"
        return value

    @property
    def label(self) -> str:
        return f"{self.year}-{self.quarter}"


class RecordMetrics(BaseModel):
    """Budget, actual, forecast and prior-year amounts.

    NaN and infinity are rejected so they can never leak into scoring and
    corrupt severity classification or sort order. Amounts are strict: ints
    and floats only, never bools or numeric strings.

    ``forecast`` and ``prior_year`` are carried but never scored, so they
    default to 0 when a source has no such columns.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)

    budget: float = Field(strict=True)
    actual: float = Field(strict=True)
    forecast: float = Field(default=0.0, strict=True)
    prior_year: float = Field(default=0.0, alias="priorYear", strict=True)


class FinancialRecord(BaseModel):
    """A single budget-vs-actual line item."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    department: Department
    category: Category
    period: Period
    metrics: RecordMetrics

    @property
    def variance(self) -> float:
        return self.metrics.actual - self.metrics.budget


RecordInput = Union[FinancialRecord, Mapping[str, Any]]


def coerce_records(records: Iterable[RecordInput]) -> list[FinancialRecord]:
    """Validate a record set up front.

    Accepts :class:`FinancialRecord` instances or plain mappings (parsed
    JSON/YAML). The whole set is validated before anything is scored.

    Raises:
        InvalidRecordError: On the first record that fails validation.
    """
    validated: list[FinancialRecord] = []
    for index, item in enumerate(records):
        if isinstance(item, FinancialRecord):
            validated.append(item)
            continue
        try:
            validated.append(FinancialRecord.model_validate(item))
        except ValidationError as e:
            logger.warning("Rejected financial record at index %d: %s", index, e)
            raise InvalidRecordError(index, str(e)) from e
    return validated


def filter_records(
    records: Iterable[FinancialRecord],
    year: int | None = None,
    quarter: str | None = None,
    department: str | None = None,
) -> list[FinancialRecord]:
    """Pre-filter a record set to one period and/or department.

    The engine itself never filters by period: whatever slice is passed in
    is analysed as a whole. Callers use this to pick the slice.
    """
    selected = []
    for record in records:
        if year is not None and record.period.year != year:
            continue
        if quarter is not None and record.period.quarter.upper() != quarter.upper():
            continue
        if department is not None and record.department.name != department:
            continue
        selected.append(record)
    return selected
