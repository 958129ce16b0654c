"""
Record loader — read financial records from CSV, JSON or YAML files.

CSV files are flat, one record per row::

    department,category,year,quarter,budget,actual,forecast,prior_year
    Sales,Revenue,2024,Q1,500000,520000,510000,480000

JSON and YAML files hold a list of nested records (or a mapping with a
``records`` key), in the same shape as :class:`FinancialRecord`.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from insightpilot.models.records import FinancialRecord, coerce_records

logger = logging.getLogger("insightpilot.connectors.loader")

# Common column name mappings
_COLUMN_ALIASES: dict[str, list[str]] = {
    "record_id": ["id", "record_id"],
    "department": ["department", "department_name", "dept", "cost_center"],
    "department_id": ["department_id", "dept_id"],
    "category": ["category", "category_name", "account", "gl_category"],
    "category_id": ["category_id"],
    "year": ["year", "fiscal_year", "fy"],
    "quarter": ["quarter", "fiscal_quarter", "qtr"],
    "budget": ["budget", "budget_amount", "budgeted", "plan"],
    "actual": ["actual", "actual_amount", "actuals", "spent"],
    "forecast": ["forecast", "forecast_amount"],
    "prior_year": ["prior_year", "prioryear", "prior_year_amount", "last_year"],
}

_REQUIRED = ("department", "category", "year", "quarter", "budget", "actual")
_METRICS = ("budget", "actual", "forecast", "prior_year")


def load_records(path: str | Path) -> list[FinancialRecord]:
    """Read and validate a record file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the extension is unsupported or the document has the
            wrong shape.
        InvalidRecordError: If a record fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Record file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        raw = _read_csv(path)
    elif suffix == ".json":
        raw = _unwrap(json.loads(path.read_text()), path)
    elif suffix in (".yaml", ".yml"):
        raw = _unwrap(yaml.safe_load(path.read_text()), path)
    else:
        raise ValueError(f"Unsupported record file type: {path.suffix}")

    records = coerce_records(raw)
    logger.info("Loaded %d records from %s", len(records), path.name)
    return records


def _unwrap(document: Any, path: Path) -> list[Any]:
    if document is None:
        return []
    if isinstance(document, dict) and "records" in document:
        document = document["records"]
    if not isinstance(document, list):
        raise ValueError(f"{path.name}: expected a list of records")
    return document


def _read_csv(path: Path) -> list[dict[str, Any]]:
    df = pd.read_csv(path)
    df.columns = df.columns.str.strip().str.lower()

    col_map = _detect_columns(df)
    missing = [name for name in _REQUIRED if name not in col_map]
    if missing:
        raise ValueError(f"{path.name}: missing required columns: {', '.join(missing)}")

    df = df.rename(columns={src: dst for dst, src in col_map.items()})
    for column in _METRICS:
        if column in df.columns:
            df[column] = _to_number(df[column])

    rows = df.to_dict(orient="records")
    return [_nest(row) for row in rows]


def _detect_columns(df: pd.DataFrame) -> dict[str, str]:
    """Auto-detect column mappings from the DataFrame."""
    col_map: dict[str, str] = {}
    df_cols = set(df.columns)

    for field, aliases in _COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in df_cols:
                col_map[field] = alias
                break

    return col_map


def _nest(row: dict[str, Any]) -> dict[str, Any]:
    """Turn a flat CSV row into the nested record shape."""
    department = _text(row["department"])
    category = _text(row["category"])
    metrics = {"budget": row["budget"], "actual": row["actual"]}
    for optional in ("forecast", "prior_year"):
        if optional in row and not pd.isna(row[optional]):
            metrics[optional] = row[optional]

    nested: dict[str, Any] = {
        "department": {"id": _text(row.get("department_id")) or _slug(department), "name": department},
        "category": {"id": _text(row.get("category_id")) or _slug(category), "name": category},
        "period": {"year": row["year"], "quarter": row["quarter"]},
        "metrics": metrics,
    }
    record_id = _text(row.get("record_id"))
    if record_id:
        nested["id"] = record_id
    return nested


def _slug(value: Any) -> Any:
    # Blank cells arrive as None and are passed on so validation reports them.
    if not isinstance(value, str):
        return value
    return re.sub(r"[^a-z0-9]+", "-", value.strip().lower()).strip("-")


def _text(value: Any) -> str | None:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    return str(value)


def _to_number(column: pd.Series) -> pd.Series:
    """Parse a metric column; cells that are not numbers keep their text.

    Metrics are validated strictly, so leftover text is reported as an
    invalid record instead of being silently dropped.
    """
    numeric = pd.to_numeric(column, errors="coerce")
    return numeric.where(numeric.notna() | column.isna(), column)
