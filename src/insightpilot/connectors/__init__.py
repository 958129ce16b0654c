"""Connectors — read financial records from files."""

from insightpilot.connectors.loader import load_records

__all__ = ["load_records"]
