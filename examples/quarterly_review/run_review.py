"""
Example: review one quarter of department budgets.

Run:
    python examples/quarterly_review/run_review.py
    python examples/quarterly_review/run_review.py Q1

Or via CLI:
    insightpilot analyze examples/quarterly_review/records.csv --quarter Q2
"""

import sys
from pathlib import Path

from insightpilot import AgentManager
from insightpilot.connectors import load_records
from insightpilot.models.records import filter_records

CSV_PATH = Path(__file__).parent.resolve() / "records.csv"


def main() -> None:
    quarter = sys.argv[1] if len(sys.argv) > 1 else "Q2"
    records = filter_records(load_records(CSV_PATH), year=2024, quarter=quarter)

    manager = AgentManager()
    summary = manager.summarize(records)

    print(f"=== 2024-{quarter} budget review ===")
    for finding in summary.key_findings:
        print(f"  • {finding}")

    print("\nTop insights:")
    for insight in manager.analyze_all(records)[:5]:
        print(f"  [{insight.severity.value.upper()}] {insight.title} ({insight.agent_id})")

    print("\nAlerts:")
    for alert in manager.alert_all(records):
        print(f"  [{alert.priority.value.upper()}] {alert.title}")

    print("\nWorth asking:")
    for suggestion in manager.suggest_all(records):
        print(f"  ? {suggestion.query}")


if __name__ == "__main__":
    main()
