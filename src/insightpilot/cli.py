"""
InsightPilot CLI — command-line interface.

Usage:
    insightpilot analyze records.csv
    insightpilot analyze records.yaml --year 2024 --quarter Q1 --json
    insightpilot agents
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from insightpilot import __version__

app = typer.Typer(
    name="insightpilot",
    help="📊 InsightPilot — multi-agent budget variance insights",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

_SEVERITY_COLORS = {
    "critical": "red",
    "urgent": "red",
    "high": "yellow",
    "medium": "blue",
    "low": "green",
}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]InsightPilot[/bold] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """📊 InsightPilot — ranked insights, alerts and summaries from budget data."""


@app.command()
def analyze(
    path: str = typer.Argument(..., help="Record file (.csv, .json, .yaml)"),
    config: str = typer.Option(
        "insightpilot.yaml",
        "--config",
        "-c",
        help="Path to config file",
    ),
    year: int = typer.Option(None, "--year", help="Only analyze records from this year"),
    quarter: str = typer.Option(None, "--quarter", "-q", help="Only analyze this quarter (e.g. Q1)"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
) -> None:
    """Run every agent over a record file."""
    from insightpilot.agents.manager import AgentManager
    from insightpilot.config import InsightPilotConfig
    from insightpilot.connectors.loader import load_records
    from insightpilot.errors import InvalidRecordError
    from insightpilot.models.records import filter_records

    config_path = config if Path(config).exists() else None
    settings = InsightPilotConfig.load(config_path)
    _setup_logging(settings.logging.level)

    try:
        records = load_records(path)
    except (FileNotFoundError, ValueError) as e:
        # InvalidRecordError is a ValueError
        label = "Invalid record" if isinstance(e, InvalidRecordError) else "Error"
        console.print(f"[red]{label}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    records = filter_records(records, year=year, quarter=quarter)
    manager = AgentManager.from_config(settings)

    insights = manager.analyze_all(records)
    alerts = manager.alert_all(records)
    suggestions = manager.suggest_all(records)
    summary = manager.summarize(records)

    if as_json:
        payload = {
            "insights": [i.model_dump(mode="json") for i in insights],
            "alerts": [a.model_dump(mode="json") for a in alerts],
            "suggestions": [s.model_dump(mode="json") for s in suggestions],
            "summary": summary.model_dump(mode="json"),
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(Panel.fit(
        f"[bold blue]📊 InsightPilot[/bold blue] — {len(records)} records",
        subtitle=f"v{__version__}",
    ))
    _display_summary(summary)
    _display_insights(insights)
    _display_alerts(alerts)
    _display_suggestions(suggestions)


@app.command()
def agents() -> None:
    """List the agents in the default roster."""
    from insightpilot.agents.manager import AgentManager

    table = Table(title="Financial Agents")
    table.add_column("Id", style="bold cyan")
    table.add_column("Name")
    table.add_column("Specialty")

    for agent in AgentManager().agents:
        profile = agent.profile()
        table.add_row(profile.id, f"{profile.avatar} {profile.name}", profile.specialty)

    console.print(table)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _display_summary(summary) -> None:  # noqa: ANN001
    """Display the executive summary in the terminal."""
    console.print()
    table = Table(title="Executive Summary", show_lines=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    metrics = summary.metrics
    table.add_row("Total Budget", f"${metrics.total_budget:,.2f}")
    table.add_row("Total Actual", f"${metrics.total_actual:,.2f}")
    table.add_row("Overall Variance", f"{metrics.overall_variance:+.1f}%")
    table.add_row("Departments at Risk", str(metrics.departments_at_risk))
    console.print(table)

    console.print("[bold]Key Findings:[/bold]")
    for finding in summary.key_findings:
        console.print(f"  • {escape(finding)}")
    if summary.recommendations:
        console.print("[bold]Recommendations:[/bold]")
        for i, rec in enumerate(summary.recommendations, 1):
            console.print(f"  {i}. {rec}")
    console.print()


def _display_insights(insights) -> None:  # noqa: ANN001
    if not insights:
        console.print("[dim]No insights.[/dim]")
        return
    console.print("[bold]Insights:[/bold]")
    for i, insight in enumerate(insights, 1):
        level = insight.severity.value
        color = _SEVERITY_COLORS.get(level, "white")
        console.print(
            f"  {i}. [{color}][{level.upper()}][/{color}] {escape(insight.title)} "
            f"— {escape(insight.description)} [dim]({insight.agent_id})[/dim]"
        )
    console.print()


def _display_alerts(alerts) -> None:  # noqa: ANN001
    if not alerts:
        return
    console.print("[bold]Alerts:[/bold]")
    for alert in alerts:
        level = alert.priority.value
        color = _SEVERITY_COLORS.get(level, "white")
        console.print(f"  [{color}][{level.upper()}][/{color}] {escape(alert.title)}: {escape(alert.message)}")
    console.print()


def _display_suggestions(suggestions) -> None:  # noqa: ANN001
    if not suggestions:
        return
    table = Table(title="Suggested Questions")
    table.add_column("Query", style="bold")
    table.add_column("Category")
    table.add_column("Relevance", justify="right")
    for suggestion in suggestions:
        table.add_row(escape(suggestion.query), suggestion.category.value, f"{suggestion.relevance_score:.0%}")
    console.print(table)


if __name__ == "__main__":
    app()
