"""Runs command implementation."""

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..db import open_store

console = Console()


def runs_command(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of runs to show"),
) -> None:
    """Show recent ingestion runs."""
    config = Config()
    if not config.use_postgres():
        console.print("[yellow]No Postgres store configured; run history is not persisted.[/yellow]")
        return

    store = open_store(config)
    try:
        runs = store.recent_runs(limit)
    finally:
        store.close()

    table = Table(title="Recent Runs")
    table.add_column("ID", style="dim")
    table.add_column("Provider", style="cyan")
    table.add_column("Started")
    table.add_column("Status", style="bold")
    table.add_column("Fetched", justify="right")
    table.add_column("Saved", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Errors", justify="right")
    table.add_column("Duration", style="yellow")

    colors = {"success": "green", "partial": "yellow", "failed": "red", "pending": "dim"}
    for run in runs:
        status = run.status.value
        duration = f"{run.duration_ms / 1000:.1f}s" if run.duration_ms is not None else "-"
        table.add_row(
            str(run.id),
            run.provider,
            run.started_at.strftime("%Y-%m-%d %H:%M"),
            f"[{colors[status]}]{status}[/{colors[status]}]",
            str(run.fetched),
            str(run.saved),
            str(run.skipped),
            str(run.errors),
            duration,
        )
    console.print(table)
