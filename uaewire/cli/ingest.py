"""Ingest command implementation."""

import asyncio
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import Config
from ..db import open_store
from ..pipeline import IngestionOptions, IngestionPipeline, IngestionSummary, IngestRequest

console = Console()


def print_summary(summary: IngestionSummary) -> None:
    """Print pipeline execution summary."""
    table = Table(title="Pipeline Summary")
    table.add_column("Stage", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Duration", style="yellow")
    table.add_column("Details", style="dim")

    for stage in summary.stages:
        status = "[green]✓[/green]" if stage["success"] else "[red]✗[/red]"
        duration = f"{stage['duration']:.1f}s" if stage["duration"] > 0 else "-"
        details = ", ".join(f"{k}={v}" for k, v in stage["stats"].items()) or (stage["error"] or "")
        table.add_row(stage["name"].title(), status, duration, details)

    console.print(table)

    if summary.query_errors:
        errors = Table(title="Query Errors")
        errors.add_column("Provider", style="cyan")
        errors.add_column("Lane")
        errors.add_column("Query")
        errors.add_column("Error", style="red")
        for error in summary.query_errors:
            errors.add_row(error.provider, error.lane or "-", error.query, error.error)
        console.print(errors)

    style = {"success": "green", "partial": "yellow"}.get(summary.status, "red")
    console.print(
        Panel(
            f"Run {summary.run_id}: [bold]{summary.status}[/bold]\n\n"
            f"Fetched: {summary.fetched}\n"
            f"Saved: {summary.saved}\n"
            f"Skipped: {summary.skipped}\n"
            f"Errors: {summary.errors}\n"
            f"Enriched: {summary.enriched} (unenriched {summary.unenriched})\n"
            f"Duration: {(summary.duration_ms or 0) / 1000:.1f} seconds",
            style=style,
        )
    )


def ingest_command(
    queries: Optional[List[str]] = typer.Option(
        None,
        "--query",
        "-q",
        help="Custom query (repeatable). Default: the lane keyword pack",
    ),
    providers: Optional[List[str]] = typer.Option(
        None,
        "--provider",
        "-p",
        help="google or naver (repeatable). Default: both",
    ),
    result_cap: Optional[int] = typer.Option(None, "--cap", help="Items per query"),
    month: Optional[str] = typer.Option(None, "--month", help="Backfill month (YYYY-MM)"),
    category: Optional[str] = typer.Option(None, "--category", help="Force a corpus category"),
    enrich_limit: int = typer.Option(20, "--enrich", help="Items to enrich with preview images"),
) -> None:
    """Fetch news, filter, dedup, tag and save to the corpus."""
    payload = {
        "queries": queries or None,
        "result_cap": result_cap,
        "month": month,
        "category": category,
        "enrich_limit": enrich_limit,
    }
    if providers:
        payload["providers"] = providers
    try:
        request = IngestRequest(**payload)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid options:[/red] {e}")
        raise typer.Exit(2)

    config = Config()
    store = open_store(config)
    try:
        pipeline = IngestionPipeline(config, store)
        summary = asyncio.run(pipeline.run(IngestionOptions(**request.model_dump())))
    except KeyboardInterrupt:
        console.print("\n[yellow]Pipeline interrupted by user[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]❌ Pipeline failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        store.close()

    print_summary(summary)
    if summary.status == "failed":
        raise typer.Exit(1)
