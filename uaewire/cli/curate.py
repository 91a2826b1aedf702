"""Photo curation commands."""

import asyncio
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..config.places import PLACE_QUERIES
from ..db import open_store
from ..errors import ProviderExhaustedError
from ..photos import BatchResult, CurationResult
from ..pipeline import CurateBatchRequest, CurateRequest, build_curator

console = Console()


def print_result(result: CurationResult) -> None:
    table = Table(title=f"Photos for {result.slug}")
    table.add_column("#", style="dim")
    table.add_column("Provider", style="cyan")
    table.add_column("Score", style="bold")
    table.add_column("Size")
    table.add_column("Attribution", style="dim")
    for i, photo in enumerate(result.selected, 1):
        marker = " ★" if photo.is_active else ""
        table.add_row(
            f"{i}{marker}",
            photo.provider.value,
            f"{photo.score:.0f}",
            f"{photo.width}x{photo.height}",
            photo.attribution_text or "",
        )
    console.print(table)
    for provider, error in result.provider_errors.items():
        console.print(f"[yellow]{provider}: {error}[/yellow]")
    if not result.success:
        console.print(f"[red]❌ {result.error}[/red]")


def curate_command(
    slug: str = typer.Argument(..., help="Place slug, e.g. dubai-marina"),
    queries: Optional[List[str]] = typer.Option(None, "--query", "-q", help="Stock photo query (repeatable)"),
    top_n: int = typer.Option(3, "--top", "-n", help="Photos to keep"),
    set_active: bool = typer.Option(True, "--activate/--no-activate", help="Replace the active hero image"),
) -> None:
    """Curate photos for one place."""
    try:
        request = CurateRequest(slug=slug, queries=queries or None, top_n=top_n, set_active=set_active)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid options:[/red] {e}")
        raise typer.Exit(2)

    config = Config()
    store = open_store(config)
    try:
        curator = build_curator(config, store, request.providers)
        result = asyncio.run(
            curator.curate(request.slug, request.queries, top_n=request.top_n, set_active=request.set_active)
        )
    except ProviderExhaustedError as e:
        console.print(f"[red]❌ {e.provider} rate limit reached, try again later[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]❌ Curation failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        store.close()

    print_result(result)
    if not result.success:
        raise typer.Exit(1)


def curate_batch_command(
    slugs: Optional[List[str]] = typer.Argument(None, help="Place slugs. Default: every registered place"),
    top_n: int = typer.Option(3, "--top", "-n", help="Photos to keep per place"),
) -> None:
    """Curate photos for several places, at most one batch per invocation."""
    try:
        if slugs:
            request = CurateBatchRequest(items=[{"slug": s} for s in slugs], top_n=top_n)
        else:
            request = CurateBatchRequest(all=True, top_n=top_n)
    except ValidationError as e:
        console.print(f"[red]❌ Invalid options:[/red] {e}")
        raise typer.Exit(2)

    targets = [(slug, None) for slug in PLACE_QUERIES] if request.all else [(i.slug, None) for i in request.items]

    config = Config()
    store = open_store(config)
    try:
        curator = build_curator(config, store, request.providers)
        batch: BatchResult = asyncio.run(curator.curate_batch(targets, top_n=request.top_n))
    except Exception as e:
        console.print(f"[red]❌ Batch curation failed: {e}[/red]")
        raise typer.Exit(1)
    finally:
        store.close()

    for result in batch.results:
        print_result(result)
    console.print(f"\n[bold]{batch.succeeded}/{len(batch.results)} places curated[/bold]")
    if batch.exhausted:
        console.print(f"[red]{batch.exhausted} rate limit reached, batch stopped[/red]")
    if batch.remaining:
        console.print(f"Remaining: {', '.join(batch.remaining)}")
    if batch.exhausted:
        raise typer.Exit(1)
