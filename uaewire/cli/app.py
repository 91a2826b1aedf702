"""Main CLI application."""

import logging

import typer
from dotenv import load_dotenv
from rich.logging import RichHandler

# Load .env file if it exists
load_dotenv()

from .curate import curate_batch_command, curate_command
from .ingest import ingest_command
from .init import init_command
from .runs import runs_command

app = typer.Typer(
    name="uaewire",
    help="UAE news ingestion and place photo curation",
    no_args_is_help=True,
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


# Register commands
app.command("init")(init_command)
app.command("ingest")(ingest_command)
app.command("curate")(curate_command)
app.command("curate-batch")(curate_batch_command)
app.command("runs")(runs_command)


if __name__ == "__main__":
    app()
