"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config, ConfigModel, save_config
from ..config.loader import DEFAULT_CONFIG_PATH
from ..config.models import PostgresConfig
from ..db.init import init_database, validate_connection

console = Console()


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file to write",
    ),
    postgres: bool = typer.Option(
        False,
        "--postgres/--memory",
        help="Persist to Postgres instead of the in-memory store",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("uaewire", "--db-name", help="Database name"),
    db_user: str = typer.Option("uaewire", "--db-user", help="Database user"),
) -> None:
    """Write a default configuration and, with --postgres, create the schema."""
    console.print(Panel.fit("uaewire - Initialization", style="bold blue"))

    config = ConfigModel(
        postgres=PostgresConfig(
            enabled=postgres,
            host=db_host,
            port=db_port,
            database=db_name,
            user=db_user,
            password_env="UAEWIRE_DB_PASSWORD",
        ),
    )
    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    if postgres:
        db_config = Config(config_path, model=config).get_db_config()

        console.print("\n[bold]Testing database connection...[/bold]")
        if not db_config.get("password") or not validate_connection(db_config):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                "Please ensure Postgres is running and credentials are correct.\n"
                "Set the password via environment variable: [bold]export UAEWIRE_DB_PASSWORD=your_password[/bold]"
            )
            raise typer.Exit(1)
        console.print("✅ Database connection successful")

        console.print("\n[bold]Initializing database schema...[/bold]")
        try:
            init_database(db_config)
            console.print("✅ Database schema initialized")
        except Exception as e:
            console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
            raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ uaewire initialized![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Store: {'postgres' if postgres else 'in-memory'}\n\n"
            f"Next steps:\n"
            f"1. Set provider keys: [bold]NAVER_CLIENT_ID, NAVER_CLIENT_SECRET, "
            f"GOOGLE_PLACES_API_KEY, UNSPLASH_ACCESS_KEY[/bold]\n"
            f"2. Set the trigger secret: [bold]export UAEWIRE_ADMIN_SECRET=...[/bold]\n"
            f"3. Run: [bold]uaewire ingest[/bold]",
            style="green",
        )
    )
