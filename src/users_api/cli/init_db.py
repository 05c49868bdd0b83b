"""``users-api init-db``: create the users table and exit."""

from pathlib import Path
from typing import Optional

import typer

from ..exceptions import ConfigurationError, StorageError
from ..persistence import UserDB
from . import app
from ._common import console, resolve_config


@app.command("init-db")
def init_db(
    database_url: Optional[str] = typer.Option(
        None, "--database-url", help="Connection string (overrides DATABASE_URL)"
    ),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
) -> None:
    """Ensure the users schema exists. Safe to run repeatedly."""
    settings = resolve_config(config=config, database_url=database_url)

    try:
        with UserDB(settings.database_url) as db:
            count = db.conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
            location = db.path
    except (ConfigurationError, StorageError) as exc:
        console.print(f"[red]Cannot initialize database:[/red] {exc}")
        raise typer.Exit(1)

    console.print(f"[green]Schema ready[/green] at {location} ({count} user(s))")
