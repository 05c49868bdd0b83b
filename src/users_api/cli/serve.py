"""``users-api serve``: run the HTTP API."""

from pathlib import Path
from typing import Optional

import typer
import uvicorn

from ..exceptions import ConfigurationError, StorageError
from ..logging_config import get_logger, setup_logging, uvicorn_log_level
from ..persistence import UserDB, UserStore
from ..server.app import create_app
from . import app
from ._common import console, resolve_config

logger = get_logger(__name__)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind to [default: 0.0.0.0]"),
    port: Optional[int] = typer.Option(None, help="Port to listen on [default: 8000]"),
    database_url: Optional[str] = typer.Option(
        None, "--database-url", help="Connection string (overrides DATABASE_URL)"
    ),
    prefix: Optional[str] = typer.Option(
        None, "--prefix", help="Path prefix for the /users routes [default: /api/py]"
    ),
    config: Optional[Path] = typer.Option(None, "-c", "--config", help="Config file"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only log errors"),
) -> None:
    """Open the users database and serve the CRUD API until interrupted."""
    settings = resolve_config(
        config=config,
        database_url=database_url,
        host=host,
        port=port,
        prefix=prefix,
        verbose=verbose,
        quiet=quiet,
    )
    setup_logging(settings.verbosity, settings.log_file)

    # Startup failures are fatal: nothing is served without a schema
    try:
        db = UserDB(settings.database_url)
        db.connect()
    except (ConfigurationError, StorageError) as exc:
        logger.error("Database startup failed: %s", exc)
        console.print(f"[red]Cannot open database:[/red] {exc}")
        raise typer.Exit(1)

    asgi_app = create_app(UserStore(db), api_prefix=settings.api_prefix)

    url = f"http://{settings.host}:{settings.port}{settings.users_path}"
    console.print(f"[bold]Serving[/bold] {url} [dim](database: {db.path})[/dim]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    try:
        uvicorn.run(
            asgi_app,
            host=settings.host,
            port=settings.port,
            log_level=uvicorn_log_level(settings.verbosity),
        )
    finally:
        db.close()
        console.print("[dim]Stopped.[/dim]")
