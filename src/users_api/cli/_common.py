"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import ServiceConfig, load_config
from ..exceptions import ConfigurationError

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    database_url: Optional[str] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    prefix: Optional[str] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> ServiceConfig:
    """Build configuration from CLI options, exiting with 1 if it is invalid."""
    try:
        return load_config(
            config_file=config,
            database_url=database_url,
            host=host,
            port=port,
            api_prefix=prefix,
            verbose=verbose,
            quiet=quiet,
        )
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(1)
