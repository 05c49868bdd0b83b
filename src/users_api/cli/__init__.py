"""CLI entry point: registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="users-api",
    help="users-api - CRUD REST service for a users table",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"users-api {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Serve or initialize the users database."""


# Import subcommands to register them
from .init_db import init_db as _init_db  # noqa: F401, E402
from .serve import serve as _serve  # noqa: F401, E402
