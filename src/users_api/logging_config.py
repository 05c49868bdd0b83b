"""
Logging configuration for users-api.

Routes service and request logs through a rich handler on stderr.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.INFO,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbosity: One of ``quiet`` (ERROR), ``normal`` (INFO), ``verbose`` (DEBUG)
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for users_api
    """
    level = _LEVELS.get(verbosity, logging.INFO)
    verbose = verbosity == "verbose"

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    # force=True so a second serve/init-db in the same process reconfigures
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger("users_api")
    logger.setLevel(level)

    return logger


def uvicorn_log_level(verbosity: str) -> str:
    """Map our verbosity onto the level names uvicorn accepts."""
    return {"quiet": "error", "verbose": "debug"}.get(verbosity, "info")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'users_api.server.app')
              If None, returns the root users_api logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("users_api")

    if not name.startswith("users_api"):
        name = f"users_api.{name}"

    return logging.getLogger(name)
