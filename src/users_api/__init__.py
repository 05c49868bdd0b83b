"""
users-api - CRUD REST service for a single users table.

Starlette handlers over a shared SQLite connection, with permissive CORS and
JSON everywhere.
"""

__version__ = "0.1.0"

from .config import ServiceConfig, load_config
from .persistence import User, UserDB, UserStore
from .server import create_app

__all__ = [
    "create_app",
    "load_config",
    "ServiceConfig",
    "User",
    "UserDB",
    "UserStore",
]
