"""Users table persistence: connection, schema and statements."""

from .database import UserDB, resolve_database_path
from .models import User
from .store import UserStore

__all__ = ["UserDB", "UserStore", "User", "resolve_database_path"]
