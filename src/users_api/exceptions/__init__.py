"""Exception hierarchy for users-api."""

from .base import UsersApiError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    UnsupportedDatabaseError,
)
from .storage import StorageError

__all__ = [
    "UsersApiError",
    "ConfigurationError",
    "InvalidConfigError",
    "UnsupportedDatabaseError",
    "StorageError",
]
