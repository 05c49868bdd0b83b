"""Configuration exceptions: settings values and database locations."""

from typing import Any

from .base import UsersApiError


class ConfigurationError(UsersApiError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            key=key,
            value=value,
            reason=reason,
        )
        self.key = key
        self.value = value
        self.reason = reason


class UnsupportedDatabaseError(ConfigurationError):
    """Raised when a connection string names a backend we cannot open."""

    def __init__(self, url: str):
        scheme = url.split(":", 1)[0]
        super().__init__(
            f"Unsupported database URL: {url}",
            scheme=scheme,
            supported="sqlite",
        )
        self.url = url
