"""Configuration loading and management for users-api.

Configuration sources are merged in priority order:
    1. Defaults (defined in ServiceConfig)
    2. Project config (./users-api.toml)
    3. Explicit config file (``--config``)
    4. ``DATABASE_URL`` environment variable
    5. ``USERS_API_*`` environment variables
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(port=9000)
    >>> config.port
    9000
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

_VERBOSITIES = ("quiet", "normal", "verbose")

ENV_PREFIX = "USERS_API_"
PROJECT_CONFIG_NAME = "users-api.toml"


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration for one running API process.

    Attributes:
        database_url: Connection string for the users database
        host: Interface the HTTP listener binds to
        port: TCP port the HTTP listener binds to
        api_prefix: Path prefix every user route is mounted under
        verbosity: Logging verbosity level
        log_file: Optional file receiving a plain-text copy of the logs
    """

    database_url: str = "sqlite:///users.db"
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/api/py"
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # TOML values arrive untyped
        for field_name in ("database_url", "host", "api_prefix", "verbosity"):
            value = getattr(self, field_name)
            if not isinstance(value, str):
                raise InvalidConfigError(field_name, value, "must be a string")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise InvalidConfigError("log_file", self.log_file, "must be a string")
        # bool is an int subclass; `port = true` is not a port
        if not isinstance(self.port, int) or isinstance(self.port, bool):
            raise InvalidConfigError("port", self.port, "must be an integer")

        if not self.database_url.strip():
            raise InvalidConfigError("database_url", self.database_url, "must not be empty")

        if not 1 <= self.port <= 65535:
            raise InvalidConfigError("port", self.port, "must be between 1 and 65535")

        if not self.host:
            raise InvalidConfigError("host", self.host, "must not be empty")

        # "" mounts the routes at the root; anything else is "/segment[/segment]"
        if self.api_prefix and (
            not self.api_prefix.startswith("/") or self.api_prefix.endswith("/")
        ):
            raise InvalidConfigError(
                "api_prefix",
                self.api_prefix,
                "must start with '/' and must not end with '/'",
            )

        if self.verbosity not in _VERBOSITIES:
            raise InvalidConfigError(
                "verbosity", self.verbosity, f"must be one of {', '.join(_VERBOSITIES)}"
            )

    @property
    def users_path(self) -> str:
        """Collection path of the users resource."""
        return f"{self.api_prefix}/users"


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> ServiceConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options fall through.

    Returns:
        Validated ServiceConfig instance

    Raises:
        ConfigurationError: If a config file is invalid, missing, or names
            an unknown setting
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict[str, Any] = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError("Config file not found", path=config_file)
        merged.update(_load_toml_file(config_file))

    # Deployments commonly export the bare name
    database_url = os.environ.get("DATABASE_URL")
    if database_url:
        merged["database_url"] = database_url

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if overrides.pop("verbose", False):
        overrides["verbosity"] = "verbose"
    if overrides.pop("quiet", False):
        overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ServiceConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from USERS_API_* environment variables.

    Supported environment variables:
        USERS_API_DATABASE_URL: str
        USERS_API_HOST: str
        USERS_API_PORT: int
        USERS_API_API_PREFIX: str
        USERS_API_VERBOSITY: quiet/normal/verbose
        USERS_API_LOG_FILE: str

    Returns:
        Dict of field_name -> parsed_value for any USERS_API_* vars found.
    """
    type_hints = get_type_hints(ServiceConfig)

    result: dict[str, Any] = {}

    for field_name in ServiceConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}")
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Args:
        value: Raw string from environment
        type_hint: Type annotation from dataclass

    Returns:
        Parsed value or None if can't parse

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Handle Optional[X] which is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is int:
        return int(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return the settings it holds.

    A ``[users-api]`` table is used when present, otherwise the top level.

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError("Invalid config file", path=path, cause=e)

    section = data.get("users-api", data)
    if not isinstance(section, dict):
        raise ConfigurationError(
            "Invalid config file", path=path, reason="[users-api] must be a table"
        )
    return dict(section)
