"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from users_api.config import ServiceConfig, load_config
from users_api.exceptions import ConfigurationError, InvalidConfigError


class TestServiceConfig:
    def test_defaults(self):
        config = ServiceConfig()
        assert config.database_url == "sqlite:///users.db"
        assert config.host == "0.0.0.0"
        assert config.port == 8000
        assert config.api_prefix == "/api/py"
        assert config.verbosity == "normal"
        assert config.log_file is None

    def test_users_path(self):
        assert ServiceConfig(api_prefix="/api/go").users_path == "/api/go/users"
        assert ServiceConfig(api_prefix="").users_path == "/users"

    @pytest.mark.parametrize("port", [0, 70000, -1])
    def test_invalid_port(self, port):
        with pytest.raises(InvalidConfigError) as exc_info:
            ServiceConfig(port=port)
        assert exc_info.value.key == "port"

    @pytest.mark.parametrize("prefix", ["api", "/api/"])
    def test_invalid_prefix(self, prefix):
        with pytest.raises(InvalidConfigError):
            ServiceConfig(api_prefix=prefix)

    def test_invalid_verbosity(self):
        with pytest.raises(InvalidConfigError):
            ServiceConfig(verbosity="loud")

    def test_empty_database_url(self):
        with pytest.raises(InvalidConfigError):
            ServiceConfig(database_url="  ")


class TestLoadConfig:
    def test_defaults_with_clean_env(self, clean_env):
        assert load_config() == ServiceConfig()

    def test_database_url_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:////srv/users.db")
        assert load_config().database_url == "sqlite:////srv/users.db"

    def test_prefixed_env_wins_over_bare(self, clean_env, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite:///a.db")
        monkeypatch.setenv("USERS_API_DATABASE_URL", "sqlite:///b.db")
        assert load_config().database_url == "sqlite:///b.db"

    def test_typed_env_vars(self, clean_env, monkeypatch):
        monkeypatch.setenv("USERS_API_PORT", "9001")
        monkeypatch.setenv("USERS_API_VERBOSITY", "verbose")
        monkeypatch.setenv("USERS_API_LOG_FILE", "/tmp/users.log")

        config = load_config()

        assert config.port == 9001
        assert config.verbosity == "verbose"
        assert config.log_file == "/tmp/users.log"

    def test_bad_int_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("USERS_API_PORT", "eighty")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_project_toml(self, clean_env):
        (clean_env / "users-api.toml").write_text('port = 8123\napi_prefix = "/api/go"\n')

        config = load_config()

        assert config.port == 8123
        assert config.api_prefix == "/api/go"

    def test_explicit_toml_section(self, clean_env):
        path = clean_env / "custom.toml"
        path.write_text('[users-api]\nhost = "127.0.0.1"\n')
        assert load_config(config_file=path).host == "127.0.0.1"

    def test_missing_explicit_file(self, clean_env):
        with pytest.raises(ConfigurationError):
            load_config(config_file=Path("nope.toml"))

    def test_malformed_toml(self, clean_env):
        path = clean_env / "bad.toml"
        path.write_text("port = = 1")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_unknown_key(self, clean_env):
        path = clean_env / "extra.toml"
        path.write_text("workers = 4\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    @pytest.mark.parametrize(
        "line, key",
        [
            ("database_url = 5", "database_url"),
            ("host = 127", "host"),
            ("api_prefix = [\"/api\"]", "api_prefix"),
            ("log_file = false", "log_file"),
            ("port = true", "port"),
            ("port = \"8000\"", "port"),
        ],
    )
    def test_wrongly_typed_toml_value(self, clean_env, line, key):
        (clean_env / "users-api.toml").write_text(line + "\n")

        with pytest.raises(InvalidConfigError) as exc_info:
            load_config()
        assert exc_info.value.key == key

    def test_overrides_win_and_none_ignored(self, clean_env, monkeypatch):
        monkeypatch.setenv("USERS_API_PORT", "9001")

        config = load_config(port=7000, host=None)

        assert config.port == 7000
        assert config.host == "0.0.0.0"

    def test_verbose_and_quiet_flags(self, clean_env):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"
