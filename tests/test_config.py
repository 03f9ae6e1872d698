"""Tests for settings loading and configuration rewriting."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from igniter.config import DatabaseSettings, config_file, get_settings
from igniter.config_writer import ConfigWriter
from igniter.exceptions import ConfigWriteError


def test_settings_read_section_files(install_env):
    (install_env / "app.env").write_text("APP_NAME='Pizza Palace'\nAPP_URL=https://pizza.example\n")

    settings = get_settings()

    assert settings.app.name == "Pizza Palace"
    assert settings.app.url == "https://pizza.example"
    assert settings.database.connection == "sqlite"
    assert settings.database.url.drivername == "sqlite"


def test_environment_file_overrides_shared_file(install_env):
    (install_env / "app.env").write_text("APP_NAME=Shared\nAPP_URL=http://shared.example\n")
    staging = install_env / "staging"
    staging.mkdir()
    (staging / "app.env").write_text("APP_NAME=Staging\n")

    settings = get_settings("staging")

    assert settings.env == "staging"
    assert settings.app.name == "Staging"
    assert settings.app.url == "http://shared.example"
    assert get_settings().app.name == "Shared"


def test_empty_port_becomes_none():
    settings = DatabaseSettings(_env_file=None, port="")

    assert settings.port is None
    assert settings.url.port is None


def test_mysql_url_uses_pymysql_driver():
    settings = DatabaseSettings(
        _env_file=None,
        connection="MySQL",
        host="db.internal",
        port=3307,
        database="shop",
        username="igniter",
        password="p@ss",
    )

    url = settings.url
    assert settings.connection == "mysql"
    assert url.drivername == "mysql+pymysql"
    assert url.host == "db.internal"
    assert url.port == 3307
    assert url.password == "p@ss"
    assert url.database == "shop"


def test_pgsql_url_uses_psycopg_driver():
    settings = DatabaseSettings(_env_file=None, connection="pgsql", host="db.internal", port=5432)

    assert settings.url.drivername == "postgresql+psycopg"
    assert settings.url.port == 5432


def test_unknown_connection_is_rejected():
    with pytest.raises(ValidationError):
        DatabaseSettings(_env_file=None, connection="oracle")


def test_invalid_log_level_is_rejected(install_env):
    (install_env / "app.env").write_text("APP_LOG_LEVEL=loud\n")

    with pytest.raises(ValidationError):
        get_settings()


class TestConfigWriter:
    def test_write_replaces_keys_and_keeps_other_lines(self, install_env):
        writer = ConfigWriter()

        writer.write("database", {"host": "db.example", "port": None, "prefix": "shop_"})

        content = (install_env / "database.env").read_text()
        assert "# Test database" in content
        assert "DB_CONNECTION=sqlite" in content
        assert "DB_HOST='db.example'" in content
        assert "DB_PORT=''" in content
        assert "DB_PREFIX='shop_'" in content

    def test_write_refreshes_cached_settings(self, install_env):
        assert get_settings().app.name == "TastyIgniter"

        ConfigWriter().write("app", {"name": "Burger Barn", "debug": True})

        settings = get_settings()
        assert settings.app.name == "Burger Barn"
        assert settings.app.debug is True

    def test_write_creates_environment_folder(self, install_env):
        path = ConfigWriter("production").write("app", {"url": "https://shop.example"})

        assert path == config_file("app", "production")
        assert path.exists()
        assert get_settings("production").app.url == "https://shop.example"

    def test_value_with_quotes_round_trips(self, install_env):
        ConfigWriter().write("app", {"name": "Sam's Diner"})

        assert get_settings().app.name == "Sam's Diner"

    def test_unknown_section_raises(self, install_env):
        with pytest.raises(ConfigWriteError):
            ConfigWriter().write("mail", {"host": "smtp"})

    def test_os_error_is_wrapped(self, install_env, monkeypatch):
        def fail(*args, **kwargs):
            raise PermissionError("read-only file system")

        monkeypatch.setattr("igniter.config_writer.set_key", fail)

        with pytest.raises(ConfigWriteError, match="read-only"):
            ConfigWriter().write("app", {"name": "Nope"})
