"""Application configuration management."""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


CONFIG_PATH_ENV = "IGNITER_CONFIG_PATH"
ENVIRONMENT_ENV = "IGNITER_ENV"

# Section name -> env variable prefix used inside that section's file.
SECTION_PREFIXES = {
    "app": "APP_",
    "database": "DB_",
}

DRIVER_NAMES = {
    "mysql": "mysql+pymysql",
    "pgsql": "postgresql+psycopg",
    "sqlite": "sqlite",
}


def config_path() -> Path:
    """Return the directory holding the configuration files."""

    return Path(os.environ.get(CONFIG_PATH_ENV) or "config")


def current_environment() -> str | None:
    return os.environ.get(ENVIRONMENT_ENV) or None


def config_file(name: str, env: str | None = None) -> Path:
    """Return the path of a config section file, inside the environment folder if given."""

    base = config_path()
    if env:
        base = base / env
    return base / f"{name}.env"


def _section_files(name: str, env: str | None) -> tuple[Path, ...]:
    # Environment specific values override the shared file.
    files = [config_file(name)]
    if env:
        files.append(config_file(name, env))
    return tuple(files)


class AppSettings(BaseSettings):
    """Site level settings stored in ``app.env``."""

    name: str = Field(default="TastyIgniter")
    url: str = Field(default="http://localhost")
    key: str = Field(default="", description="Encryption key, generated on install.")
    debug: bool = Field(default=False)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
        upper = value.upper()
        if upper not in valid:
            raise ValueError(f"APP_LOG_LEVEL must be one of {', '.join(sorted(valid))}")
        return upper


class DatabaseSettings(BaseSettings):
    """Connection settings stored in ``database.env``."""

    connection: str = Field(default="mysql")
    host: str = Field(default="127.0.0.1")
    port: int | None = Field(default=3306, ge=1, le=65535)
    database: str = Field(default="tastyigniter")
    username: str = Field(default="root")
    password: str = Field(default="")
    prefix: str = Field(default="ti_")

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("port", mode="before")
    @classmethod
    def empty_port_is_default(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("connection")
    @classmethod
    def validate_connection(cls, value: str) -> str:
        lowered = value.strip().lower()
        if lowered not in DRIVER_NAMES:
            raise ValueError(f"DB_CONNECTION must be one of {', '.join(sorted(DRIVER_NAMES))}")
        return lowered

    @property
    def url(self) -> URL:
        """SQLAlchemy URL for the configured connection."""

        drivername = DRIVER_NAMES[self.connection]
        if self.connection == "sqlite":
            return URL.create(drivername, database=self.database)
        return URL.create(
            drivername,
            username=self.username or None,
            password=self.password or None,
            host=self.host or None,
            port=self.port,
            database=self.database,
        )


class Settings(BaseModel):
    """All configuration sections for one environment."""

    env: str | None = None
    app: AppSettings
    database: DatabaseSettings


@lru_cache()
def _load_settings(env: str | None) -> Settings:
    return Settings(
        env=env,
        app=AppSettings(_env_file=_section_files("app", env)),
        database=DatabaseSettings(_env_file=_section_files("database", env)),
    )


def get_settings(env: str | None = None) -> Settings:
    """Return cached settings for ``env`` (defaults to ``IGNITER_ENV``)."""

    return _load_settings(env or current_environment())


def clear_settings_cache() -> None:
    """Drop cached settings so the next read picks up rewritten files."""

    _load_settings.cache_clear()
