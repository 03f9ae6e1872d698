"""Database engine, session and base model setup."""
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from igniter.config import get_settings
from igniter.exceptions import DatabaseDriverError


logger = logging.getLogger(__name__)

_engine: Engine | None = None

SessionLocal = sessionmaker(autoflush=False, autocommit=False, future=True)


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key enforcement for SQLite."""
    if not isinstance(dbapi_conn, sqlite3.Connection):
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Base(DeclarativeBase):
    """Declarative base for SQLAlchemy models."""


def table_name(name: str) -> str:
    """Return ``name`` with the configured table prefix applied."""

    return f"{get_settings().database.prefix}{name}"


def get_engine() -> Engine:
    """Return the engine for the current database settings, creating it on first use."""

    global _engine
    if _engine is None:
        settings = get_settings()
        url = settings.database.url
        if url.drivername == "sqlite" and url.database:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        try:
            _engine = create_engine(url, echo=settings.app.debug, future=True)
        except ImportError as exc:
            logger.exception("Database driver for %s is not installed", url.drivername)
            raise DatabaseDriverError(
                f"The {url.drivername} driver is not installed: {exc}"
            ) from exc
        SessionLocal.configure(bind=_engine)
    return _engine


def purge() -> None:
    """Drop pooled connections so the next use reconnects with fresh settings."""

    global _engine
    if _engine is not None:
        _engine.dispose()
        logger.debug("Disposed database engine for %s", _engine.url)
    _engine = None


def open_session() -> Session:
    get_engine()
    return SessionLocal()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Provide a transactional session, committing on success."""
    db = open_session()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_db():
    """FastAPI dependency yielding a transactional database session."""
    with session_scope() as db:
        yield db


def has_database() -> bool:
    """Return True when the configured database is reachable and already installed."""

    try:
        return inspect(get_engine()).has_table(table_name("parameters"))
    except SQLAlchemyError:
        logger.debug("Database not reachable", exc_info=True)
        return False


def _alembic_config() -> Config:
    """Return a configured Alembic Config instance."""

    root = Path(__file__).resolve().parent.parent
    ini_path = root / "alembic.ini"
    cfg = Config(str(ini_path)) if ini_path.exists() else Config()
    cfg.set_main_option("script_location", str(root / "migrations"))
    return cfg


def run_migrations(target_revision: str = "head") -> None:
    """Apply Alembic migrations up to the specified revision."""

    cfg = _alembic_config()
    with get_engine().begin() as connection:
        cfg.attributes["connection"] = connection
        command.upgrade(cfg, target_revision)
