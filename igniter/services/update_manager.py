"""Run schema migrations and keep a transcript of what was applied."""
from __future__ import annotations

import logging
from functools import lru_cache

from alembic.util import CommandError
from sqlalchemy.exc import SQLAlchemyError

from igniter import __version__
from igniter.database import run_migrations, session_scope
from igniter.exceptions import MigrationError


logger = logging.getLogger(__name__)

ALEMBIC_LOGGER = "alembic.runtime.migration"
NOTHING_TO_MIGRATE = "Nothing to migrate."


class _NoteCollector(logging.Handler):
    """Logging handler that appends migration messages to a list."""

    def __init__(self, notes: list[str]) -> None:
        super().__init__(level=logging.INFO)
        self.notes = notes

    def emit(self, record: logging.LogRecord) -> None:
        self.notes.append(record.getMessage())


class UpdateManager:
    """Apply pending migrations and record the installed core version."""

    def __init__(self) -> None:
        self._logs: list[str] = []

    def reset_logs(self) -> "UpdateManager":
        self._logs = []
        return self

    def get_logs(self) -> list[str]:
        return list(self._logs)

    def note(self, message: str) -> "UpdateManager":
        self._logs.append(message)
        return self

    def update(self) -> "UpdateManager":
        """Migrate the database to the latest revision.

        Alembic reports each applied revision through its own logger; those
        messages become the notes returned by ``get_logs``.
        """
        migration_logger = logging.getLogger(ALEMBIC_LOGGER)
        collected: list[str] = []
        collector = _NoteCollector(collected)
        previous_level = migration_logger.level
        migration_logger.addHandler(collector)
        migration_logger.setLevel(logging.INFO)

        try:
            run_migrations()
        except (CommandError, SQLAlchemyError) as exc:
            logger.exception("Database migration failed")
            raise MigrationError(f"Database migration failed: {exc}") from exc
        finally:
            migration_logger.removeHandler(collector)
            migration_logger.setLevel(previous_level)

        applied = [message for message in collected if message.startswith("Running upgrade")]
        if applied:
            for message in applied:
                self.note(message)
        else:
            self.note(NOTHING_TO_MIGRATE)
        logger.info("Migrations complete (%d applied)", len(applied))
        return self

    def set_core_version(self, version: str | None = None) -> None:
        """Store the running core version as the ``ti_version`` parameter."""
        # Models bind the table prefix at import, so load them only once the schema exists.
        from igniter.services.parameters import ParameterStore

        with session_scope() as db:
            ParameterStore(db).set("ti_version", version or __version__)


@lru_cache()
def get_update_manager() -> UpdateManager:
    """Return the shared update manager instance."""

    return UpdateManager()
