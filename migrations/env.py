"""Alembic environment wired to the application's database settings."""
from __future__ import annotations

from alembic import context

from igniter.database import get_engine, table_name


config = context.config

# Schema changes are written by hand; autogenerate is not used.
target_metadata = None


def run_migrations_offline() -> None:
    """Emit SQL for the configured database without connecting."""

    context.configure(
        url=get_engine().url,
        target_metadata=target_metadata,
        version_table=table_name("migrations"),
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        version_table=table_name("migrations"),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations on the shared connection, or open one from the engine."""

    connection = config.attributes.get("connection")
    if connection is not None:
        do_run_migrations(connection)
        return

    with get_engine().begin() as connection:
        do_run_migrations(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
