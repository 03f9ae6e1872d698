"""Tests for running migrations through the update manager."""
from __future__ import annotations

import pytest
from alembic.util import CommandError
from sqlalchemy import func, inspect, select

from igniter import __version__, database
from igniter.database import has_database, session_scope, table_name
from igniter.exceptions import MigrationError
from igniter.models.database_models import Language, StaffGroup
from igniter.services.parameters import ParameterStore
from igniter.services.update_manager import NOTHING_TO_MIGRATE, UpdateManager


def test_update_creates_schema_and_reports_revisions(install_env):
    assert has_database() is False

    manager = UpdateManager().reset_logs()
    manager.update()

    logs = manager.get_logs()
    assert any(note.startswith("Running upgrade") and "20261019_01" in note for note in logs)
    assert has_database() is True

    tables = inspect(database.get_engine()).get_table_names()
    for name in ("locations", "staffs", "staff_groups", "users", "languages", "parameters", "migrations"):
        assert table_name(name) in tables


def test_update_seeds_staff_groups_and_language(install_env):
    UpdateManager().update()

    with session_scope() as db:
        groups = db.scalars(select(StaffGroup.staff_group_name).order_by(StaffGroup.staff_group_id)).all()
        languages = db.scalars(select(Language)).all()

    assert groups == ["Owners", "Managers", "Waiters", "Delivery"]
    assert [(language.code, language.name) for language in languages] == [("en", "English")]


def test_second_update_has_nothing_to_migrate(install_env):
    manager = UpdateManager()
    manager.update()

    manager.reset_logs().update()

    assert manager.get_logs() == [NOTHING_TO_MIGRATE]
    with session_scope() as db:
        assert db.scalar(select(func.count()).select_from(StaffGroup)) == 4


def test_reset_logs_clears_previous_notes(install_env):
    manager = UpdateManager().note("old note")

    assert manager.reset_logs().get_logs() == []


def test_update_wraps_migration_errors(install_env, monkeypatch):
    def broken(target_revision: str = "head") -> None:
        raise CommandError("Can't locate revision identified by 'head'")

    monkeypatch.setattr("igniter.services.update_manager.run_migrations", broken)

    with pytest.raises(MigrationError, match="Can't locate revision"):
        UpdateManager().update()


def test_set_core_version_records_parameter(install_env):
    manager = UpdateManager()
    manager.update()

    manager.set_core_version()

    with session_scope() as db:
        assert ParameterStore(db).get("ti_version") == __version__
