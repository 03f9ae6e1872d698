"""Tests for the system parameter store."""
from __future__ import annotations

import pytest

from igniter.database import session_scope
from igniter.services.parameters import ParameterStore
from igniter.services.update_manager import UpdateManager


@pytest.fixture
def migrated(install_env):
    UpdateManager().update()
    return install_env


def test_get_returns_default_when_missing(migrated):
    with session_scope() as db:
        assert ParameterStore(db).get("missing") is None
        assert ParameterStore(db).get("missing", "fallback") == "fallback"


def test_set_mapping_and_read_back_typed_values(migrated):
    with session_scope() as db:
        ParameterStore(db).set({"ti_setup": "installed", "default_location_id": 3, "maintenance": False})

    with session_scope() as db:
        params = ParameterStore(db)
        assert params.get("ti_setup") == "installed"
        assert params.get("default_location_id") == 3
        assert params.get("maintenance") is False
        assert params.all() == {"default_location_id": 3, "maintenance": False, "ti_setup": "installed"}


def test_set_overwrites_existing_value(migrated):
    with session_scope() as db:
        params = ParameterStore(db)
        params.set("ti_setup", "pending")
        params.set("ti_setup", "installed")

    with session_scope() as db:
        assert ParameterStore(db).all() == {"ti_setup": "installed"}


def test_forget_removes_parameter(migrated):
    with session_scope() as db:
        ParameterStore(db).set("main_address", {"city": "Lagos"})

    with session_scope() as db:
        params = ParameterStore(db)
        assert params.forget("main_address") is True
        assert params.forget("main_address") is False

    with session_scope() as db:
        assert ParameterStore(db).get("main_address") is None
