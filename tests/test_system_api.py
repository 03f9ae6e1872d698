"""Tests for the health and installation status endpoints."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from igniter import __version__
from igniter.commands.install import InstallCommand
from igniter.main import app


@pytest.fixture
def test_client() -> TestClient:
    """Provide a FastAPI test client."""

    return TestClient(app)


def test_health_check(test_client):
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_status_before_install(install_env, test_client):
    response = test_client.get("/api/system/status")

    assert response.status_code == 200
    assert response.json() == {"installed": False, "version": None, "default_location_id": None}


def test_status_after_install(install_env, test_client, make_console):
    assert InstallCommand(console=make_console(interactive=False)).handle() == 0

    response = test_client.get("/api/system/status")

    assert response.status_code == 200
    payload = response.json()
    assert payload["installed"] is True
    assert payload["version"] == __version__
    assert isinstance(payload["default_location_id"], int)
