"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import io
import os
import tempfile
from pathlib import Path
from typing import Callable, Iterator

import pytest
from rich.console import Console

_SESSION_DIR = Path(tempfile.mkdtemp(prefix="igniter-tests-"))
os.environ["IGNITER_CONFIG_PATH"] = str(_SESSION_DIR / "config")
os.environ["APP_LOG_DIR"] = str(_SESSION_DIR / "logs")
os.environ.pop("IGNITER_ENV", None)

from igniter import database
from igniter.config import clear_settings_cache
from igniter.console import CommandConsole
from igniter.logging_config import configure_logging

configure_logging()


@pytest.fixture
def install_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point the config at an empty folder backed by a throwaway SQLite database."""

    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "database.env").write_text(
        "# Test database\n"
        "DB_CONNECTION=sqlite\n"
        f"DB_DATABASE={tmp_path / 'igniter.db'}\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("IGNITER_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("IGNITER_ENV", raising=False)
    clear_settings_cache()
    database.purge()

    yield config_dir

    database.purge()
    clear_settings_cache()


@pytest.fixture
def make_console() -> Callable[..., CommandConsole]:
    """Build a console that answers prompts from the given lines."""

    def _make(*answers: str, interactive: bool = True) -> CommandConsole:
        stream = io.StringIO("".join(f"{answer}\n" for answer in answers))
        output = Console(file=io.StringIO(), width=120)
        return CommandConsole(console=output, stream=stream, interactive=interactive)

    return _make
