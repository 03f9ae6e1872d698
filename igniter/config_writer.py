"""Rewrite keys inside the dotenv configuration files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

from dotenv import set_key

from igniter.config import SECTION_PREFIXES, clear_settings_cache, config_file
from igniter.exceptions import ConfigWriteError


logger = logging.getLogger(__name__)


def _to_env_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigWriter:
    """Persist configuration values and refresh the in-process settings."""

    def __init__(self, env: str | None = None) -> None:
        self.env = env

    def path_for(self, section: str) -> Path:
        return config_file(section, self.env)

    def write(self, section: str, values: Mapping[str, Any]) -> Path:
        """Set each ``key`` of ``values`` inside the ``section`` file.

        Other lines of the file are left untouched. Missing files and folders
        are created.
        """
        try:
            prefix = SECTION_PREFIXES[section]
        except KeyError:
            raise ConfigWriteError(f"Unknown configuration section '{section}'") from None

        path = self.path_for(section)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)
            for key, value in values.items():
                env_key = f"{prefix}{key.upper()}"
                set_key(str(path), env_key, _to_env_value(value), quote_mode="always")
                logger.debug("Wrote %s to %s", env_key, path)
        except OSError as exc:
            logger.exception("Unable to write configuration file %s", path)
            raise ConfigWriteError(f"Unable to write configuration file {path}: {exc}") from exc
        finally:
            clear_settings_cache()

        return path
