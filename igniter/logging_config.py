"""Central logging configuration for Igniter."""
from __future__ import annotations

import logging
from logging.config import dictConfig
from pathlib import Path

from pydantic import ValidationError

from igniter.config import get_settings

_configured = False


def _default_config(log_dir: Path, level: str, console: bool) -> dict:
    log_path = log_dir / "app.log"
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    handlers = {
        "file": {
            "class": "logging.FileHandler",
            "filename": str(log_path),
            "encoding": "utf-8",
            "formatter": "standard",
            "level": level,
        },
    }
    if console:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level,
        }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": fmt,
            },
        },
        "handlers": handlers,
        "root": {
            "level": level,
            "handlers": list(handlers),
        },
    }


def configure_logging(console: bool = True) -> None:
    """Configure application logging once per process.

    Interactive commands pass ``console=False`` so log records go to the
    log file only and do not interleave with prompts.
    """

    global _configured
    if _configured:
        return

    try:
        settings = get_settings()
        log_dir = settings.app.log_dir
        level = settings.app.log_level
    except ValidationError:
        # Broken config files must not prevent the installer from rewriting them.
        log_dir = Path("logs")
        level = "INFO"
    log_dir.mkdir(parents=True, exist_ok=True)

    dictConfig(_default_config(log_dir, level, console))
    _configured = True
    logging.getLogger(__name__).debug("Logging configured (level=%s, dir=%s)", level, log_dir)
