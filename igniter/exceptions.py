"""Errors raised while installing the application."""
from __future__ import annotations


class InstallError(Exception):
    """Base class for failures that abort an installation."""


class ConfigWriteError(InstallError):
    """A configuration file could not be rewritten."""


class MigrationError(InstallError):
    """Applying database migrations failed."""


class SeedError(InstallError):
    """Creating the default records failed."""


class DatabaseDriverError(InstallError):
    """The driver for the configured database connection is not installed."""
