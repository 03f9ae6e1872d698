"""Console command to install the application.

This sets up the application for the first time. It prompts for the database
connection and the site details, rewrites the configuration files, migrates
the database and then creates the default location and the super user.
"""
from __future__ import annotations

import argparse
import logging
import os
from typing import Callable, Sequence, TypeVar

from filelock import FileLock, Timeout
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from igniter import database
from igniter.config import ENVIRONMENT_ENV, clear_settings_cache, config_path, get_settings
from igniter.config_writer import ConfigWriter
from igniter.console import CommandConsole
from igniter.exceptions import ConfigWriteError, InstallError, SeedError
from igniter.logging_config import configure_logging
from igniter.models.schemas import AdminAccount, DatabaseCredentials, SiteDetails
from igniter.services.security import generate_encryption_key
from igniter.services.update_manager import get_update_manager


logger = logging.getLogger(__name__)

T = TypeVar("T")

DRIVER_LABELS = {
    "mysql": "MySQL",
    "pgsql": "PostgreSQL",
    "sqlite": "SQLite",
}

LOCK_FILE = ".install.lock"

DEFAULT_SITE_NAME = "TastyIgniter"
DEFAULT_ADMIN = {
    "name": "Chef Sam",
    "email": "admin@domain.tld",
    "username": "admin",
    "password": "123456",
}


def _seeder():
    # Models bind the table prefix on first import, so load them after the config is rewritten.
    from igniter.services import seeder

    return seeder


class InstallCommand:
    """Prompt, configure, migrate and seed a new installation."""

    name = "igniter:install"
    description = "Set up TastyIgniter for the first time."

    def __init__(
        self,
        console: CommandConsole | None = None,
        force: bool = False,
        env: str | None = None,
    ) -> None:
        self.console = console or CommandConsole()
        self.force = force
        self.env = env
        self.config_writer = ConfigWriter(env)

    def handle(self) -> int:
        """Run every installation step in order; return the exit code."""
        self.console.alert("INSTALLATION")

        lock_path = config_path() / LOCK_FILE
        lock = self._acquire_lock(lock_path)
        try:
            if (
                not self.force
                and database.has_database()
                and not self.console.confirm(
                    "Application appears to be installed already. Continue anyway?", default=False
                )
            ):
                self.console.line("Installation aborted.")
                logger.info("Install aborted: application already installed")
                return 0

            self.console.line("Enter a new value, or press ENTER for the default")

            self.rewrite_config_files()

            self.migrate_database()

            self.create_default_location()

            self.create_super_user()

            self.add_system_values()
        finally:
            # Release only; the lock file itself stays on disk.
            lock.release()

        self.console.alert("INSTALLATION COMPLETE")
        logger.info("Installation complete")
        return 0

    def rewrite_config_files(self) -> None:
        self.write_database_config()
        self.write_to_config("app", {"key": generate_encryption_key()})

    def write_database_config(self) -> None:
        current = get_settings().database
        label = DRIVER_LABELS[current.connection]
        port = "" if current.port is None else str(current.port)

        # SQLite only needs a file name; the server settings are kept as they are.
        server = current.connection != "sqlite"
        answers = {
            "host": self.console.ask(f"{label} Host", current.host) if server else current.host,
            "port": self.console.ask(f"{label} Port", port) if server else port,
            "database": self.console.ask("Database Name", current.database),
            "username": self.console.ask(f"{label} Login", current.username) if server else current.username,
            "password": (
                self.console.ask(f"{label} Password", current.password, password=True)
                if server
                else current.password
            ),
            "prefix": self.console.ask(f"{label} Table Prefix", current.prefix),
        }

        try:
            credentials = DatabaseCredentials(**answers)
        except ValidationError as exc:
            raise ConfigWriteError(f"Invalid database settings: {exc}") from exc

        self.write_to_config("database", {"connection": current.connection})
        self.write_to_config("database", credentials.model_dump())

    def migrate_database(self) -> None:
        self.console.line("Migrating application and extensions...")

        database.purge()

        manager = get_update_manager().reset_logs()

        manager.update()

        for note in manager.get_logs():
            self.console.line(note)

        self.console.line("Done. Migrating application and extensions...")

    def create_default_location(self) -> None:
        site_name = self.console.ask("Site Name", DEFAULT_SITE_NAME)
        url = self.console.ask("Site URL", get_settings().app.url)

        try:
            site = SiteDetails(name=site_name, url=url)
        except ValidationError as exc:
            raise SeedError(f"Invalid site details: {exc}") from exc

        self.write_to_config("app", {"name": site.name, "url": site.url})

        seeder = _seeder()
        self._seed(lambda db: seeder.create_default_location(db, site.name))
        self.console.info(f"Location {site.name} created!")

    def create_super_user(self) -> None:
        answers = {
            "name": self.console.ask("Admin Name", DEFAULT_ADMIN["name"]),
            "email": self.console.ask("Admin Email", DEFAULT_ADMIN["email"]),
            "username": self.console.ask("Admin Username", DEFAULT_ADMIN["username"]),
            "password": self.console.ask("Admin Password", DEFAULT_ADMIN["password"], password=True),
        }

        try:
            account = AdminAccount(**answers)
        except ValidationError as exc:
            raise SeedError(f"Invalid admin account: {exc}") from exc

        seeder = _seeder()
        self._seed(lambda db: seeder.create_super_user(db, account))
        self.console.info(f"Admin user {account.username} created!")

    def add_system_values(self) -> None:
        seeder = _seeder()
        self._seed(seeder.add_system_values)

        try:
            get_update_manager().set_core_version()
        except SQLAlchemyError as exc:
            logger.exception("Unable to record core version")
            raise SeedError(f"Unable to record core version: {exc}") from exc

    def write_to_config(self, section: str, values: dict) -> None:
        path = self.config_writer.write(section, values)
        logger.info("Updated %s (%s)", path, ", ".join(sorted(values)))

    def _seed(self, step: Callable[..., T]) -> T:
        """Run ``step`` in its own transaction, wrapping database failures."""
        try:
            with database.session_scope() as db:
                return step(db)
        except SQLAlchemyError as exc:
            logger.exception("Seeding failed")
            raise SeedError(f"Unable to create default records: {exc}") from exc

    def _acquire_lock(self, lock_path) -> FileLock:
        lock_path.parent.mkdir(parents=True, exist_ok=True)
        lock = FileLock(str(lock_path))
        try:
            lock.acquire(timeout=0)
        except Timeout as exc:
            raise InstallError(f"Another installation is already running (lock: {lock_path})") from exc
        return lock


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="igniter-install",
        description=InstallCommand.description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive install
  igniter-install

  # Reinstall over an existing database without confirmation
  igniter-install --force

  # Write config/staging/*.env and accept every default
  igniter-install --env staging --no-interaction
        """,
    )
    parser.add_argument("--force", action="store_true", help="Force install.")
    parser.add_argument("--env", type=str, help="Environment whose config files are written")
    parser.add_argument(
        "-n",
        "--no-interaction",
        action="store_true",
        help="Do not ask any question; use the default answers",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.env:
        os.environ[ENVIRONMENT_ENV] = args.env
        clear_settings_cache()
        database.purge()

    configure_logging(console=False)
    console = CommandConsole(interactive=not args.no_interaction)
    command = InstallCommand(console=console, force=args.force, env=args.env)

    try:
        return command.handle()
    except InstallError as exc:
        console.error(str(exc))
        console.error("Installation failed.")
        return 1
    except ValidationError as exc:
        logger.exception("Invalid configuration files")
        console.error(f"Invalid configuration: {exc}")
        return 1
    except KeyboardInterrupt:
        console.line("")
        console.error("Installation cancelled.")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
