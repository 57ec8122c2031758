"""CLI entry point for Campus Events."""

from __future__ import annotations

import sys

import click

from campusevents import __version__
from campusevents.auth import AuthService
from campusevents.config import DEFAULT_DB_PATH, ConfigError, Settings
from campusevents.datastore import Datastore, DatastoreError, UserExistsError
from campusevents.logging import get_logger, setup_logging

logger = get_logger("cli")

db_option = click.option(
    "--db",
    "db_path",
    envvar="CAMPUSEVENTS_DB_PATH",
    default=DEFAULT_DB_PATH,
    show_default=True,
    help="Path to the SQLite database file",
)


@click.group()
@click.version_option(__version__)
def main() -> None:
    """Campus Events - event moderation and registration service."""
    pass


@main.command("init-db")
@db_option
def init_db(db_path: str) -> None:
    """Create database tables if they don't exist."""
    try:
        store = Datastore(db_path)
        store.close()
    except DatastoreError as e:
        click.echo(f"Database error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Database ready at {db_path}")


@main.command("create-admin")
@db_option
@click.option("--username", required=True, help="Login name")
@click.option("--email", required=True, help="Email address")
@click.option("--full-name", required=True, help="Display name")
@click.password_option(help="Password (prompted when omitted)")
def create_admin(db_path: str, username: str, email: str, full_name: str, password: str) -> None:
    """Create an administrator account."""
    try:
        store = Datastore(db_path)
    except DatastoreError as e:
        click.echo(f"Database error: {e}", err=True)
        sys.exit(1)
    try:
        user = AuthService(store).create_admin(
            username=username, email=email, password=password, full_name=full_name
        )
        logger.info("Created admin %s from the command line", user.username)
        click.echo(f"Created admin {user.username} ({user.id})")
    except UserExistsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except DatastoreError as e:
        click.echo(f"Database error: {e}", err=True)
        sys.exit(1)
    finally:
        store.close()


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.option("--log-dir", default=None, help="Log directory (default: logs/)")
def serve(host: str, port: int, log_dir: str | None) -> None:
    """Run the REST API server.

    Settings are read from CAMPUSEVENTS_* environment variables.
    """
    import uvicorn  # noqa: PLC0415

    from campusevents.api import create_app  # noqa: PLC0415

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    setup_logging(log_dir=log_dir, level="DEBUG" if settings.debug else None)
    logger.info("Serving Campus Events on %s:%d (db=%s)", host, port, settings.db_path)
    uvicorn.run(create_app(settings), host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
