"""Shared helpers for SaltyBet CLI commands.

Centralise logging setup, settings loading, and repository construction
so each command module stays focused on its own output.
"""

import logging

import typer

from betting_tools.apps.salty_bot.repository import PartyRepository
from betting_tools.core.config import ConfigError, ConfigLoader, get_config


def configure_logging(*, verbose: bool) -> None:
    """Configure root logging for a CLI command.

    Args:
        verbose: Log at DEBUG instead of INFO.

    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def load_config() -> ConfigLoader:
    """Load settings, exiting with an error message if they are incomplete.

    Returns:
        The shared ``ConfigLoader``.

    """
    try:
        return get_config()
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def resolve_db_url(db_url: str) -> str:
    """Return ``db_url`` if given, else the configured database URL.

    Args:
        db_url: Value of the ``--db-url`` option (may be empty).

    Returns:
        SQLAlchemy async connection string.

    """
    if db_url:
        return db_url
    return load_config().get_database_url()


async def open_repository(db_url: str) -> PartyRepository:
    """Create a repository and make sure its tables exist.

    Args:
        db_url: SQLAlchemy async connection string.

    Returns:
        Initialised ``PartyRepository``.

    """
    repo = PartyRepository(db_url)
    await repo.init_db()
    return repo
