"""CLI command for running the SaltyBet betting bot.

Log in with the configured account, then poll the match feed and bet on
every open match until stopped. A failed login ends the command with a
non-zero exit code.
"""

import asyncio
from typing import Annotated

import typer

from betting_tools.apps.salty.cli._helpers import (
    configure_logging,
    load_config,
    open_repository,
    resolve_db_url,
)
from betting_tools.apps.salty_bot.exceptions import FatalBettingError
from betting_tools.apps.salty_bot.models import BotConfig
from betting_tools.apps.salty_bot.runner import SaltyBot
from betting_tools.clients.saltybet.client import SaltyBetClient
from betting_tools.core.config import ConfigError


def run(
    db_url: Annotated[
        str, typer.Option(help="SQLAlchemy async DB URL (defaults to settings)")
    ] = "",
    poll_interval: Annotated[float, typer.Option(help="Seconds between feed polls")] = 5.0,
    restart: Annotated[  # noqa: FBT002
        bool,
        typer.Option(
            "--restart/--no-restart",
            help="Start again after a bet fails twice (login failures always stop)",
        ),
    ] = True,
    verbose: Annotated[  # noqa: FBT002
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Run the SaltyBet bot with real (salt) money.

    Predict each match with the stored Elo ratings, bet on the favourite,
    and update ratings as results come in.
    """
    configure_logging(verbose=verbose)
    config = load_config()
    bot_config = BotConfig(poll_interval_seconds=poll_interval)
    url = resolve_db_url(db_url)

    try:
        client = SaltyBetClient.from_config(config)
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Starting SaltyBet bot (db: {url})")
    try:
        asyncio.run(_run(client, url, bot_config, restart=restart))
    except FatalBettingError as exc:
        typer.echo(f"Stopped: {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def _run(
    client: SaltyBetClient,
    db_url: str,
    bot_config: BotConfig,
    *,
    restart: bool,
) -> None:
    """Run the bot with an open client and repository, closing both on exit.

    Args:
        client: Client built from settings; used as feed and gateway.
        db_url: SQLAlchemy async connection string.
        bot_config: Bot configuration.
        restart: Use ``run_forever`` instead of a single run.

    """
    repo = await open_repository(db_url)
    try:
        async with client:
            bot = SaltyBot(client, client, repo, bot_config)
            if restart:
                await bot.run_forever()
            else:
                await bot.run_once()
    finally:
        await repo.close()
