"""CLI commands for inspecting stored ratings.

List the highest-rated contestants, and show the Elo prediction for a
pairing without placing a bet.
"""

import asyncio
from typing import Annotated

import typer

from betting_tools.apps.salty.cli._helpers import open_repository, resolve_db_url
from betting_tools.apps.salty_bot.elo import expected, predict_winner
from betting_tools.apps.salty_bot.models import Party
from betting_tools.clients.saltybet.models import Side


def ratings(
    limit: Annotated[int, typer.Option(help="Number of contestants to show")] = 20,
    db_url: Annotated[
        str, typer.Option(help="SQLAlchemy async DB URL (defaults to settings)")
    ] = "",
) -> None:
    """Show the highest-rated contestants."""
    parties, settled = asyncio.run(_load_ratings(resolve_db_url(db_url), limit))
    if not parties:
        typer.echo("No rated contestants yet.")
        return

    typer.echo(f"{'#':>4}  {'Rating':>6}  Name")
    for rank, party in enumerate(parties, start=1):
        typer.echo(f"{rank:>4}  {party.rating.value:>6}  {party.name}")
    typer.echo(f"\n{settled} settled matches recorded")


def predict(
    first: Annotated[str, typer.Argument(help="First (red) contestant")],
    second: Annotated[str, typer.Argument(help="Second (blue) contestant")],
    db_url: Annotated[
        str, typer.Option(help="SQLAlchemy async DB URL (defaults to settings)")
    ] = "",
) -> None:
    """Show the Elo prediction for a pairing."""
    one, two = asyncio.run(_load_pair(resolve_db_url(db_url), first, second))
    score = expected(one.rating, two.rating)
    pick = one if predict_winner(one.rating, two.rating) is Side.FIRST else two

    typer.echo(f"{one.name}: {one.rating.value} ({score:.1%})")
    typer.echo(f"{two.name}: {two.rating.value} ({1 - score:.1%})")
    typer.echo(f"Pick: {pick.name}")


async def _load_ratings(db_url: str, limit: int) -> tuple[list[Party], int]:
    """Read the top parties and the settlement count.

    Args:
        db_url: SQLAlchemy async connection string.
        limit: Maximum number of parties.

    Returns:
        Tuple of (parties, settled match count).

    """
    repo = await open_repository(db_url)
    try:
        return await repo.list_parties(limit), await repo.count_settled_matches()
    finally:
        await repo.close()


async def _load_pair(db_url: str, first: str, second: str) -> tuple[Party, Party]:
    """Read both parties of a pairing.

    Args:
        db_url: SQLAlchemy async connection string.
        first: First contestant name.
        second: Second contestant name.

    Returns:
        Tuple of the two parties, defaulted if unknown.

    """
    repo = await open_repository(db_url)
    try:
        return await repo.get_party(first), await repo.get_party(second)
    finally:
        await repo.close()
