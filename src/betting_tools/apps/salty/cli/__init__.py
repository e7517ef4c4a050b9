"""CLI subpackage for the SaltyBet bot.

Create the Typer application and register all command modules.
"""

import typer

from betting_tools.apps.salty.cli.ratings_cmd import predict, ratings
from betting_tools.apps.salty.cli.run_cmd import run

app = typer.Typer(help="SaltyBet Elo betting bot")

app.command()(run)
app.command()(ratings)
app.command()(predict)

__all__ = ["app"]
