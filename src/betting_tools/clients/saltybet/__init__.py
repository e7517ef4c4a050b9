"""SaltyBet site client: match state feed and account session."""

from betting_tools.clients.saltybet.client import SaltyBetClient
from betting_tools.clients.saltybet.exceptions import (
    BalanceUnavailableError,
    BetRejectedError,
    FeedParseError,
    SaltyBetAPIError,
    SaltyBetError,
)
from betting_tools.clients.saltybet.models import MatchState, SaltyBetCredentials, Side

__all__ = [
    "BalanceUnavailableError",
    "BetRejectedError",
    "FeedParseError",
    "MatchState",
    "SaltyBetAPIError",
    "SaltyBetClient",
    "SaltyBetCredentials",
    "SaltyBetError",
    "Side",
]
