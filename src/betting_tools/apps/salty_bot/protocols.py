"""Protocols for the collaborators the betting bot depends on.

Define the ``MatchFeed`` read used by the poller, and the
``SessionGateway`` and ``OutcomeStore`` used by the decision loop, so each
can be swapped for a test double. ``SaltyBetClient`` satisfies the first
two and ``PartyRepository`` the last.
"""

from typing import Protocol, runtime_checkable

from betting_tools.apps.salty_bot.models import Outcome, Party
from betting_tools.clients.saltybet.models import MatchState, Side


@runtime_checkable
class MatchFeed(Protocol):
    """Source of match state snapshots."""

    async def get_state(self) -> MatchState:
        """Return the latest snapshot, raising on fetch or parse failure."""
        ...


@runtime_checkable
class SessionGateway(Protocol):
    """Authenticated account operations.

    Implementors own the session (cookies) and keep it across calls, so a
    successful ``login`` affects every later ``get_balance`` and
    ``place_bet``.
    """

    async def login(self) -> None:
        """Authenticate with the stored credentials."""
        ...

    async def get_balance(self) -> int:
        """Return the current wagering balance."""
        ...

    async def place_bet(self, side: Side, amount: int) -> None:
        """Submit a wager, raising if it was not accepted.

        Args:
            side: Which contestant to back.
            amount: Stake in whole currency units.

        """
        ...


@runtime_checkable
class OutcomeStore(Protocol):
    """Persistence for ratings and settled matches."""

    async def get_party(self, name: str) -> Party:
        """Return the stored party, or a new one at the default rating."""
        ...

    async def put_party(self, party: Party) -> None:
        """Insert or replace a party's rating."""
        ...

    async def put_settled_match(self, outcome: Outcome, first_name: str, second_name: str) -> None:
        """Append a settlement record; a no-op if either party is unknown."""
        ...
