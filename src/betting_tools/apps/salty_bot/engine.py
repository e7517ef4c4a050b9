"""Decision loop: bet on open matches, settle decided ones.

Consume events from the poller in order. When betting opens, look up both
contestants, back the one the Elo model favours, and place the wager
through the session gateway. When a match is decided, update both ratings
and persist them along with a settlement record.

A failed bet gets exactly one recovery attempt: log in again and retry
once. If logging in fails, or the retry fails, the loop stops with a
``FatalBettingError`` instead of betting against a broken session.
"""

import logging

from betting_tools.apps.salty_bot.channel import EventChannel
from betting_tools.apps.salty_bot.elo import expected, predict_winner, update_ratings
from betting_tools.apps.salty_bot.exceptions import (
    BetRetryFailedError,
    SessionExpiredError,
    StoreError,
)
from betting_tools.apps.salty_bot.models import BotConfig, Decided, MatchEvent, Opened
from betting_tools.apps.salty_bot.protocols import OutcomeStore, SessionGateway
from betting_tools.clients.saltybet.exceptions import SaltyBetError
from betting_tools.clients.saltybet.models import Side

logger = logging.getLogger(__name__)


def size_wager(balance: int | None, config: BotConfig) -> int:
    """Return the stake for a balance.

    A tenth of the balance once it reaches the threshold, otherwise the
    fixed default. An unknown balance (``None``) also gets the default.

    Args:
        balance: Current balance, or ``None`` if it could not be read.
        config: Bot configuration with the sizing constants.

    Returns:
        Stake in whole currency units.

    """
    if balance is None:
        return config.default_wager
    if balance >= config.wager_threshold:
        return balance // config.wager_divisor
    return config.default_wager


class DecisionLoop:
    """Event consumer that places bets and settles ratings.

    The loop is the only writer of ratings, so it needs no locking of its
    own.

    Args:
        store: Rating and settlement persistence.
        gateway: Authenticated account session.
        config: Bot configuration (wager sizing).

    """

    def __init__(
        self,
        store: OutcomeStore,
        gateway: SessionGateway,
        config: BotConfig | None = None,
    ) -> None:
        """Initialize the decision loop.

        Args:
            store: Rating and settlement persistence.
            gateway: Authenticated account session.
            config: Bot configuration. Defaults to ``BotConfig()``.

        """
        self._store = store
        self._gateway = gateway
        self._config = config or BotConfig()
        self.bets_placed = 0
        self.matches_settled = 0

    async def run(self, source: EventChannel) -> None:
        """Handle events until the channel is closed.

        Args:
            source: Channel fed by the poller.

        Raises:
            FatalBettingError: If the session cannot be recovered.

        """
        async for event in source:
            await self.handle(event)
        logger.info(
            "Event channel closed after %d bets and %d settlements",
            self.bets_placed,
            self.matches_settled,
        )

    async def handle(self, event: MatchEvent) -> None:
        """Dispatch a single event.

        ``Locked`` and ``Unknown`` events need no action. An ``Opened`` or
        ``Decided`` event without both contestant names is skipped.

        Args:
            event: Event from the poller.

        """
        if isinstance(event, Opened | Decided) and not (event.first_name and event.second_name):
            logger.warning("Skipping %s: missing contestant name", event)
            return
        if isinstance(event, Opened):
            await self._on_opened(event)
        elif isinstance(event, Decided):
            await self._on_decided(event)
        else:
            logger.debug("Ignoring %s", event)

    async def _on_opened(self, event: Opened) -> None:
        """Back the favourite, recovering once from a failed bet.

        Args:
            event: The betting-open event.

        Raises:
            SessionExpiredError: If logging in again fails.
            BetRetryFailedError: If the bet fails again after logging in.

        """
        first = await self._store.get_party(event.first_name)
        second = await self._store.get_party(event.second_name)
        side = predict_winner(first.rating, second.rating)
        pick = first if side is Side.FIRST else second
        logger.debug(
            "%s (%d) vs %s (%d): expected %.3f",
            first.name,
            first.rating.value,
            second.name,
            second.rating.value,
            expected(first.rating, second.rating),
        )

        try:
            wager = await self._bet(side)
        except SaltyBetError as exc:
            logger.warning("Bet on %s failed (%s), logging in again", pick.name, exc)
            try:
                await self._gateway.login()
            except SaltyBetError as login_exc:
                msg = f"Login failed after a rejected bet on {pick.name!r}: {login_exc}"
                raise SessionExpiredError(msg) from login_exc
            try:
                wager = await self._bet(side)
            except SaltyBetError as retry_exc:
                msg = f"Bet on {pick.name!r} failed again after logging in: {retry_exc}"
                raise BetRetryFailedError(msg) from retry_exc

        self.bets_placed += 1
        logger.info("Placed a bet of %d on: %s", wager, pick.name)

    async def _bet(self, side: Side) -> int:
        """Size and submit one wager.

        Args:
            side: Which contestant to back.

        Returns:
            The stake that was placed.

        """
        try:
            balance: int | None = await self._gateway.get_balance()
        except SaltyBetError as exc:
            logger.warning("Balance unavailable (%s), using default wager", exc)
            balance = None
        wager = size_wager(balance, self._config)
        logger.debug("Betting %d on %s", wager, side.value)
        await self._gateway.place_bet(side, wager)
        return wager

    async def _on_decided(self, event: Decided) -> None:
        """Update and persist both ratings, then record the settlement.

        Storage failures are logged; they never stop the loop.

        Args:
            event: The match-decided event.

        """
        first = await self._store.get_party(event.first_name)
        second = await self._store.get_party(event.second_name)
        update_ratings(event.outcome, first.rating, second.rating)

        try:
            await self._store.put_party(first)
            await self._store.put_party(second)
        except StoreError:
            logger.exception("Could not store ratings for %s vs %s", first.name, second.name)
            return

        try:
            await self._store.put_settled_match(event.outcome, first.name, second.name)
        except StoreError:
            logger.exception("Could not record settlement for %s vs %s", first.name, second.name)

        self.matches_settled += 1
        logger.info(
            "winner: %s; one: %s (%d); two: %s (%d)",
            event.outcome.name,
            first.name,
            first.rating.value,
            second.name,
            second.rating.value,
        )


async def run_decision_loop(
    source: EventChannel,
    store: OutcomeStore,
    gateway: SessionGateway,
    config: BotConfig | None = None,
) -> None:
    """Run a ``DecisionLoop`` over ``source`` until it is closed.

    Args:
        source: Channel fed by the poller.
        store: Rating and settlement persistence.
        gateway: Authenticated account session.
        config: Bot configuration.

    Raises:
        FatalBettingError: If the session cannot be recovered.

    """
    await DecisionLoop(store, gateway, config).run(source)
