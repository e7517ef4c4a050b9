"""Top-level runner that wires the poller to the decision loop.

Log in, start the poller as a background task, and consume its events
until the decision loop stops. ``run_forever`` restarts after a bet that
failed even after logging in again, but a failed login always ends the
run: the credentials are no longer good and betting must stop.
"""

import asyncio
import logging
from typing import Any

from betting_tools.apps.salty_bot.channel import EventChannel
from betting_tools.apps.salty_bot.engine import DecisionLoop
from betting_tools.apps.salty_bot.exceptions import BetRetryFailedError, SessionExpiredError
from betting_tools.apps.salty_bot.models import BotConfig
from betting_tools.apps.salty_bot.poller import MatchFeedPoller
from betting_tools.apps.salty_bot.protocols import MatchFeed, OutcomeStore, SessionGateway
from betting_tools.clients.saltybet.exceptions import SaltyBetError

logger = logging.getLogger(__name__)

_DEFAULT_RESTART_DELAY = 5.0


def _log_task_exception(task: asyncio.Task[Any]) -> None:
    """Log unhandled exceptions from the poller task.

    Args:
        task: The completed asyncio task.

    """
    if not task.cancelled() and task.exception() is not None:
        logger.error(
            "Background task %s failed: %s",
            task.get_name(),
            task.exception(),
            exc_info=task.exception(),
        )


class SaltyBot:
    """Run the poller and decision loop against one session.

    Args:
        feed: Source of match state snapshots.
        gateway: Authenticated account session.
        store: Rating and settlement persistence.
        config: Bot configuration.

    """

    def __init__(
        self,
        feed: MatchFeed,
        gateway: SessionGateway,
        store: OutcomeStore,
        config: BotConfig | None = None,
    ) -> None:
        """Initialize the bot.

        Args:
            feed: Source of match state snapshots.
            gateway: Authenticated account session.
            store: Rating and settlement persistence.
            config: Bot configuration. Defaults to ``BotConfig()``.

        """
        self._feed = feed
        self._gateway = gateway
        self._store = store
        self._config = config or BotConfig()
        self.runs = 0

    async def run_once(self) -> None:
        """Log in, then poll and bet until the event channel closes.

        Raises:
            SessionExpiredError: If the initial login fails.
            FatalBettingError: If the decision loop cannot recover a bet.

        """
        self.runs += 1
        try:
            await self._gateway.login()
        except SaltyBetError as exc:
            msg = f"Could not log in: {exc}"
            raise SessionExpiredError(msg) from exc

        channel = EventChannel()
        poller = MatchFeedPoller(self._feed, channel, self._config)
        poller_task = asyncio.create_task(poller.run(), name="match-poller")
        poller_task.add_done_callback(_log_task_exception)

        try:
            await DecisionLoop(self._store, self._gateway, self._config).run(channel)
        finally:
            poller_task.cancel()
            await asyncio.gather(poller_task, return_exceptions=True)

    async def run_forever(self, *, restart_delay: float = _DEFAULT_RESTART_DELAY) -> None:
        """Keep running, restarting after recoverable stops.

        Args:
            restart_delay: Seconds to wait before starting again.

        Raises:
            SessionExpiredError: If logging in fails; never retried.

        """
        while True:
            try:
                await self.run_once()
                logger.warning("Event channel closed, restarting")
            except BetRetryFailedError:
                logger.exception("Failed in the game loop, restarting")
            await asyncio.sleep(restart_delay)
