"""Match state poller.

Read the SaltyBet state feed on a fixed cadence, drop snapshots identical
to the previous one, and turn each change into a ``MatchEvent`` on the
event channel. Feed failures are never fatal: the cycle is skipped and the
next poll tries again.
"""

import asyncio
import logging

from betting_tools.apps.salty_bot.channel import EventChannel
from betting_tools.apps.salty_bot.models import (
    BotConfig,
    Decided,
    Locked,
    MatchEvent,
    Opened,
    Outcome,
    Unknown,
)
from betting_tools.apps.salty_bot.protocols import MatchFeed
from betting_tools.clients.saltybet.exceptions import SaltyBetError
from betting_tools.clients.saltybet.models import MatchState

logger = logging.getLogger(__name__)

_STATUS_OPEN = "open"
_STATUS_LOCKED = "locked"


def classify_state(state: MatchState) -> MatchEvent:
    """Map a snapshot's status onto the event vocabulary.

    ``"locked"`` and ``"open"`` are betting phases; any other non-blank
    status is an outcome code decoded by ``Outcome.from_code``. A blank
    status carries no information and yields ``Unknown``, as does an open
    or decided snapshot missing either contestant name.

    Args:
        state: Snapshot to classify.

    Returns:
        The event describing the snapshot.

    """
    status = state.status
    if status == _STATUS_LOCKED:
        return Locked()
    if not status.strip() or not state.p1name or not state.p2name:
        return Unknown()
    if status == _STATUS_OPEN:
        return Opened(state.p1name, state.p2name)
    return Decided(Outcome.from_code(status), state.p1name, state.p2name)


class MatchFeedPoller:
    """Poll the state feed and emit de-duplicated events.

    Hold the last snapshot seen. A fetched snapshot equal to it is dropped;
    anything else is classified and sent, then becomes the new last
    snapshot.

    Args:
        feed: Source of snapshots.
        sink: Channel the events are sent on.
        config: Bot configuration (poll interval).

    """

    def __init__(self, feed: MatchFeed, sink: EventChannel, config: BotConfig | None = None) -> None:
        """Initialize the poller.

        Args:
            feed: Source of snapshots.
            sink: Channel the events are sent on.
            config: Bot configuration. Defaults to ``BotConfig()``.

        """
        self._feed = feed
        self._sink = sink
        self._config = config or BotConfig()
        self._last_state: MatchState | None = None
        self._events_emitted = 0

    @property
    def events_emitted(self) -> int:
        """Return how many events have been sent so far."""
        return self._events_emitted

    async def run(self) -> None:
        """Poll forever until cancelled.

        The channel is closed when this coroutine exits for any reason so
        the consumer's iteration ends.
        """
        logger.info("Polling match state every %.1fs", self._config.poll_interval_seconds)
        try:
            while True:
                await asyncio.sleep(self._config.poll_interval_seconds)
                await self.poll_once()
        finally:
            self._sink.close()

    async def poll_once(self) -> MatchEvent | None:
        """Run a single fetch-compare-emit cycle.

        Returns:
            The event that was sent, or ``None`` if the cycle was skipped.

        """
        try:
            state = await self._feed.get_state()
        except SaltyBetError as exc:
            logger.debug("Skipping poll cycle: %s", exc)
            return None

        if state == self._last_state:
            return None

        event = classify_state(state)
        try:
            logger.debug("Emitting %s", event)
            await self._sink.send(event)
            self._events_emitted += 1
        finally:
            self._last_state = state
        return event


async def start_poller(feed: MatchFeed, sink: EventChannel, config: BotConfig | None = None) -> None:
    """Run a ``MatchFeedPoller`` on ``feed`` feeding ``sink`` until cancelled.

    Args:
        feed: Source of snapshots.
        sink: Channel the events are sent on.
        config: Bot configuration.

    """
    await MatchFeedPoller(feed, sink, config).run()
