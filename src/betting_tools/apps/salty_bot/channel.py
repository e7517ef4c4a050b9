"""Single-slot event channel between the poller and the decision loop.

Wrap an ``asyncio.Queue`` with a capacity of one so that at most one event
is in flight: the poller blocks on ``send`` until the decision loop has
taken the previous event. The channel can be closed by the producer, after
which iteration ends once any pending event has been delivered.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from betting_tools.apps.salty_bot.models import MatchEvent

_CAPACITY: Final = 1
_CLOSED: Final = object()


class ChannelClosedError(Exception):
    """Raised when sending on a closed channel."""


class EventChannel:
    """Bounded FIFO channel carrying ``MatchEvent`` values.

    One producer, one consumer. ``send`` applies back-pressure when the slot
    is taken; ``receive`` returns ``None`` once the channel is closed and
    drained. Iterate with ``async for`` to consume until closed.
    """

    def __init__(self) -> None:
        """Initialize an empty, open channel."""
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=_CAPACITY)
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return whether the producer has closed the channel."""
        return self._closed

    async def send(self, event: MatchEvent) -> None:
        """Put an event on the channel, waiting while it is full.

        Args:
            event: Event to deliver.

        Raises:
            ChannelClosedError: If the channel was already closed.

        """
        if self._closed:
            msg = "Cannot send on a closed event channel"
            raise ChannelClosedError(msg)
        await self._queue.put(event)

    async def receive(self) -> MatchEvent | None:
        """Take the next event, waiting while the channel is empty.

        Returns:
            The next event, or ``None`` when closed and drained.

        """
        if self._closed and self._queue.empty():
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            return None
        return item  # type: ignore[return-value]

    def close(self) -> None:
        """Mark the channel closed and wake a waiting consumer.

        Safe to call more than once. An event already in the slot is still
        delivered before iteration stops.
        """
        if self._closed:
            return
        self._closed = True
        # A full slot means the consumer will see the flag after draining it
        if self._queue.empty():
            self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[MatchEvent]:
        """Iterate over events until the channel is closed."""
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[MatchEvent]:
        while True:
            event = await self.receive()
            if event is None:
                return
            yield event
