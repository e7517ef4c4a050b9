"""Timestamp helpers for stored records."""

import time

_MS_PER_SECOND = 1000


def now_ms() -> int:
    """Return the current time as Unix epoch milliseconds.

    Returns:
        Milliseconds since the epoch, truncated to an integer.

    """
    return int(time.time() * _MS_PER_SECOND)
