"""Exception hierarchy for the betting bot.

Only ``FatalBettingError`` and its subclasses are allowed to escape the
decision loop. Everything else is logged where it happens.
"""


class BettingError(Exception):
    """Base exception for betting bot errors."""


class StoreError(BettingError):
    """A storage operation failed.

    Args:
        operation: Store method that failed (e.g. ``"put_party"``).
        entity: Name of the party or record involved.
        msg: Human-readable description of the failure.

    """

    def __init__(self, operation: str, entity: str, msg: str) -> None:
        """Initialize store error.

        Args:
            operation: Store method that failed.
            entity: Name of the party or record involved.
            msg: Human-readable description of the failure.

        """
        super().__init__(f"[{operation} {entity!r}] {msg}")
        self.operation = operation
        self.entity = entity
        self.msg = msg


class FatalBettingError(BettingError):
    """The session can no longer be trusted; stop placing bets."""


class SessionExpiredError(FatalBettingError):
    """Logging in failed, so the stored credentials no longer work."""


class BetRetryFailedError(FatalBettingError):
    """A bet failed again after a successful re-login."""
