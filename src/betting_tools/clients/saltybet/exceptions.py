"""Exception hierarchy for SaltyBet client errors.

A base exception class with a specialised API error that carries the
failing operation, a message, and the HTTP status code when one exists.
"""


class SaltyBetError(Exception):
    """Base exception for all SaltyBet client errors."""


class SaltyBetAPIError(SaltyBetError):
    """Error returned by (or while talking to) the SaltyBet site.

    Carry the operation name alongside the message so log lines say which
    call failed without the caller having to re-wrap the error.

    Args:
        operation: Name of the client operation (e.g. ``"login"``).
        msg: Human-readable description of the error.
        status_code: HTTP status code, or ``None`` for transport failures.

    """

    def __init__(self, operation: str, msg: str, status_code: int | None = None) -> None:
        """Initialize SaltyBet API error.

        Args:
            operation: Name of the client operation that failed.
            msg: Human-readable description of the error.
            status_code: HTTP status code, if a response was received.

        """
        prefix = f"[{operation}]" if status_code is None else f"[{operation} {status_code}]"
        super().__init__(f"{prefix} {msg}")
        self.operation = operation
        self.msg = msg
        self.status_code = status_code


class BetRejectedError(SaltyBetAPIError):
    """The bet endpoint answered but did not accept the wager."""


class BalanceUnavailableError(SaltyBetAPIError):
    """The index page did not contain a readable balance."""


class FeedParseError(SaltyBetError):
    """The match state payload could not be turned into a snapshot."""
