"""Data models for the SaltyBet betting bot.

Define the values that flow through the bot: ratings and the parties that
hold them, the closed set of match outcomes, the event vocabulary the
poller emits, and the bot configuration.
"""

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_RATING = 1000

_DEFAULT_POLL_INTERVAL = 5.0
_DEFAULT_WAGER = 420
_DEFAULT_WAGER_THRESHOLD = 4200
_DEFAULT_WAGER_DIVISOR = 10


class Outcome(Enum):
    """Result of a settled match, decoded from the feed's status code."""

    FIRST_WINS = "1"
    SECOND_WINS = "2"
    DRAW = "draw"

    @classmethod
    def from_code(cls, code: str) -> "Outcome":
        """Decode a settled-match status code.

        ``"1"`` and ``"2"`` name the winner. Every other code is read as a
        draw; the feed has no dedicated draw code.

        Args:
            code: Raw ``status`` value from a settled snapshot.

        Returns:
            The decoded outcome.

        """
        if code == cls.FIRST_WINS.value:
            return cls.FIRST_WINS
        if code == cls.SECOND_WINS.value:
            return cls.SECOND_WINS
        return cls.DRAW


@dataclass
class Rating:
    """Mutable Elo skill score.

    Args:
        value: Integer rating; new parties start at 1000.

    """

    value: int = DEFAULT_RATING


@dataclass
class Party:
    """A named contestant and its current rating.

    The name is the identity: two parties with the same (case-sensitive)
    name are the same contestant.

    Args:
        name: Non-empty contestant name.
        rating: Current skill rating.

    Raises:
        ValueError: If the name is empty.

    """

    name: str
    rating: Rating = field(default_factory=Rating)

    def __post_init__(self) -> None:
        """Reject empty names."""
        if not self.name:
            msg = "Party name must be non-empty"
            raise ValueError(msg)


@dataclass(frozen=True)
class Opened:
    """Betting opened for a new match."""

    first_name: str
    second_name: str


@dataclass(frozen=True)
class Locked:
    """Betting closed; the match is in progress."""


@dataclass(frozen=True)
class Decided:
    """The match finished with the given outcome."""

    outcome: Outcome
    first_name: str
    second_name: str


@dataclass(frozen=True)
class Unknown:
    """A snapshot whose status could not be interpreted."""


MatchEvent = Opened | Locked | Decided | Unknown


@dataclass(frozen=True)
class BotConfig:
    """Configuration for the betting bot.

    Args:
        poll_interval_seconds: Pause before each read of the state feed.
        default_wager: Stake used when the balance is low or unknown.
        wager_threshold: Balance at or above which the stake becomes a
            fraction of the balance.
        wager_divisor: Divisor applied to the balance above the threshold.

    """

    poll_interval_seconds: float = _DEFAULT_POLL_INTERVAL
    default_wager: int = _DEFAULT_WAGER
    wager_threshold: int = _DEFAULT_WAGER_THRESHOLD
    wager_divisor: int = _DEFAULT_WAGER_DIVISOR
