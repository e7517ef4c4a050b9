"""Typed data models for the SaltyBet site.

Provide frozen dataclasses and enums that insulate the bot from the
untyped ``state.json`` payload, the form values the bet endpoint
expects, and the account settings read from configuration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from betting_tools.clients.saltybet.exceptions import FeedParseError
from betting_tools.core.config import ConfigError, ConfigLoader

_REQUIRED_FIELDS = ("p1name", "p2name", "status")
_OPTIONAL_TEXT_FIELDS = ("p1total", "p2total", "alert", "remaining")
_ENDPOINT_FIELDS = ("index_url", "state_url", "login_url", "bet_url", "referer_url")


class Side(Enum):
    """Which corner a wager backs, using the bet endpoint's form values."""

    FIRST = "player1"
    SECOND = "player2"


@dataclass(frozen=True)
class MatchState:
    """One polled read of the match state feed.

    Equality is structural over every field, which is what the poller's
    de-duplication relies on. Only ``p1name``, ``p2name`` and ``status``
    carry meaning for the bot; the rest are kept so that a change in any of
    them still counts as a new snapshot.

    Args:
        p1name: Name of the first (red) contestant.
        p2name: Name of the second (blue) contestant.
        status: ``"open"``, ``"locked"`` or an outcome code.
        p1total: Total wagered on the first contestant, as sent.
        p2total: Total wagered on the second contestant, as sent.
        alert: Free-form alert text shown by the site.
        x: Opaque numeric flag from the feed.
        remaining: Free-form text about matches left in the mode.

    """

    p1name: str
    p2name: str
    status: str
    p1total: str = ""
    p2total: str = ""
    alert: str = ""
    x: int = 0
    remaining: str = ""

    @classmethod
    def from_json(cls, data: Any) -> "MatchState":
        """Build a snapshot from a decoded ``state.json`` payload.

        Args:
            data: Decoded JSON value.

        Returns:
            The parsed ``MatchState``.

        Raises:
            FeedParseError: If the payload is not an object, a required field
                is missing or not a string, or ``x`` is not an integer.

        """
        if not isinstance(data, dict):
            msg = f"Expected a JSON object, got {type(data).__name__}"
            raise FeedParseError(msg)

        for name in _REQUIRED_FIELDS:
            if not isinstance(data.get(name), str):
                msg = f"Missing or non-string field {name!r}"
                raise FeedParseError(msg)

        extras: dict[str, str] = {}
        for name in _OPTIONAL_TEXT_FIELDS:
            value = data.get(name, "")
            extras[name] = "" if value is None else str(value)

        raw_x = data.get("x", 0)
        if isinstance(raw_x, bool) or not isinstance(raw_x, int):
            msg = f"Field 'x' must be an integer, got {raw_x!r}"
            raise FeedParseError(msg)

        return cls(
            p1name=data["p1name"],
            p2name=data["p2name"],
            status=data["status"],
            x=raw_x,
            **extras,
        )


@dataclass(frozen=True)
class SaltyBetCredentials:
    """Account login and site endpoints for one bot session.

    The password is left out of ``repr`` so it never reaches the logs.

    Args:
        username: Account e-mail address.
        password: Account password.
        index_url: Page that shows the current balance.
        state_url: JSON match state feed.
        login_url: Sign-in form endpoint.
        bet_url: Bet placement endpoint.
        referer_url: Referer header sent with form posts.

    """

    username: str
    password: str = field(repr=False)
    index_url: str
    state_url: str
    login_url: str
    bet_url: str
    referer_url: str

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "SaltyBetCredentials":
        """Read the ``saltybet`` section of the settings.

        Args:
            config: Loaded configuration.

        Returns:
            Credentials with every endpoint filled in.

        Raises:
            ConfigError: If the username or password is empty, or an
                endpoint is missing.

        """
        settings = config.get_saltybet_config()
        values: dict[str, str] = {}
        for name in ("username", "password", *_ENDPOINT_FIELDS):
            value = settings.get(name)
            if value is None or not str(value).strip():
                msg = f"saltybet.{name} is not configured"
                raise ConfigError(msg)
            values[name] = str(value)
        return cls(**values)
