"""Tests for betting bot data models."""

import pytest

from betting_tools.apps.salty_bot.models import (
    DEFAULT_RATING,
    BotConfig,
    Decided,
    Locked,
    Opened,
    Outcome,
    Party,
    Rating,
)

_DEFAULT_WAGER = 420
_DEFAULT_THRESHOLD = 4200


class TestOutcome:
    """Tests for decoding settled-match status codes."""

    def test_one_is_first_wins(self) -> None:
        """Test code "1" decodes to a first-corner win."""
        assert Outcome.from_code("1") is Outcome.FIRST_WINS

    def test_two_is_second_wins(self) -> None:
        """Test code "2" decodes to a second-corner win."""
        assert Outcome.from_code("2") is Outcome.SECOND_WINS

    @pytest.mark.parametrize("code", ["weird", "0", "3", "draw", " 1", "12"])
    def test_unrecognised_codes_fall_back_to_draw(self, code: str) -> None:
        """Test every other code is read as a draw."""
        assert Outcome.from_code(code) is Outcome.DRAW


class TestParty:
    """Tests for Party and Rating."""

    def test_new_party_has_default_rating(self) -> None:
        """Test a party starts at the default rating."""
        party = Party("Ryu")
        assert party.rating.value == DEFAULT_RATING

    def test_parties_do_not_share_ratings(self) -> None:
        """Test each party gets its own Rating instance."""
        one, two = Party("Ryu"), Party("Ken")
        one.rating.value += 10
        assert two.rating.value == DEFAULT_RATING

    def test_empty_name_rejected(self) -> None:
        """Test an empty name raises ValueError."""
        with pytest.raises(ValueError, match="non-empty"):
            Party("")

    def test_names_are_case_sensitive(self) -> None:
        """Test parties differing only in case are different."""
        assert Party("ryu", Rating(1200)) != Party("Ryu", Rating(1200))


class TestEvents:
    """Tests for event equality."""

    def test_opened_structural_equality(self) -> None:
        """Test two Opened events with the same names are equal."""
        assert Opened("X", "Y") == Opened("X", "Y")
        assert Opened("X", "Y") != Opened("Y", "X")

    def test_locked_events_equal(self) -> None:
        """Test all Locked events compare equal."""
        assert Locked() == Locked()

    def test_decided_includes_outcome(self) -> None:
        """Test Decided events differ by outcome."""
        assert Decided(Outcome.FIRST_WINS, "X", "Y") != Decided(Outcome.DRAW, "X", "Y")


class TestBotConfig:
    """Tests for BotConfig defaults."""

    def test_defaults(self) -> None:
        """Test the default poll interval and wager sizing constants."""
        config = BotConfig()
        assert config.poll_interval_seconds == 5.0  # noqa: PLR2004
        assert config.default_wager == _DEFAULT_WAGER
        assert config.wager_threshold == _DEFAULT_THRESHOLD
        assert config.wager_divisor == 10  # noqa: PLR2004
