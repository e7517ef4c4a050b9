"""Elo rating model for two-party matches.

Provide pure functions for the expected score of one rating against
another, the in-place rating update after a settled match, and the winner
prediction the bot bets on.
"""

import math

from betting_tools.apps.salty_bot.models import Outcome, Rating
from betting_tools.clients.saltybet.models import Side

K_FACTOR = 32
_SCALE = 400
_EVEN = 0.5
# 10 ** 300 still fits in a float; wider gaps are already a certain result
_MAX_EXPONENT = 300
_MAX_GAP = _SCALE * _MAX_EXPONENT


def expected(player: Rating, opponent: Rating) -> float:
    """Return the probability that ``player`` outscores ``opponent``.

    Use the logistic curve ``1 / (1 + 10 ** ((opponent - player) / 400))``.
    Equal ratings return exactly ``0.5`` without going through the curve.
    Gaps beyond 120,000 points are clamped, so extreme ratings score
    effectively 0.0 or 1.0 instead of overflowing.

    Args:
        player: Rating of the side being scored.
        opponent: Rating of the other side.

    Returns:
        Expected score between 0 and 1.

    """
    if player.value == opponent.value:
        return _EVEN
    gap = max(-_MAX_GAP, min(opponent.value - player.value, _MAX_GAP))
    exponent = gap / _SCALE
    return 1 / (1 + 10**exponent)


def update_ratings(outcome: Outcome, first: Rating, second: Rating) -> None:
    """Apply a settled match to both ratings in place.

    Every delta is floored before it is added, so a gain of 3.7 adds 3 and
    a loss of -3.2 adds -4.

    A draw adds ``K / 2`` to both ratings rather than pulling them toward
    each other.

    Args:
        outcome: How the match ended.
        first: Rating of the first contestant (mutated).
        second: Rating of the second contestant (mutated).

    """
    score = expected(first, second)
    if outcome is Outcome.FIRST_WINS:
        first_delta = K_FACTOR * (1 - score)
        second_delta = K_FACTOR * (score - 1)
    elif outcome is Outcome.SECOND_WINS:
        first_delta = K_FACTOR * -score
        second_delta = K_FACTOR * score
    else:
        first_delta = second_delta = K_FACTOR * _EVEN

    first.value += math.floor(first_delta)
    second.value += math.floor(second_delta)


def predict_winner(first: Rating, second: Rating) -> Side:
    """Pick the side to back; an even match goes to the first contestant.

    Args:
        first: Rating of the first contestant.
        second: Rating of the second contestant.

    Returns:
        ``Side.FIRST`` when its expected score is at least 0.5.

    """
    if expected(first, second) >= _EVEN:
        return Side.FIRST
    return Side.SECOND
