"""
Shared pytest fixtures for round engine tests.

Provides card-string helpers for building known hands and a stacked-shoe
builder that deals an exact, known sequence of cards.
"""

from __future__ import annotations

import pytest

from blackjack_round.engine.cards import Card, str_to_card
from blackjack_round.engine.game_state import RoundState
from blackjack_round.engine.hand import Hand
from blackjack_round.engine.player import Player, make_dealer
from blackjack_round.engine.round_engine import deal_round
from blackjack_round.engine.settings import GameSettings
from blackjack_round.engine.shoe import Shoe


def cards(*card_strs: str) -> list[Card]:
    """Build a list of cards from human-readable strings.

    Examples:
        >>> [str(c) for c in cards('AS', '10H')]
        ['AS', '10H']
    """
    return [str_to_card(s) for s in card_strs]


def hand(*card_strs: str) -> Hand:
    """Build a Hand from human-readable card strings."""
    return Hand(cards(*card_strs))


class FixedRandomProvider:
    """Always returns the lower bound; a shuffle with it is deterministic."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int]] = []

    def next(self, min_inclusive: int, max_exclusive: int) -> int:
        self.calls.append((min_inclusive, max_exclusive))
        return min_inclusive


class ScriptedRandomProvider:
    """Returns pre-set values in order (each clamped into range)."""

    def __init__(self, values: list[int]) -> None:
        self._values = list(values)

    def next(self, min_inclusive: int, max_exclusive: int) -> int:
        value = self._values.pop(0) if self._values else min_inclusive
        return min(max(value, min_inclusive), max_exclusive - 1)


def stacked_state(
    player: tuple[str, str],
    dealer: tuple[str, str],
    draws: tuple[str, ...] = (),
    bet: float = 10.0,
    settings: GameSettings | None = None,
    **rules,
) -> RoundState:
    """Deal a round from a shoe stacked with a known card order.

    The shoe deals player[0], dealer[0], player[1], dealer[1], then ``draws``
    in order. Extra keyword arguments override GameSettings fields.

    Examples:
        >>> state = stacked_state(('10C', '9H'), ('7D', '9S'), draws=('KH',))
        >>> state.player.active_hand.best_value
        19
        >>> state.shoe.remaining
        1
    """
    if settings is None:
        settings = GameSettings(deck_count=1, **rules)
    order = [player[0], dealer[0], player[1], dealer[1], *draws]
    shoe = Shoe.from_cards(cards(*order))
    return deal_round(shoe, Player("Tester"), make_dealer(), settings, bet)


@pytest.fixture
def fixed_random() -> FixedRandomProvider:
    return FixedRandomProvider()


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings(deck_count=1)
