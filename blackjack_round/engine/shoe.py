"""
Shoe construction, shuffling and drawing.

The shoe is an ordered list of Card values holding ``deck_count`` decks.
The "top" of the shoe is the END of the list: draw() pops the last card.

Build order (deck by deck, suit by suit, rank by rank) is an implementation
detail; callers must shuffle before dealing and must not rely on it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .cards import Card, Rank, Suit
from .errors import EmptyShoe, InvalidSettings
from .randomness import RandomProvider

logger = logging.getLogger(__name__)

CARDS_PER_DECK = 52


def build_cards(deck_count: int) -> list[Card]:
    """Return ``deck_count`` ordered copies of all 52 (suit, rank) combinations.

    Examples:
        >>> len(build_cards(2))
        104
    """
    return [
        Card(suit, rank)
        for _ in range(deck_count)
        for suit in Suit
        for rank in Rank
    ]


class Shoe:
    """Mutable draw pile of one or more decks.

    Args:
        deck_count: Number of 52-card decks. Must be at least 1.

    Raises:
        InvalidSettings: If deck_count < 1.
    """

    def __init__(self, deck_count: int) -> None:
        if deck_count < 1:
            raise InvalidSettings(f"Deck count must be at least 1, got {deck_count}.")
        self._deck_count = deck_count
        self._cards: list[Card] = build_cards(deck_count)

    @classmethod
    def from_cards(cls, cards: Iterable[Card], deck_count: int = 1) -> Shoe:
        """Build a shoe that deals ``cards`` in the given order.

        The first card of ``cards`` is the first one drawn. Used for
        deterministic test setups ("stacked" shoes). ``deck_count`` only sets
        the size reset() rebuilds; it is not checked against ``cards``.

        Examples:
            >>> from .cards import str_to_card
            >>> shoe = Shoe.from_cards([str_to_card('AS'), str_to_card('KH')])
            >>> str(shoe.draw())
            'AS'
            >>> shoe.remaining
            1

        Raises:
            InvalidSettings: If deck_count < 1.
        """
        if deck_count < 1:
            raise InvalidSettings(f"Deck count must be at least 1, got {deck_count}.")
        shoe = cls.__new__(cls)
        shoe._deck_count = deck_count
        shoe._cards = list(reversed(list(cards)))
        return shoe

    @property
    def deck_count(self) -> int:
        return self._deck_count

    @property
    def remaining(self) -> int:
        """Number of cards left to draw."""
        return len(self._cards)

    @property
    def cards(self) -> tuple[Card, ...]:
        """Read-only view, bottom of the shoe first."""
        return tuple(self._cards)

    def reset(self) -> None:
        """Restore a full, unshuffled shoe of ``deck_count`` decks.

        A stacked shoe from from_cards() also comes back as full decks.
        """
        self._cards = build_cards(self._deck_count)

    def shuffle(self, randomness: RandomProvider) -> None:
        """Fisher–Yates shuffle in place, driven by ``randomness``.

        Walks i from the last index down to 1 and swaps position i with
        j = randomness.next(0, i + 1), so every index is visited once and the
        result is a uniform permutation given a uniform source.
        """
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = randomness.next(0, i + 1)
            cards[i], cards[j] = cards[j], cards[i]
        logger.debug("Shuffled shoe of %d deck(s), %d cards", self._deck_count, len(cards))

    def draw(self) -> Card:
        """Remove and return the top card.

        Raises:
            EmptyShoe: If no cards remain.
        """
        if not self._cards:
            raise EmptyShoe("Cannot draw from an empty shoe.")
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)
