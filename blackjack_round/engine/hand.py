"""
Hand evaluation: candidate totals and the predicates derived from them.

Every ace contributes 1 to the minimum total. Each ace may instead count as
11, so a hand with N aces has N + 1 candidate totals:

    minimum, minimum + 10, ..., minimum + 10 * N

Everything else (best value, bust, soft, blackjack) is derived from that
sorted tuple of totals; nothing is cached on the hand.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .cards import Card, hand_to_str


def hand_totals(cards: Sequence[Card]) -> tuple[int, ...]:
    """Return the sorted candidate totals for a sequence of cards.

    Examples:
        >>> from .cards import str_to_card as c
        >>> hand_totals([c('10C'), c('9H')])
        (19,)
        >>> hand_totals([c('AS'), c('7H')])
        (8, 18)
        >>> hand_totals([c('AS'), c('AH')])
        (2, 12, 22)
        >>> hand_totals([])
        (0,)
    """
    base_total = 0
    ace_count = 0
    for card in cards:
        if card.is_ace:
            ace_count += 1
        else:
            base_total += card.base_value

    min_total = base_total + ace_count
    return tuple(min_total + 10 * i for i in range(ace_count + 1))


def best_value(cards: Sequence[Card]) -> int:
    """Largest total that does not exceed 21, or the smallest total if all bust.

    Examples:
        >>> from .cards import str_to_card as c
        >>> best_value([c('AS'), c('7H')])
        18
        >>> best_value([c('AS'), c('7H'), c('9D')])
        17
        >>> best_value([c('KH'), c('QD'), c('5C')])
        25
    """
    totals = hand_totals(cards)
    under = [t for t in totals if t <= 21]
    return max(under) if under else totals[0]


def is_bust(cards: Sequence[Card]) -> bool:
    """Return True if every candidate total exceeds 21."""
    return all(t > 21 for t in hand_totals(cards))


def is_blackjack(cards: Sequence[Card]) -> bool:
    """Return True for a natural: exactly two cards worth 21."""
    return len(cards) == 2 and best_value(cards) == 21


def is_soft(cards: Sequence[Card]) -> bool:
    """Return True if an ace counted as 11 keeps the hand at 21 or under.

    Soft means some non-busting total differs from the all-aces-low total.
    A natural blackjack is classified as blackjack, never as soft.

    Examples:
        >>> from .cards import str_to_card as c
        >>> is_soft([c('AS'), c('6H')])          # 7 or 17
        True
        >>> is_soft([c('AS'), c('6H'), c('KD')]) # 17 only
        False
        >>> is_soft([c('AS'), c('KH')])          # natural
        False
    """
    if is_blackjack(cards):
        return False
    totals = hand_totals(cards)
    return any(t <= 21 and t != totals[0] for t in totals)


@dataclass
class Hand:
    """Ordered cards belonging to one betting unit.

    Scoring properties are recomputed from the cards on every access.
    """
    cards: list[Card] = field(default_factory=list)

    def add(self, card: Card) -> None:
        self.cards.append(card)

    def remove_at(self, index: int) -> Card:
        """Remove and return the card at ``index`` (used when splitting)."""
        return self.cards.pop(index)

    def clear(self) -> None:
        self.cards.clear()

    @property
    def totals(self) -> tuple[int, ...]:
        return hand_totals(self.cards)

    @property
    def best_value(self) -> int:
        return best_value(self.cards)

    @property
    def is_bust(self) -> bool:
        return is_bust(self.cards)

    @property
    def is_soft(self) -> bool:
        return is_soft(self.cards)

    @property
    def is_blackjack(self) -> bool:
        return is_blackjack(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return f"{hand_to_str(self.cards)} ({self.best_value})"
