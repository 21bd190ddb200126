"""
Card, rank and suit values plus human-readable I/O helpers.

A card is an immutable (suit, rank) pair. Its base value is the numeric rank
for 2–10, 10 for the court cards and 1 for the ace; the ace's alternative
value of 11 is applied by hand scoring, never by the card itself.

String representations ('AS', '10H', 'KD') are used only at I/O boundaries:
test setup and log messages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class Suit(Enum):
    HEARTS = 'H'
    DIAMONDS = 'D'
    CLUBS = 'C'
    SPADES = 'S'


class Rank(Enum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


RANK_NAMES: dict[Rank, str] = {
    Rank.TWO: '2',
    Rank.THREE: '3',
    Rank.FOUR: '4',
    Rank.FIVE: '5',
    Rank.SIX: '6',
    Rank.SEVEN: '7',
    Rank.EIGHT: '8',
    Rank.NINE: '9',
    Rank.TEN: '10',
    Rank.JACK: 'J',
    Rank.QUEEN: 'Q',
    Rank.KING: 'K',
    Rank.ACE: 'A',
}

# Reverse lookup; 'T' is accepted as an alias for ten.
_RANKS_BY_NAME: dict[str, Rank] = {name: rank for rank, name in RANK_NAMES.items()}
_RANKS_BY_NAME['T'] = Rank.TEN

# Ranks worth 10 points (non-ace)
TEN_VALUE_RANKS: frozenset[Rank] = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING})


@dataclass(frozen=True)
class Card:
    """One playing card. Hashable, so shoes can be compared as multisets."""
    suit: Suit
    rank: Rank

    @property
    def base_value(self) -> int:
        """Point value with the ace counted low.

        Examples:
            >>> Card(Suit.SPADES, Rank.KING).base_value
            10
            >>> Card(Suit.SPADES, Rank.ACE).base_value
            1
            >>> Card(Suit.HEARTS, Rank.SEVEN).base_value
            7
        """
        if self.rank in TEN_VALUE_RANKS:
            return 10
        if self.rank is Rank.ACE:
            return 1
        return self.rank.value

    @property
    def is_ace(self) -> bool:
        return self.rank is Rank.ACE

    def __str__(self) -> str:
        return card_to_str(self)


def card_to_str(card: Card) -> str:
    """Convert a card to its short label.

    Examples:
        >>> card_to_str(Card(Suit.SPADES, Rank.ACE))
        'AS'
        >>> card_to_str(Card(Suit.CLUBS, Rank.TEN))
        '10C'
    """
    return RANK_NAMES[card.rank] + card.suit.value


def str_to_card(s: str) -> Card:
    """Parse a short label into a Card.

    The format is <rank><suit> where suit is the last character.
    Rank can be '2'-'9', '10' (or 'T'), 'J', 'Q', 'K', or 'A'.
    Suit can be 'H', 'D', 'C', or 'S'. Parsing is case-insensitive.

    Raises:
        ValueError: If the rank or suit is not recognised.

    Examples:
        >>> str_to_card('AS')
        Card(suit=<Suit.SPADES: 'S'>, rank=<Rank.ACE: 14>)
        >>> str_to_card('10h').rank
        <Rank.TEN: 10>
    """
    label = s.strip().upper()
    rank_str, suit_char = label[:-1], label[-1:]
    if rank_str not in _RANKS_BY_NAME:
        raise ValueError(f"Unknown card rank in {s!r}.")
    try:
        suit = Suit(suit_char)
    except ValueError:
        raise ValueError(f"Unknown card suit in {s!r}.") from None
    return Card(suit, _RANKS_BY_NAME[rank_str])


def hand_to_str(cards: Iterable[Card]) -> str:
    """Convert a sequence of cards to a space-separated string.

    Examples:
        >>> hand_to_str([str_to_card('AS'), str_to_card('KH')])
        'AS KH'
    """
    return ' '.join(card_to_str(c) for c in cards)
