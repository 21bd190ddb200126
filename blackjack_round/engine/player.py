"""
Hand ownership shared by the human player and the dealer.

Both sides are plain Player objects. What differs is policy, not data: the
dealer's hit/stand decision is the free function ``dealer_should_stand`` in
``rules``, and only the human player ever holds more than one hand.
"""

from __future__ import annotations

from .errors import NoNextHand
from .hand import Hand

DEALER_NAME = "Dealer"


class Player:
    """A named owner of one or more hands plus a pointer to the hand in play."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.hands: list[Hand] = []
        self.active_hand_index = 0
        self.start_new_round()

    @property
    def active_hand(self) -> Hand:
        return self.hands[self.active_hand_index]

    def start_new_round(self) -> None:
        """Discard all hands and start again with one empty hand."""
        self.hands = [Hand()]
        self.active_hand_index = 0

    def add_hand(self, hand: Hand) -> int:
        """Append a hand (after a split) and return its index."""
        self.hands.append(hand)
        return len(self.hands) - 1

    def has_next_hand(self) -> bool:
        return self.active_hand_index + 1 < len(self.hands)

    def advance_to_next_hand(self) -> None:
        """Move the active-hand pointer one hand to the right.

        Raises:
            NoNextHand: If the active hand is already the last one.
        """
        if not self.has_next_hand():
            raise NoNextHand(
                f"{self.name} has no hand after index {self.active_hand_index}."
            )
        self.active_hand_index += 1

    def __repr__(self) -> str:
        return (
            f"Player(name={self.name!r}, hands={len(self.hands)}, "
            f"active_hand_index={self.active_hand_index})"
        )


def make_dealer() -> Player:
    return Player(DEALER_NAME)
