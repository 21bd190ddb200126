"""
Round state: the single aggregate that lives for exactly one round.

Round flow:
    DEAL → PLAYER_TURN (hand 0, hand 1, ...) → DEALER_TURN → ROUND_OVER

A natural blackjack on either side skips straight from DEAL to ROUND_OVER.

The RoundState is created by ``round_engine.start_round`` and mutated only by the
transition functions in ``round_engine``. It owns its shoe, player and dealer
exclusively; nothing is shared between rounds. Callers embedding the engine
in a concurrent host must serialise actions against one state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from .player import Player
from .settings import GameSettings
from .shoe import Shoe


class Phase(Enum):
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    ROUND_OVER = auto()


class PlayerAction(Enum):
    HIT = auto()
    STAND = auto()
    DOUBLE_DOWN = auto()
    SPLIT = auto()


@dataclass
class RoundState:
    """Mutable state of one round in progress.

    Invariants maintained by the engine:
        - len(hand_bets) == len(player.hands)
        - every locked index belongs to a hand created by an ace split
        - is_player_turn and is_round_over are never both True
    """
    shoe: Shoe
    player: Player
    dealer: Player
    settings: GameSettings
    base_bet: float
    hand_bets: list[float] = field(default_factory=list)
    locked_hand_indices: set[int] = field(default_factory=set)
    is_player_turn: bool = True
    is_round_over: bool = False

    def __post_init__(self) -> None:
        if not self.hand_bets:
            self.hand_bets = [self.base_bet] * len(self.player.hands)

    # ── Derived state ─────────────────────────────────────────────────────────

    @property
    def phase(self) -> Phase:
        if self.is_round_over:
            return Phase.ROUND_OVER
        if self.is_player_turn:
            return Phase.PLAYER_TURN
        return Phase.DEALER_TURN

    @property
    def total_bet(self) -> float:
        return sum(self.hand_bets)

    # ── Rule accessors ────────────────────────────────────────────────────────

    @property
    def stand_on_soft_17(self) -> bool:
        return self.settings.stand_on_soft_17

    @property
    def max_hands(self) -> int:
        return self.settings.max_hands

    @property
    def allow_ten_value_split(self) -> bool:
        return self.settings.allow_ten_value_split

    @property
    def allow_resplit_aces(self) -> bool:
        return self.settings.allow_resplit_aces

    @property
    def restrict_split_aces_to_one_card(self) -> bool:
        return self.settings.restrict_split_aces_to_one_card

    @property
    def allow_double_down_after_split_aces(self) -> bool:
        return self.settings.allow_double_down_after_split_aces

    # ── Bookkeeping ───────────────────────────────────────────────────────────

    def is_hand_locked(self, index: int) -> bool:
        return index in self.locked_hand_indices

    def lock_hand(self, index: int) -> None:
        self.locked_hand_indices.add(index)

    def add_hand_bet(self, amount: float) -> None:
        """Record the stake for a newly split hand."""
        self.hand_bets.append(amount)

    def increase_hand_bet(self, index: int, amount: float) -> None:
        self.hand_bets[index] += amount
