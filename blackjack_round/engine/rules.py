"""
Dealer policy, outcome evaluation and payout multipliers.

Outcome precedence (first match wins), applied to each player hand against
the single final dealer hand:
    1. Both blackjack         → push
    2. Player blackjack only  → player wins
    3. Dealer blackjack only  → dealer wins
    4. Player bust            → dealer wins (even if the dealer also busts)
    5. Dealer bust            → player wins
    6. Higher total wins; equal totals push

The blackjack checks must run before the bust checks.

Payout convention (multiplier applied to the hand's bet, player's perspective):
    +1.5 = blackjack win
    +1.0 = ordinary win
     0.0 = push
    -1.0 = loss
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .hand import Hand
from .player import Player

BLACKJACK_PAYOUT = 1.5
WIN_PAYOUT = 1.0
PUSH_PAYOUT = 0.0
LOSS_PAYOUT = -1.0

DEALER_STAND_TOTAL = 17


class Outcome(Enum):
    PLAYER_WIN = auto()
    DEALER_WIN = auto()
    PUSH = auto()


# ─── Dealer policy ────────────────────────────────────────────────────────────

def dealer_should_stand(hand: Hand, stand_on_soft_17: bool) -> bool:
    """Return True if the dealer must stand on ``hand``.

    Above 17 the dealer stands, below 17 the dealer hits. On exactly 17 the
    dealer stands unless the 17 is soft and the table hits soft 17.

    Examples:
        >>> from .cards import str_to_card as c
        >>> dealer_should_stand(Hand([c('AS'), c('6H')]), stand_on_soft_17=False)
        False
        >>> dealer_should_stand(Hand([c('AS'), c('6H')]), stand_on_soft_17=True)
        True
        >>> dealer_should_stand(Hand([c('10S'), c('7H')]), stand_on_soft_17=False)
        True
    """
    value = hand.best_value
    if value > DEALER_STAND_TOTAL:
        return True
    if value < DEALER_STAND_TOTAL:
        return False
    return stand_on_soft_17 or not hand.is_soft


# ─── Result types ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class HandResult:
    """Outcome of one player hand, from the player's perspective."""
    hand_index: int
    player_value: int
    dealer_value: int
    outcome: Outcome
    player_blackjack: bool
    dealer_blackjack: bool
    player_bust: bool
    dealer_bust: bool
    payout_multiplier: float

    def __str__(self) -> str:
        sign = "+" if self.payout_multiplier >= 0 else ""
        player_tag = " BJ" if self.player_blackjack else (" BUST" if self.player_bust else "")
        dealer_tag = " BJ" if self.dealer_blackjack else (" BUST" if self.dealer_bust else "")
        return (
            f"Hand {self.hand_index}: player {self.player_value}{player_tag} | "
            f"dealer {self.dealer_value}{dealer_tag} | "
            f"{self.outcome.name} {sign}{self.payout_multiplier:.1f}"
        )


@dataclass(frozen=True)
class RoundResult:
    """One HandResult per player hand, in hand-index order."""
    hand_results: tuple[HandResult, ...]

    def net_payout(self, hand_bets: list[float]) -> float:
        """Bankroll change for the round: sum(multiplier[i] * bet[i]).

        Examples:
            >>> win = HandResult(0, 20, 18, Outcome.PLAYER_WIN, False, False, False, False, 1.0)
            >>> loss = HandResult(1, 18, 20, Outcome.DEALER_WIN, False, False, False, False, -1.0)
            >>> RoundResult((win, loss)).net_payout([10.0, 20.0])
            -10.0
        """
        return sum(
            r.payout_multiplier * hand_bets[r.hand_index]
            for r in self.hand_results
            if 0 <= r.hand_index < len(hand_bets)
        )

    @property
    def has_player_blackjack_win(self) -> bool:
        return any(
            r.player_blackjack and r.outcome == Outcome.PLAYER_WIN
            for r in self.hand_results
        )

    @property
    def has_player_blackjack_push(self) -> bool:
        return any(
            r.player_blackjack and r.outcome == Outcome.PUSH
            for r in self.hand_results
        )

    def __iter__(self):
        return iter(self.hand_results)

    def __len__(self) -> int:
        return len(self.hand_results)

    def __getitem__(self, index: int) -> HandResult:
        return self.hand_results[index]


# ─── Evaluation ───────────────────────────────────────────────────────────────

def evaluate_outcome(
    player_value: int,
    dealer_value: int,
    player_bust: bool,
    dealer_bust: bool,
    player_blackjack: bool,
    dealer_blackjack: bool,
) -> Outcome:
    """Compare one player hand against the dealer using the fixed precedence.

    Examples:
        >>> evaluate_outcome(21, 21, False, False, True, True).name
        'PUSH'
        >>> evaluate_outcome(25, 26, True, True, False, False).name
        'DEALER_WIN'
        >>> evaluate_outcome(19, 26, False, True, False, False).name
        'PLAYER_WIN'
    """
    if player_blackjack and dealer_blackjack:
        return Outcome.PUSH
    if player_blackjack:
        return Outcome.PLAYER_WIN
    if dealer_blackjack:
        return Outcome.DEALER_WIN
    if player_bust:
        return Outcome.DEALER_WIN
    if dealer_bust:
        return Outcome.PLAYER_WIN
    if player_value > dealer_value:
        return Outcome.PLAYER_WIN
    if player_value < dealer_value:
        return Outcome.DEALER_WIN
    return Outcome.PUSH


def payout_multiplier(outcome: Outcome, player_blackjack: bool) -> float:
    """Map an outcome to the factor applied to the hand's bet.

    Examples:
        >>> payout_multiplier(Outcome.PLAYER_WIN, player_blackjack=True)
        1.5
        >>> payout_multiplier(Outcome.PUSH, player_blackjack=True)
        0.0
        >>> payout_multiplier(Outcome.DEALER_WIN, player_blackjack=False)
        -1.0
    """
    if outcome == Outcome.PLAYER_WIN:
        return BLACKJACK_PAYOUT if player_blackjack else WIN_PAYOUT
    if outcome == Outcome.DEALER_WIN:
        return LOSS_PAYOUT
    return PUSH_PAYOUT


def evaluate_hand(index: int, hand: Hand, dealer_hand: Hand) -> HandResult:
    """Score one player hand against the final dealer hand."""
    player_value = hand.best_value
    dealer_value = dealer_hand.best_value
    player_bust = hand.is_bust
    dealer_bust = dealer_hand.is_bust
    player_blackjack = hand.is_blackjack
    dealer_blackjack = dealer_hand.is_blackjack

    outcome = evaluate_outcome(
        player_value, dealer_value,
        player_bust, dealer_bust,
        player_blackjack, dealer_blackjack,
    )
    return HandResult(
        hand_index=index,
        player_value=player_value,
        dealer_value=dealer_value,
        outcome=outcome,
        player_blackjack=player_blackjack,
        dealer_blackjack=dealer_blackjack,
        player_bust=player_bust,
        dealer_bust=dealer_bust,
        payout_multiplier=payout_multiplier(outcome, player_blackjack),
    )


def evaluate_round(player: Player, dealer: Player) -> RoundResult:
    """Produce one HandResult per player hand, each judged independently."""
    dealer_hand = dealer.active_hand
    return RoundResult(tuple(
        evaluate_hand(index, hand, dealer_hand)
        for index, hand in enumerate(player.hands)
    ))
