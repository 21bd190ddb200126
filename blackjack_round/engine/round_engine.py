"""
Round engine: the transition functions that drive one round.

    start_round → (player_hit | player_stand | player_double_down | player_split)*
                → resolve_round

Every player action requires ``not is_round_over and is_player_turn``.
Each transition mutates the RoundState it is given and returns that same
object, so calls can be chained or used in assignment style.

Key rule interactions modelled here:
    - A natural blackjack on either side ends the round at the deal.
    - A hand that busts on a hit advances play to the next split hand.
    - Double-down draws exactly one card and always advances.
    - Splitting aces under the one-card restriction locks both hands; hit
      and split are refused on locked hands (except re-splitting a further
      ace pair when resplitting aces is allowed), and double-down is allowed
      only when doubling after split aces is enabled. If aces may not be
      re-split, the player's turn ends immediately.
"""

from __future__ import annotations

import logging

from .cards import Rank, hand_to_str
from .errors import (
    DoubleNotAvailable,
    HandLocked,
    InvalidBet,
    InvalidPlayerName,
    InvalidTurnState,
    PlayerTurnActive,
    SplitNotAvailable,
)
from .game_state import PlayerAction, RoundState
from .hand import Hand
from .player import Player, make_dealer
from .randomness import RandomProvider
from .rules import RoundResult, dealer_should_stand, evaluate_round
from .settings import GameSettings
from .shoe import Shoe

logger = logging.getLogger(__name__)


# ─── Round start ──────────────────────────────────────────────────────────────

def start_round(
    settings: GameSettings,
    randomness: RandomProvider,
    player_name: str,
    bet: float,
) -> RoundState:
    """Shuffle a fresh shoe, deal the opening cards and return the new state.

    Cards are dealt player, dealer, player, dealer. If either opening hand is
    a natural blackjack the round is over immediately and the player never
    acts.

    Args:
        settings: Table rules; validated before anything is dealt.
        randomness: Source for the shuffle.
        player_name: Display name; surrounding whitespace is stripped.
        bet: Base bet for the player's first hand.

    Raises:
        InvalidSettings: If the settings fail validation (e.g. deck count < 1).
        InvalidPlayerName: If the name is blank.
        InvalidBet: If the bet is outside [min_bet, max_bet].
    """
    settings.validate()

    if player_name is None or not player_name.strip():
        raise InvalidPlayerName("Player name is required.")

    if bet < settings.min_bet or bet > settings.max_bet:
        raise InvalidBet(
            f"Bet must be between {settings.min_bet:g} and {settings.max_bet:g}, got {bet:g}."
        )

    shoe = Shoe(settings.deck_count)
    shoe.shuffle(randomness)

    player = Player(player_name.strip())
    dealer = make_dealer()
    return deal_round(shoe, player, dealer, settings, bet)


def deal_round(
    shoe: Shoe,
    player: Player,
    dealer: Player,
    settings: GameSettings,
    bet: float,
) -> RoundState:
    """Deal the opening four cards from an already prepared shoe.

    Separated from start_round so a stacked shoe can be dealt in tests.
    """
    player.start_new_round()
    dealer.start_new_round()

    player.active_hand.add(shoe.draw())
    dealer.active_hand.add(shoe.draw())
    player.active_hand.add(shoe.draw())
    dealer.active_hand.add(shoe.draw())

    state = RoundState(
        shoe=shoe,
        player=player,
        dealer=dealer,
        settings=settings,
        base_bet=bet,
        hand_bets=[bet],
    )
    logger.debug(
        "Dealt %s: %s | dealer: %s",
        player.name, hand_to_str(player.active_hand.cards), hand_to_str(dealer.active_hand.cards),
    )

    if player.active_hand.is_blackjack or dealer.active_hand.is_blackjack:
        state.is_player_turn = False
        state.is_round_over = True
        logger.debug("Natural blackjack at the deal; round over")

    return state


# ─── Eligibility ──────────────────────────────────────────────────────────────

def _ensure_player_turn(state: RoundState) -> None:
    if state.is_round_over:
        raise InvalidTurnState("Round is already over.")
    if not state.is_player_turn:
        raise InvalidTurnState("It is not the player's turn.")


def _is_ace_pair(hand: Hand) -> bool:
    return (
        len(hand.cards) == 2
        and hand.cards[0].rank is Rank.ACE
        and hand.cards[1].rank is Rank.ACE
    )


def can_split(state: RoundState) -> bool:
    """Return True if the active hand may be split right now.

    Requires exactly two cards, fewer than max_hands hands, and a pair by
    rank (or two ten-value cards when ten-value splits are allowed). A locked
    hand may only be re-split when it is an ace pair and aces may be re-split.
    """
    if state.is_round_over or not state.is_player_turn:
        return False
    if len(state.player.hands) >= state.max_hands:
        return False

    cards = state.player.active_hand.cards
    if len(cards) != 2:
        return False

    same_rank = cards[0].rank is cards[1].rank
    ten_value_pair = (
        state.allow_ten_value_split
        and cards[0].base_value == 10
        and cards[1].base_value == 10
    )
    if not (same_rank or ten_value_pair):
        return False

    if state.is_hand_locked(state.player.active_hand_index):
        return state.allow_resplit_aces and _is_ace_pair(state.player.active_hand)

    return True


def can_double_down(state: RoundState) -> bool:
    """Return True if the active hand may double down right now.

    Requires exactly two cards. A locked (ace-split) hand may double only
    when doubling after split aces is allowed.
    """
    if state.is_round_over or not state.is_player_turn:
        return False
    if len(state.player.active_hand.cards) != 2:
        return False
    if state.is_hand_locked(state.player.active_hand_index):
        return state.allow_double_down_after_split_aces
    return True


# ─── Player actions ───────────────────────────────────────────────────────────

def _advance_player_hand(state: RoundState) -> None:
    """Move to the next split hand, or end the player's turn after the last."""
    if state.player.has_next_hand():
        state.player.advance_to_next_hand()
        logger.debug("Playing hand %d", state.player.active_hand_index)
        return
    state.is_player_turn = False
    logger.debug("Player turn over")


def player_hit(state: RoundState) -> RoundState:
    """Draw one card into the active hand; a bust advances play.

    Raises:
        InvalidTurnState: If it is not the player's turn.
        HandLocked: If the active hand is locked by an ace split.
        EmptyShoe: If the shoe is exhausted.
    """
    _ensure_player_turn(state)

    index = state.player.active_hand_index
    if state.is_hand_locked(index):
        raise HandLocked(f"Hand {index} is locked after splitting aces.")

    hand = state.player.active_hand
    card = state.shoe.draw()
    hand.add(card)
    logger.debug("Hand %d hits %s -> %d", index, card, hand.best_value)

    if hand.is_bust:
        _advance_player_hand(state)

    return state


def player_stand(state: RoundState) -> RoundState:
    """Finish the active hand and advance play.

    Raises:
        InvalidTurnState: If it is not the player's turn.
    """
    _ensure_player_turn(state)
    logger.debug("Hand %d stands on %d", state.player.active_hand_index, state.player.active_hand.best_value)
    _advance_player_hand(state)
    return state


def player_double_down(state: RoundState) -> RoundState:
    """Double the active hand's bet, draw exactly one card, then advance.

    The hand advances whether or not the new card busts it.

    Raises:
        InvalidTurnState: If it is not the player's turn.
        DoubleNotAvailable: If the hand does not have exactly two cards, or
                            is locked and doubling after split aces is off.
        EmptyShoe: If the shoe is exhausted.
    """
    _ensure_player_turn(state)

    if not can_double_down(state):
        raise DoubleNotAvailable("Double down is not available.")

    index = state.player.active_hand_index
    state.increase_hand_bet(index, state.hand_bets[index])
    card = state.shoe.draw()
    state.player.active_hand.add(card)
    logger.debug(
        "Hand %d doubles to %g, draws %s -> %d",
        index, state.hand_bets[index], card, state.player.active_hand.best_value,
    )

    _advance_player_hand(state)
    return state


def player_split(state: RoundState) -> RoundState:
    """Split the active pair into two hands and deal one card to each.

    The second card moves into a new hand appended to the player's hands,
    which gets a bet equal to the original hand's bet. Play stays on the
    original hand. Splitting aces under the one-card restriction locks both
    hands and, if aces may not be re-split, ends the player's turn.

    Raises:
        InvalidTurnState: If it is not the player's turn.
        SplitNotAvailable: If the active hand is not eligible to split.
        EmptyShoe: If the shoe is exhausted.
    """
    _ensure_player_turn(state)

    if not can_split(state):
        raise SplitNotAvailable("Split is not available.")

    player = state.player
    active_index = player.active_hand_index
    active_hand = player.active_hand
    is_ace_split = _is_ace_pair(active_hand)

    split_hand = Hand()
    split_hand.add(active_hand.remove_at(1))
    split_index = player.add_hand(split_hand)
    state.add_hand_bet(state.hand_bets[active_index])

    active_hand.add(state.shoe.draw())
    split_hand.add(state.shoe.draw())
    logger.debug(
        "Split hand %d: [%s] and new hand %d: [%s]",
        active_index, hand_to_str(active_hand.cards),
        split_index, hand_to_str(split_hand.cards),
    )

    if is_ace_split and state.restrict_split_aces_to_one_card:
        state.lock_hand(active_index)
        state.lock_hand(split_index)
        if not state.allow_resplit_aces:
            state.is_player_turn = False
            logger.debug("Split aces locked; player turn over")

    return state


_ACTION_NAMES: dict[str, PlayerAction] = {
    "hit": PlayerAction.HIT,
    "stand": PlayerAction.STAND,
    "double": PlayerAction.DOUBLE_DOWN,
    "double_down": PlayerAction.DOUBLE_DOWN,
    "doubledown": PlayerAction.DOUBLE_DOWN,
    "split": PlayerAction.SPLIT,
}


def parse_action(action: PlayerAction | str) -> PlayerAction:
    """Normalise an action given as a PlayerAction or its name.

    Names are case-insensitive: 'hit', 'stand', 'double_down' (or
    'doubleDown' / 'double'), 'split'.

    Raises:
        ValueError: If the action name is unknown.

    Examples:
        >>> parse_action('doubleDown')
        <PlayerAction.DOUBLE_DOWN: 3>
    """
    if isinstance(action, PlayerAction):
        return action
    try:
        return _ACTION_NAMES[action.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"Unknown player action {action!r}.") from None


def apply_action(state: RoundState, action: PlayerAction | str) -> RoundState:
    """Dispatch a player action given as a PlayerAction or its name.

    Raises:
        ValueError: If the action name is unknown.
    """
    action = parse_action(action)

    if action == PlayerAction.HIT:
        return player_hit(state)
    if action == PlayerAction.STAND:
        return player_stand(state)
    if action == PlayerAction.DOUBLE_DOWN:
        return player_double_down(state)
    if action == PlayerAction.SPLIT:
        return player_split(state)
    raise ValueError(f"Unknown player action {action!r}.")


# ─── Dealer play and resolution ───────────────────────────────────────────────

def play_dealer(state: RoundState) -> RoundState:
    """Draw into the dealer's hand until the dealer policy says stand."""
    hand = state.dealer.active_hand
    while not dealer_should_stand(hand, state.stand_on_soft_17):
        card = state.shoe.draw()
        hand.add(card)
        logger.debug("Dealer draws %s -> %d", card, hand.best_value)
    return state


def resolve_round(state: RoundState) -> RoundResult:
    """Play out the dealer if needed, mark the round over and evaluate it.

    Resolving a round that is already over (a natural at the deal, or a
    repeated call) evaluates the hands without drawing any more cards.

    Raises:
        PlayerTurnActive: If the player is still acting.
        EmptyShoe: If the shoe runs out while the dealer draws.
    """
    if not state.is_round_over:
        if state.is_player_turn:
            raise PlayerTurnActive("Player turn is still active.")
        play_dealer(state)
        state.is_round_over = True

    result = evaluate_round(state.player, state.dealer)
    logger.info(
        "Round resolved for %s: dealer %d, %s",
        state.player.name,
        state.dealer.active_hand.best_value,
        ", ".join(r.outcome.name for r in result),
    )
    return result
