"""Bankroll session: table limits, stakes and settlement around the engine.

The engine knows nothing about money beyond the per-hand bet list. This layer
checks the bankroll before every stake, debits stakes as they are placed and
credits each hand ``bet * (1 + payout_multiplier)`` when the round resolves,
so the bankroll moves by ``sum(payout_multiplier[i] * bet[i])`` per round.

It also decides what a display may show: the dealer's hole card stays hidden
while the player is acting.
"""

from __future__ import annotations

import logging

from blackjack_round.engine import round_engine
from blackjack_round.engine.cards import Card
from blackjack_round.engine.errors import InsufficientFunds, InvalidBet, InvalidTurnState
from blackjack_round.engine.game_state import PlayerAction, RoundState
from blackjack_round.engine.hand import best_value
from blackjack_round.engine.randomness import RandomProvider
from blackjack_round.engine.rules import RoundResult
from blackjack_round.engine.settings import GameSettings

logger = logging.getLogger(__name__)

STATUS_IDLE = "Select 'New round' to start."
STATUS_STARTED = "New round started."
STATUS_COMPLETE = "Round complete."
STATUS_BLACKJACK = "Blackjack!"
STATUS_BLACKJACK_PUSH = "Blackjack push."
STATUS_DOUBLED = "Double down resolved."
STATUS_SPLIT = "Split completed."


def summarize_round(result: RoundResult) -> str:
    """One-line status for a resolved round."""
    if len(result) == 0:
        return STATUS_COMPLETE
    if result.has_player_blackjack_win:
        return STATUS_BLACKJACK
    if result.has_player_blackjack_push:
        return STATUS_BLACKJACK_PUSH
    return STATUS_COMPLETE


class GameSession:
    """One player's sequence of rounds against a bankroll.

    Args:
        settings: Rules and table limits; the bankroll starts at
                  ``settings.starting_balance``.
        randomness: Shuffle source passed to every round.
        engine: Object exposing the round engine functions. Defaults to the
                ``round_engine`` module; tests may pass a stand-in.
    """

    def __init__(
        self,
        settings: GameSettings,
        randomness: RandomProvider,
        engine=round_engine,
    ) -> None:
        settings.validate()
        self._settings = settings
        self._randomness = randomness
        self._engine = engine
        self.bankroll: float = settings.starting_balance
        self.status: str = STATUS_IDLE
        self.round_state: RoundState | None = None
        self.last_result: RoundResult | None = None

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def min_bet(self) -> float:
        return self._settings.min_bet

    @property
    def max_bet(self) -> float:
        return self._settings.max_bet

    def update_settings(self, settings: GameSettings) -> None:
        """Apply new rules from the next round on; the bankroll is kept."""
        settings.validate()
        self._settings = settings

    # ── Round lifecycle ───────────────────────────────────────────────────────

    def start_round(self, player_name: str, bet: float) -> RoundState:
        """Debit the bet and deal a new round.

        A round that ends at the deal (natural blackjack) is resolved and
        settled before this returns.

        Raises:
            InvalidTurnState: If the current round has not been resolved.
            InvalidBet: If the bet is outside the table limits.
            InsufficientFunds: If the bet exceeds the bankroll.
            InvalidPlayerName: If the name is blank.
        """
        if self.round_state is not None and not self.round_state.is_round_over:
            raise InvalidTurnState("Round in progress.")
        if bet < self._settings.min_bet or bet > self._settings.max_bet:
            raise InvalidBet(
                f"Bet must be between {self._settings.min_bet:g} and {self._settings.max_bet:g}."
            )
        if bet > self.bankroll:
            raise InsufficientFunds("Bet exceeds available balance.")

        state = self._engine.start_round(self._settings, self._randomness, player_name, bet)
        self.bankroll -= bet
        self.round_state = state
        self.last_result = None
        logger.debug("Round started for %s, bet %g, bankroll %g", player_name, bet, self.bankroll)

        if state.is_round_over:
            self._resolve()
        else:
            self.status = STATUS_STARTED
        return state

    def hit(self) -> RoundState:
        state = self._require_round()
        self.round_state = self._engine.player_hit(state)
        self._resolve_if_ready()
        return self.round_state

    def stand(self) -> RoundState:
        state = self._require_round()
        self.round_state = self._engine.player_stand(state)
        self._resolve_if_ready()
        return self.round_state

    def double_down(self) -> RoundState:
        """Double the active hand's stake and take exactly one card.

        Raises:
            InvalidTurnState: If no round is in progress or the player is not acting.
            InsufficientFunds: If the bankroll cannot cover the extra stake.
            DoubleNotAvailable: If the engine refuses the double.
        """
        state = self._require_player_turn()
        extra = state.hand_bets[state.player.active_hand_index]
        if self.bankroll < extra:
            raise InsufficientFunds("Not enough balance to double down.")

        self.round_state = self._engine.player_double_down(state)
        self.bankroll -= extra
        self.status = STATUS_DOUBLED
        self._resolve_if_ready()
        return self.round_state

    def split(self) -> RoundState:
        """Split the active pair, staking a second bet equal to the first.

        Raises:
            InvalidTurnState: If no round is in progress or the player is not acting.
            InsufficientFunds: If the bankroll cannot cover the extra stake.
            SplitNotAvailable: If the engine refuses the split.
        """
        state = self._require_player_turn()
        extra = state.hand_bets[state.player.active_hand_index]
        if self.bankroll < extra:
            raise InsufficientFunds("Not enough balance to split.")

        self.round_state = self._engine.player_split(state)
        self.bankroll -= extra
        self.status = STATUS_SPLIT
        self._resolve_if_ready()
        return self.round_state

    def act(self, action: PlayerAction | str) -> RoundState:
        """Dispatch an action by enum or name through the bankroll checks."""
        handlers = {
            PlayerAction.HIT: self.hit,
            PlayerAction.STAND: self.stand,
            PlayerAction.DOUBLE_DOWN: self.double_down,
            PlayerAction.SPLIT: self.split,
        }
        return handlers[self._engine.parse_action(action)]()

    # ── Eligibility for display ───────────────────────────────────────────────

    @property
    def can_split(self) -> bool:
        state = self.round_state
        if state is None or not self._engine.can_split(state):
            return False
        return self.bankroll >= state.hand_bets[state.player.active_hand_index]

    @property
    def can_double_down(self) -> bool:
        state = self.round_state
        if state is None or not self._engine.can_double_down(state):
            return False
        return self.bankroll >= state.hand_bets[state.player.active_hand_index]

    @property
    def is_dealer_hole_card_hidden(self) -> bool:
        state = self.round_state
        return state is not None and state.is_player_turn and not state.is_round_over

    def dealer_visible_cards(self) -> list[Card]:
        """Dealer cards a display may show: only the up-card while hidden."""
        if self.round_state is None:
            return []
        cards = list(self.round_state.dealer.active_hand.cards)
        if self.is_dealer_hole_card_hidden:
            return cards[:1]
        return cards

    def dealer_visible_value(self) -> int:
        return best_value(self.dealer_visible_cards())

    # ── Settlement ────────────────────────────────────────────────────────────

    def _require_round(self) -> RoundState:
        state = self.round_state
        if state is None:
            raise InvalidTurnState("No active round.")
        return state

    def _require_player_turn(self) -> RoundState:
        """Active round with the player to act; checked before any stake."""
        state = self._require_round()
        if state.is_round_over:
            raise InvalidTurnState("Round is already over.")
        if not state.is_player_turn:
            raise InvalidTurnState("It is not the player's turn.")
        return state

    def _resolve_if_ready(self) -> None:
        state = self.round_state
        if state is None or state.is_round_over or state.is_player_turn:
            return
        self._resolve()

    def _resolve(self) -> None:
        state = self.round_state
        result = self._engine.resolve_round(state)
        self.last_result = result
        self._settle(result, state)
        self.status = summarize_round(result)

    def _settle(self, result: RoundResult, state: RoundState) -> None:
        """Return each stake plus its winnings (or nothing on a loss)."""
        net = result.net_payout(state.hand_bets)
        self.bankroll += state.total_bet + net
        logger.info(
            "Settled %d hand(s) for %s: net %+g, bankroll %g",
            len(result), state.player.name, net, self.bankroll,
        )
