"""Tests for blackjack_round/engine/rules.py — dealer policy and settlement."""

from __future__ import annotations

import pytest

from blackjack_round.engine.player import Player, make_dealer
from blackjack_round.engine.rules import (
    BLACKJACK_PAYOUT,
    LOSS_PAYOUT,
    PUSH_PAYOUT,
    WIN_PAYOUT,
    HandResult,
    Outcome,
    RoundResult,
    dealer_should_stand,
    evaluate_hand,
    evaluate_outcome,
    evaluate_round,
    payout_multiplier,
)
from tests.conftest import hand


class TestDealerShouldStand:
    @pytest.mark.parametrize("cards", [('10S', '6H'), ('AS', '5H'), ('2S', '3H')])
    def test_hits_below_17(self, cards):
        assert not dealer_should_stand(hand(*cards), stand_on_soft_17=True)
        assert not dealer_should_stand(hand(*cards), stand_on_soft_17=False)

    @pytest.mark.parametrize("cards", [('10S', '8H'), ('AS', '7H'), ('KS', 'QH'), ('KS', 'QH', '5D')])
    def test_stands_above_17(self, cards):
        assert dealer_should_stand(hand(*cards), stand_on_soft_17=True)
        assert dealer_should_stand(hand(*cards), stand_on_soft_17=False)

    def test_hard_17_always_stands(self):
        assert dealer_should_stand(hand('10S', '7H'), stand_on_soft_17=False)
        assert dealer_should_stand(hand('10S', '7H'), stand_on_soft_17=True)

    def test_soft_17_stands_when_configured(self):
        assert dealer_should_stand(hand('AS', '6H'), stand_on_soft_17=True)

    def test_soft_17_hits_when_configured(self):
        assert not dealer_should_stand(hand('AS', '6H'), stand_on_soft_17=False)

    def test_multi_card_soft_17_hits(self):
        assert not dealer_should_stand(hand('AS', '2H', '4D'), stand_on_soft_17=False)


class TestEvaluateOutcomePrecedence:
    """First matching rule wins; blackjack checks come before bust checks."""

    def test_both_blackjack_push(self):
        assert evaluate_outcome(21, 21, False, False, True, True) == Outcome.PUSH

    def test_player_blackjack_beats_dealer_21(self):
        assert evaluate_outcome(21, 21, False, False, True, False) == Outcome.PLAYER_WIN

    def test_dealer_blackjack_beats_player_21(self):
        assert evaluate_outcome(21, 21, False, False, False, True) == Outcome.DEALER_WIN

    def test_dealer_blackjack_beats_player_bust(self):
        assert evaluate_outcome(24, 21, True, False, False, True) == Outcome.DEALER_WIN

    def test_player_bust_loses_even_when_dealer_busts(self):
        assert evaluate_outcome(24, 26, True, True, False, False) == Outcome.DEALER_WIN

    def test_dealer_bust_player_wins(self):
        assert evaluate_outcome(12, 26, False, True, False, False) == Outcome.PLAYER_WIN

    def test_higher_total_wins(self):
        assert evaluate_outcome(20, 18, False, False, False, False) == Outcome.PLAYER_WIN
        assert evaluate_outcome(18, 20, False, False, False, False) == Outcome.DEALER_WIN

    def test_equal_totals_push(self):
        assert evaluate_outcome(19, 19, False, False, False, False) == Outcome.PUSH


class TestPayoutMultiplier:
    def test_values(self):
        assert BLACKJACK_PAYOUT == 1.5
        assert WIN_PAYOUT == 1.0
        assert PUSH_PAYOUT == 0.0
        assert LOSS_PAYOUT == -1.0

    def test_blackjack_win(self):
        assert payout_multiplier(Outcome.PLAYER_WIN, player_blackjack=True) == 1.5

    def test_ordinary_win(self):
        assert payout_multiplier(Outcome.PLAYER_WIN, player_blackjack=False) == 1.0

    def test_blackjack_push_pays_nothing(self):
        assert payout_multiplier(Outcome.PUSH, player_blackjack=True) == 0.0

    def test_loss(self):
        assert payout_multiplier(Outcome.DEALER_WIN, player_blackjack=False) == -1.0


class TestEvaluateHand:
    def test_fields(self):
        result = evaluate_hand(2, hand('10S', '9H'), hand('7D', '9S', 'KH'))
        assert result == HandResult(
            hand_index=2,
            player_value=19,
            dealer_value=26,
            outcome=Outcome.PLAYER_WIN,
            player_blackjack=False,
            dealer_blackjack=False,
            player_bust=False,
            dealer_bust=True,
            payout_multiplier=1.0,
        )

    def test_player_blackjack_against_dealer_nine(self):
        result = evaluate_hand(0, hand('AS', 'KH'), hand('4D', '5S'))
        assert result.outcome == Outcome.PLAYER_WIN
        assert result.player_blackjack
        assert result.payout_multiplier == 1.5

    def test_result_is_immutable(self):
        result = evaluate_hand(0, hand('10S', '9H'), hand('10D', '8S'))
        with pytest.raises(AttributeError):
            result.outcome = Outcome.PUSH  # type: ignore[misc]

    def test_str(self):
        result = evaluate_hand(0, hand('10S', '9H'), hand('7D', '9S', 'KH'))
        assert str(result) == "Hand 0: player 19 | dealer 26 BUST | PLAYER_WIN +1.0"


class TestEvaluateRound:
    def test_one_result_per_hand_in_order(self):
        player = Player("Ann")
        player.hands = [hand('10S', '9H'), hand('10D', '5C', 'KS'), hand('10H', '8C')]
        dealer = make_dealer()
        dealer.hands = [hand('10C', '8D')]

        result = evaluate_round(player, dealer)

        assert [r.hand_index for r in result] == [0, 1, 2]
        assert [r.outcome for r in result] == [
            Outcome.PLAYER_WIN, Outcome.DEALER_WIN, Outcome.PUSH,
        ]
        assert len(result) == 3
        assert result[1].player_bust


class TestRoundResult:
    def _result(self, index, outcome, multiplier, player_blackjack=False):
        return HandResult(index, 20, 18, outcome, player_blackjack, False, False, False, multiplier)

    def test_net_payout_applies_per_hand_bets(self):
        rr = RoundResult((
            self._result(0, Outcome.PLAYER_WIN, 1.0),
            self._result(1, Outcome.DEALER_WIN, -1.0),
        ))
        assert rr.net_payout([20.0, 10.0]) == 10.0

    def test_net_payout_blackjack(self):
        rr = RoundResult((self._result(0, Outcome.PLAYER_WIN, 1.5, player_blackjack=True),))
        assert rr.net_payout([10.0]) == 15.0

    def test_net_payout_ignores_unknown_index(self):
        rr = RoundResult((self._result(3, Outcome.PLAYER_WIN, 1.0),))
        assert rr.net_payout([10.0]) == 0.0

    def test_blackjack_flags(self):
        win = RoundResult((self._result(0, Outcome.PLAYER_WIN, 1.5, player_blackjack=True),))
        push = RoundResult((self._result(0, Outcome.PUSH, 0.0, player_blackjack=True),))
        assert win.has_player_blackjack_win and not win.has_player_blackjack_push
        assert push.has_player_blackjack_push and not push.has_player_blackjack_win
