"""Tests for blackjack_round/engine/player.py — hand ownership and traversal."""

from __future__ import annotations

import pytest

from blackjack_round.engine.errors import NoNextHand
from blackjack_round.engine.hand import Hand
from blackjack_round.engine.player import DEALER_NAME, Player, make_dealer
from tests.conftest import hand


class TestNewPlayer:
    def test_one_empty_hand(self):
        player = Player("Ann")
        assert len(player.hands) == 1
        assert player.active_hand.cards == []
        assert player.active_hand_index == 0

    def test_dealer_is_a_player(self):
        dealer = make_dealer()
        assert isinstance(dealer, Player)
        assert dealer.name == DEALER_NAME


class TestTraversal:
    def test_single_hand_has_no_next(self):
        assert not Player("Ann").has_next_hand()

    def test_advance_past_last_raises(self):
        with pytest.raises(NoNextHand):
            Player("Ann").advance_to_next_hand()

    def test_left_to_right(self):
        player = Player("Ann")
        player.add_hand(hand('8S'))
        player.add_hand(hand('8D'))
        assert player.has_next_hand()
        player.advance_to_next_hand()
        assert player.active_hand_index == 1
        assert str(player.active_hand.cards[0]) == '8S'
        player.advance_to_next_hand()
        assert player.active_hand_index == 2
        assert not player.has_next_hand()

    def test_add_hand_returns_index(self):
        player = Player("Ann")
        assert player.add_hand(Hand()) == 1
        assert player.add_hand(Hand()) == 2


class TestStartNewRound:
    def test_resets_hands_and_pointer(self):
        player = Player("Ann")
        player.active_hand.add(hand('KS').cards[0])
        player.add_hand(hand('8D'))
        player.advance_to_next_hand()

        player.start_new_round()

        assert len(player.hands) == 1
        assert player.active_hand.cards == []
        assert player.active_hand_index == 0
