"""
Exceptions raised by the round engine and the bankroll session.

Construction-time validation failures subclass ValueError; failures caused by
acting in the wrong game state subclass RuntimeError. Every error is raised
synchronously to the caller of the offending action and is never retried.
"""

from __future__ import annotations


class BlackjackError(Exception):
    """Base class for all engine and session errors."""


# ─── Validation ───────────────────────────────────────────────────────────────

class InvalidSettings(BlackjackError, ValueError):
    """Settings cannot describe a playable round (e.g. deck count < 1)."""


class InvalidPlayerName(BlackjackError, ValueError):
    """Player name is empty or whitespace."""


class InvalidBet(BlackjackError, ValueError):
    """Bet falls outside the table limits."""


class InsufficientFunds(InvalidBet):
    """Stake exceeds the available bankroll."""


# ─── Turn / eligibility ───────────────────────────────────────────────────────

class InvalidTurnState(BlackjackError, RuntimeError):
    """Player action attempted after the player's turn or the round ended."""


class PlayerTurnActive(InvalidTurnState):
    """Round resolution attempted while the player is still acting."""


class HandLocked(BlackjackError, RuntimeError):
    """Hit or split attempted on a hand locked by a restricted ace split."""


class SplitNotAvailable(BlackjackError, RuntimeError):
    pass


class DoubleNotAvailable(BlackjackError, RuntimeError):
    pass


class NoNextHand(BlackjackError, RuntimeError):
    """Advance requested while already on the last hand."""


# ─── Shoe ─────────────────────────────────────────────────────────────────────

class EmptyShoe(BlackjackError, ValueError):
    """Draw attempted from an exhausted shoe. Fatal for the round."""
