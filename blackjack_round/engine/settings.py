"""Table rules and limits, with environment variable overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields

from .errors import InvalidSettings

ENV_PREFIX = "BLACKJACK_"


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise InvalidSettings(f"Cannot parse {raw!r} as a boolean.")


@dataclass(frozen=True)
class GameSettings:
    """House rules for a round plus the session's table limits.

    Attributes:
        deck_count:         Decks in the shoe (fixed for the round).
        stand_on_soft_17:   Dealer stands on soft 17; False means hit soft 17.
        max_hands:          Maximum player hands reachable by splitting.
        allow_ten_value_split: Any two ten-value cards may be split (K-Q, 10-J).
        allow_resplit_aces: A locked ace-split hand may be split again if it
                            receives another ace.
        restrict_split_aces_to_one_card: Split aces get one card each and
                            are locked against hitting.
        allow_double_down_after_split_aces: A locked ace-split hand may
                            still double down.
        min_bet / max_bet:  Table limits for the base bet.
        starting_balance:   Session bankroll before the first round.
    """

    deck_count: int = 6
    stand_on_soft_17: bool = True
    max_hands: int = 4
    allow_ten_value_split: bool = True
    allow_resplit_aces: bool = True
    restrict_split_aces_to_one_card: bool = True
    allow_double_down_after_split_aces: bool = False
    min_bet: float = 10.0
    max_bet: float = 500.0
    starting_balance: float = 1000.0

    @classmethod
    def default(cls) -> GameSettings:
        return cls()

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX) -> GameSettings:
        """Build settings from ``<prefix><FIELD_NAME>`` environment variables.

        Unset variables keep their defaults, e.g. ``BLACKJACK_DECK_COUNT=2``
        or ``BLACKJACK_STAND_ON_SOFT_17=false``.

        Raises:
            InvalidSettings: If a variable cannot be parsed or the resulting
                             settings fail validation.
        """
        overrides: dict[str, object] = {}
        for f in fields(cls):
            raw = os.getenv(prefix + f.name.upper())
            if raw is None:
                continue
            default = f.default
            try:
                if isinstance(default, bool):
                    overrides[f.name] = _parse_bool(raw)
                elif isinstance(default, int):
                    overrides[f.name] = int(raw)
                else:
                    overrides[f.name] = float(raw)
            except ValueError as exc:
                raise InvalidSettings(
                    f"Bad value for {prefix + f.name.upper()}: {raw!r}"
                ) from exc
        settings = cls(**overrides)
        settings.validate()
        return settings

    def validate(self) -> None:
        """Raise InvalidSettings if these rules cannot describe a playable table."""
        if self.deck_count < 1:
            raise InvalidSettings(f"Deck count must be at least 1, got {self.deck_count}.")
        if self.max_hands < 1:
            raise InvalidSettings(f"Max hands must be at least 1, got {self.max_hands}.")
        if self.min_bet <= 0:
            raise InvalidSettings(f"Minimum bet must be positive, got {self.min_bet}.")
        if self.max_bet < self.min_bet:
            raise InvalidSettings(
                f"Maximum bet {self.max_bet} is below minimum bet {self.min_bet}."
            )
        if self.starting_balance < 0:
            raise InvalidSettings(
                f"Starting balance cannot be negative, got {self.starting_balance}."
            )
