"""
Randomness capability consumed by the shoe.

The engine only ever asks for "the next integer in [min, max)". Production
code uses a numpy Generator; tests inject a fixed provider so that shuffles
are reproducible.
"""

from __future__ import annotations

from typing import Protocol

import numpy as np


class RandomProvider(Protocol):
    def next(self, min_inclusive: int, max_exclusive: int) -> int:
        ...


class NumpyRandomProvider:
    """RandomProvider backed by ``numpy.random.default_rng``.

    Args:
        seed: Optional seed. Two providers built with the same seed produce
              the same sequence, so the same shuffle.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)

    def next(self, min_inclusive: int, max_exclusive: int) -> int:
        """Return a uniformly distributed integer in [min_inclusive, max_exclusive).

        Raises:
            ValueError: If the range is empty.

        Examples:
            >>> provider = NumpyRandomProvider(seed=7)
            >>> 0 <= provider.next(0, 52) < 52
            True
        """
        if max_exclusive <= min_inclusive:
            raise ValueError(
                f"Empty range [{min_inclusive}, {max_exclusive})."
            )
        return int(self._rng.integers(min_inclusive, max_exclusive))
