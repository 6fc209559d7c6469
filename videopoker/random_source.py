"""
Randomness for Video-Poker-over-SSH.

Shuffling and the gamble coin flips both draw from a RandomSource so a session
can be replayed deterministically by handing it a scripted source.
"""

import random
from typing import Optional


class RandomSource:
    """Uniform random draws backed by a `random.Random` instance."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def randbelow(self, n: int) -> int:
        """Return a uniform integer in [0, n)."""
        return self._rng.randrange(n)

    def coin_flip(self) -> bool:
        """Return True or False with equal probability."""
        return self._rng.random() < 0.5

