"""Deterministic random source used to order words between attempts."""

from __future__ import annotations

import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


class SeededRandom:
    """Reproducible float stream in ``[0, 1)`` derived from a seed string."""

    def __init__(self, seed: str) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next_float(self) -> float:
        return self._rng.random()

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``items``."""

        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = int(self.next_float() * (i + 1))
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled
