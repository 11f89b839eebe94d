"""
Random sources for board assignment.

The shuffle only needs random() in [0, 1). Passing a SeededRNG (or a seed in
the assignment event) makes a board's grid positions and digit labels
reproducible; tests may pass any object with random(), even a constant one.
"""
from __future__ import annotations

import random
from typing import Protocol


class RandomSource(Protocol):
    """Uniform floats in [0, 1). A source fixed at 0.5 is valid."""

    def random(self) -> float: ...


class SeededRNG:
    """One board's draw stream. Same seed => same positions and labels."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def getstate(self):
        return self._rng.getstate()

    def setstate(self, state) -> None:
        self._rng.setstate(state)
