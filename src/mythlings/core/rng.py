"""Injectable random sources for battle setup and opponent decisions."""
from __future__ import annotations

from random import Random
from typing import Protocol, Sequence, TypeVar

T_co = TypeVar("T_co")


class RandomSource(Protocol):
    """Minimal random interface the engine draws from."""

    def randint(self, a: int, b: int) -> int:
        ...

    def choice(self, seq: Sequence[T_co]) -> T_co:
        ...


class RNG:
    """Seedable wrapper around random.Random with deterministic helpers."""

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._random = Random(seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        """Return a random integer N such that a <= N <= b."""
        return self._random.randint(a, b)

    def choice(self, seq: Sequence[T_co]) -> T_co:
        """Return a random element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot choose from an empty sequence.")
        return self._random.choice(seq)
