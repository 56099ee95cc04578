"""Reproducible counter-based random draws for plan generation.

The generator is a Mulberry32 mix over a 32-bit counter. It is kept as an
immutable value: every draw returns the result together with the next
generator, so callers thread it explicitly and no global state is touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """Low 32 bits of the product, as an unsigned int."""
    return (a * b) & _MASK32


def mulberry32(counter: int) -> tuple[float, int]:
    """One Mulberry32 round: returns (value in [0, 1), next counter)."""
    counter = (counter + _INCREMENT) & _MASK32
    t = counter
    t = _imul(t ^ (t >> 15), t | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
    t = (t ^ (t >> 14)) & _MASK32
    return t / 4294967296.0, counter


@dataclass(frozen=True)
class SeededRandom:
    counter: int

    @classmethod
    def from_seed(cls, seed: int) -> SeededRandom:
        return cls(counter=int(seed) & _MASK32)

    def next(self) -> tuple[float, SeededRandom]:
        value, counter = mulberry32(self.counter)
        return value, SeededRandom(counter)

    def uniform(self, lo: float, hi: float) -> tuple[float, SeededRandom]:
        value, rng = self.next()
        return value * (hi - lo) + lo, rng

    def randint(self, lo: int, hi: int) -> tuple[int, SeededRandom]:
        """Integer in ``[lo, hi]`` inclusive."""
        value, rng = self.next()
        return int(value * (hi - lo + 1)) + lo, rng

    def choice(self, options: Sequence[T]) -> tuple[T, SeededRandom]:
        if not options:
            raise ValueError("choice() needs at least one option")
        idx, rng = self.randint(0, len(options) - 1)
        return options[idx], rng
