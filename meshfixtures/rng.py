"""Seeded pseudo-random stream (mulberry32).

Fixture reproducibility depends on the exact sequence of draws, so every
generator built on top of ``Rng`` consumes it in a fixed structural order.
Reordering draws anywhere is a breaking change for stored fixtures.
"""

import math
import time
from collections.abc import Sequence
from typing import TypeVar

from meshfixtures.errors import EmptyInputError

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_HEX_DIGITS = "0123456789abcdef"


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply, unsigned result."""
    return (a * b) & _MASK32


class Rng:
    """Deterministic random stream over a single 32-bit state.

    Two instances built from the same seed return identical results for
    identical call sequences. Instances never share state.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = int(time.time() * 1000)
        self._state = seed & _MASK32

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK32
        return ((r ^ (r >> 14)) & _MASK32) / 4294967296

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high], both inclusive."""
        return math.floor(self.next() * (high - low + 1)) + low

    def uniform(self, low: float = 0, high: float = 1) -> float:
        """Float in [low, high)."""
        return self.next() * (high - low) + low

    def chance(self, p: float = 0.5) -> bool:
        """True with probability ``p``."""
        return self.next() < p

    def pick(self, seq: Sequence[T]) -> T:
        """Uniformly selected element of ``seq``."""
        if len(seq) == 0:
            raise EmptyInputError("Cannot pick from an empty sequence")
        return seq[self.randint(0, len(seq) - 1)]

    def hex(self, length: int) -> str:
        """Lowercase hex string of ``length`` digits."""
        return "".join(_HEX_DIGITS[self.randint(0, 15)] for _ in range(length))

    def big_int(self) -> int:
        """Integer built from 2 to 16 random hex digits."""
        return int(self.hex(self.randint(2, 16)), 16)
