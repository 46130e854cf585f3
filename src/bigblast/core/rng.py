"""Seedable xorshift32 random number generator.

Every random decision in a game (which choice is armed, how long the
suspense delay lasts) goes through one of these so that a seeded game
replays identically.

Seeds are scrambled with a splitmix32 step before they become the
xorshift state. Small seeds (1, 2, 1234...) otherwise start from a state
with almost no high bits set and the first draws all land near zero.
"""

import time
from typing import MutableSequence, Optional, TypeVar

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = float(UINT32_MASK) + 1.0

# xorshift32 is stuck at zero forever, so a zero state is replaced.
ZERO_SEED_REPLACEMENT = 0xA5366B4D


def xorshift32(x: int) -> int:
    """One xorshift32 step (shifts 13, 17, 5)."""
    x ^= (x << 13) & UINT32_MASK
    x ^= x >> 17
    x ^= (x << 5) & UINT32_MASK
    return x & UINT32_MASK


def splitmix32(x: int) -> int:
    """Scramble a 32-bit value so nearby seeds give unrelated states."""
    x = (x + 0x9E3779B9) & UINT32_MASK
    x = ((x ^ (x >> 16)) * 0x85EBCA6B) & UINT32_MASK
    x = ((x ^ (x >> 13)) * 0xC2B2AE35) & UINT32_MASK
    return x ^ (x >> 16)


class RNG:
    """xorshift32 generator with uniform floats and inclusive int ranges."""

    def __init__(self, seed: Optional[int] = None) -> None:
        if seed is None:
            seed = int(time.time() * 1000)
        self.seed = seed

    @property
    def seed(self) -> int:
        """The 32-bit seed this generator was last seeded with."""
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = int(value) & UINT32_MASK
        self._state = splitmix32(self._seed) or ZERO_SEED_REPLACEMENT

    def next_u32(self) -> int:
        """Advance the generator and return the raw 32-bit state."""
        self._state = xorshift32(self._state)
        return self._state

    def next(self) -> float:
        """Return a float in [0, 1)."""
        return self.next_u32() / UINT32_SCALE

    def pick_int(self, min_value: int, max_value: int) -> int:
        """Return an int in [min_value, max_value], both ends inclusive."""
        if max_value < min_value:
            raise ValueError(f"Empty range: [{min_value}, {max_value}]")
        return int(self.next() * (max_value - min_value + 1)) + min_value

    def shuffle(self, seq: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place; returns the same sequence."""
        for i in range(len(seq) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            seq[i], seq[j] = seq[j], seq[i]
        return seq
