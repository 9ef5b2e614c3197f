"""
Seeded RNG - Reproducible randomness for every gameplay decision.

All gameplay-visible randomness (deck building, food and piece spawns,
mine placement, card shuffles, stimulus delays) flows through SeededRNG so
that a given seed always yields the same game.

The generator is xorshift64*. Range sampling uses modulo reduction, which
is slightly biased for spans that do not divide 2**64. This is kept on
purpose so sequences stay bit-identical across ports.
"""

from __future__ import annotations
import os
import time
from dataclasses import dataclass
from typing import MutableSequence, Sequence, TypeVar

T = TypeVar("T")

MASK_64 = 0xFFFF_FFFF_FFFF_FFFF
FALLBACK_SEED = 0xA5A5_A5A5_5A5A_5A5A
MULTIPLIER = 2_685_821_657_736_338_717


@dataclass
class SeededRNG:
    """
    xorshift64* generator.

    The state is a plain int so the generator is value-copied along with
    whatever game state embeds it.
    """
    state: int = FALLBACK_SEED

    def __post_init__(self):
        self.state &= MASK_64
        if self.state == 0:
            self.state = FALLBACK_SEED

    def next_uint64(self) -> int:
        x = self.state
        x ^= x >> 12
        x ^= (x << 25) & MASK_64
        x ^= x >> 27
        self.state = x
        return (x * MULTIPLIER) & MASK_64

    def next_int(self, low: int, high: int) -> int:
        """Return an int in the closed range [low, high]."""
        if high < low:
            raise ValueError(f"Empty range: {low}..{high}")
        span = high - low + 1
        return self.next_uint64() % span + low

    def next_double(self) -> float:
        """Return a float in [0, 1)."""
        return (self.next_uint64() >> 11) / float(1 << 53)

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.next_double()

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place, from the last index down to 1."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(0, i)
            if j != i:
                items[i], items[j] = items[j], items[i]

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    @staticmethod
    def system_seed() -> int:
        """Seed derived from wall-clock time and process id."""
        micros = int(time.time() * 1_000_000)
        return (micros ^ (os.getpid() << 16) ^ 0x9E37_79B9_7F4A_7C15) & MASK_64
