"""
Memory Match State.

At most two unmatched cards are face up at once; their indices are kept
in ``flipped_indices`` until they match or are hidden again.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ...engine_core.rng import SeededRNG
from ...engine_core.state import GameState

PAIR_COUNT = 8


@dataclass
class MemoryCard:
    card_id: int
    symbol_id: int
    is_face_up: bool = False
    is_matched: bool = False


@dataclass
class MemoryMatchState(GameState):
    pair_count: int = PAIR_COUNT
    cards: list[MemoryCard] = field(default_factory=list)
    flipped_indices: list[int] = field(default_factory=list)
    matched_pairs: int = 0
    moves: int = 0
    rng: SeededRNG = field(default_factory=SeededRNG)

    @classmethod
    def create(cls, seed: int | None = None, pair_count: int = PAIR_COUNT) -> MemoryMatchState:
        if seed is None:
            seed = SeededRNG.system_seed()
        return cls(pair_count=pair_count, rng=SeededRNG(seed))

    def fresh(self) -> MemoryMatchState:
        """Empty table, continuing the RNG stream."""
        return MemoryMatchState(pair_count=self.pair_count, rng=SeededRNG(self.rng.state))


def make_deck(pair_count: int, rng: SeededRNG) -> list[MemoryCard]:
    """Two cards per symbol, shuffled."""
    cards = [
        MemoryCard(card_id=symbol * 2 + copy, symbol_id=symbol)
        for symbol in range(pair_count)
        for copy in (0, 1)
    ]
    rng.shuffle(cards)
    return cards
