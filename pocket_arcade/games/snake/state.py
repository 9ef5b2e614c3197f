"""
Snake State.

The snake moves one cell per tick on a walled grid. Segments are stored
head first.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ...engine_core.rng import SeededRNG
from ...engine_core.state import Direction, GameState, GridPosition

GRID_WIDTH = 20
GRID_HEIGHT = 20
FOOD_SCORE = 10


def _initial_segments() -> list[GridPosition]:
    return [GridPosition(10, 10), GridPosition(9, 10), GridPosition(8, 10)]


@dataclass
class SnakeState(GameState):
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    segments: list[GridPosition] = field(default_factory=_initial_segments)
    direction: Direction = Direction.RIGHT
    food: GridPosition = GridPosition(15, 10)
    rng: SeededRNG = field(default_factory=SeededRNG)

    @classmethod
    def create(
        cls,
        seed: int | None = None,
        grid_width: int = GRID_WIDTH,
        grid_height: int = GRID_HEIGHT,
    ) -> SnakeState:
        if seed is None:
            seed = SeededRNG.system_seed()
        return cls(grid_width=grid_width, grid_height=grid_height, rng=SeededRNG(seed))

    @property
    def head(self) -> GridPosition | None:
        return self.segments[0] if self.segments else None

    def fresh(self) -> SnakeState:
        """Initial layout on the same grid, continuing the RNG stream."""
        return SnakeState(
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            rng=SeededRNG(self.rng.state),
        )
