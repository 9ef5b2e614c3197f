"""
Block Puzzle State - Grid, falling piece and preview.

Grid cells hold 0 for empty or the color index (1-7) of a locked piece.
Rows are indexed top to bottom.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from ...engine_core.rng import SeededRNG
from ...engine_core.state import GameState

GRID_WIDTH = 12
GRID_HEIGHT = 24

# Points for 1, 2, 3 and 4+ rows cleared at once
LINE_CLEAR_SCORES = (0, 100, 250, 450, 700)

Cell = tuple[int, int]


@dataclass(frozen=True)
class Piece:
    """A piece as (dx, dy) offsets around a pivot at (x, y)."""
    cells: tuple[Cell, ...]
    color_index: int
    x: int = 0
    y: int = 0

    def shifted(self, dx: int = 0, dy: int = 0) -> Piece:
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> Piece:
        """Quarter turn around the pivot: (dx, dy) -> (-dy, dx)."""
        return replace(self, cells=tuple((-dy, dx) for dx, dy in self.cells))

    def positioned(self, width: int) -> Piece:
        """Spawn position: centered, top row."""
        return replace(self, x=width // 2, y=0)

    def occupied(self) -> list[Cell]:
        return [(self.x + dx, self.y + dy) for dx, dy in self.cells]


PIECE_BLUEPRINTS: tuple[Piece, ...] = (
    Piece(cells=((-1, 0), (0, 0), (1, 0), (2, 0)), color_index=1),
    Piece(cells=((-1, 0), (0, 0), (1, 0), (1, 1)), color_index=2),
    Piece(cells=((-1, 0), (0, 0), (1, 0), (-1, 1)), color_index=3),
    Piece(cells=((0, 0), (1, 0), (0, 1), (1, 1)), color_index=4),
    Piece(cells=((-1, 0), (0, 0), (0, 1), (1, 1)), color_index=5),
    Piece(cells=((-1, 1), (0, 1), (0, 0), (1, 0)), color_index=6),
    Piece(cells=((-1, 0), (0, 0), (1, 0), (0, 1)), color_index=7),
)


def empty_grid(width: int, height: int) -> list[list[int]]:
    return [[0] * width for _ in range(height)]


@dataclass
class BlockPuzzleState(GameState):
    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    grid: list[list[int]] = field(default_factory=lambda: empty_grid(GRID_WIDTH, GRID_HEIGHT))
    current_piece: Piece | None = None
    next_piece: Piece | None = None
    lines_cleared: int = 0
    rng: SeededRNG = field(default_factory=SeededRNG)

    @classmethod
    def create(
        cls,
        seed: int | None = None,
        grid_width: int = GRID_WIDTH,
        grid_height: int = GRID_HEIGHT,
    ) -> BlockPuzzleState:
        if seed is None:
            seed = SeededRNG.system_seed()
        return cls(
            grid_width=grid_width,
            grid_height=grid_height,
            grid=empty_grid(grid_width, grid_height),
            rng=SeededRNG(seed),
        )

    def fresh(self) -> BlockPuzzleState:
        """Empty board of the same size, continuing the RNG stream."""
        return BlockPuzzleState(
            grid_width=self.grid_width,
            grid_height=self.grid_height,
            grid=empty_grid(self.grid_width, self.grid_height),
            rng=SeededRNG(self.rng.state),
        )

    def can_place(self, piece: Piece) -> bool:
        for x, y in piece.occupied():
            if not (0 <= x < self.grid_width and 0 <= y < self.grid_height):
                return False
            if self.grid[y][x] != 0:
                return False
        return True
