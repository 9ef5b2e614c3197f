"""
Minesweeper State.

Mines are placed lazily on the first reveal so the first cell opened is
never a mine.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ...engine_core.rng import SeededRNG
from ...engine_core.state import GameState

ROWS = 9
COLS = 9
MINE_COUNT = 10


@dataclass
class Cell:
    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    adjacent_mines: int = 0


def empty_cells(rows: int, cols: int) -> list[list[Cell]]:
    return [[Cell() for _ in range(cols)] for _ in range(rows)]


@dataclass
class MinesweeperState(GameState):
    rows: int = ROWS
    cols: int = COLS
    mine_count: int = MINE_COUNT
    cells: list[list[Cell]] = field(default_factory=lambda: empty_cells(ROWS, COLS))
    flag_count: int = 0
    did_win: bool = False
    mines_placed: bool = False
    rng: SeededRNG = field(default_factory=SeededRNG)

    @classmethod
    def create(
        cls,
        seed: int | None = None,
        rows: int = ROWS,
        cols: int = COLS,
        mine_count: int = MINE_COUNT,
    ) -> MinesweeperState:
        if seed is None:
            seed = SeededRNG.system_seed()
        return cls(
            rows=rows,
            cols=cols,
            mine_count=mine_count,
            cells=empty_cells(rows, cols),
            rng=SeededRNG(seed),
        )

    def fresh(self) -> MinesweeperState:
        """Unmined board of the same size, continuing the RNG stream."""
        return MinesweeperState(
            rows=self.rows,
            cols=self.cols,
            mine_count=self.mine_count,
            cells=empty_cells(self.rows, self.cols),
            rng=SeededRNG(self.rng.state),
        )

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def neighbors(self, row: int, col: int) -> list[tuple[int, int]]:
        return [
            (row + dr, col + dc)
            for dr in (-1, 0, 1)
            for dc in (-1, 0, 1)
            if (dr or dc) and self.in_bounds(row + dr, col + dc)
        ]

    @property
    def all_safe_revealed(self) -> bool:
        return all(
            cell.is_mine or cell.is_revealed
            for line in self.cells
            for cell in line
        )
