"""
Minesweeper Reducer.

reveal:
1. Place mines on the first reveal, never on the revealed cell
2. A mine ends the game and exposes every mine
3. Otherwise flood-fill outward from zero-count cells, 10 points per cell
4. Revealing the last safe cell wins (+500)

Flags only block reveals; they do not affect the win check.
"""

from __future__ import annotations
from collections import deque
from enum import Enum

from ...engine_core.effect import Effect
from ...engine_core.reducer import Handler, Reducer, Transition, unchanged
from .actions import MinesweeperAction, MinesweeperActionType
from .state import MinesweeperState

MinesweeperTransition = Transition[MinesweeperState, MinesweeperAction]

CELL_SCORE = 10
WIN_BONUS = 500


class MinesweeperReducer(Reducer[MinesweeperState, MinesweeperAction]):
    """Reducer for Minesweeper."""

    def _handlers(self) -> dict[Enum, Handler]:
        return {
            MinesweeperActionType.START: self._handle_start,
            MinesweeperActionType.PAUSE: self._handle_pause,
            MinesweeperActionType.RESUME: self._handle_resume,
            MinesweeperActionType.RESET: self._handle_reset,
            MinesweeperActionType.REVEAL: self._handle_reveal,
            MinesweeperActionType.TOGGLE_FLAG: self._handle_toggle_flag,
        }

    def _handle_start(self, state: MinesweeperState, action: MinesweeperAction) -> MinesweeperTransition:
        s = state.fresh() if state.is_game_over else state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_pause(self, state: MinesweeperState, action: MinesweeperAction) -> MinesweeperTransition:
        if not state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = False
        return s, Effect.none()

    def _handle_resume(self, state: MinesweeperState, action: MinesweeperAction) -> MinesweeperTransition:
        if state.is_game_over or state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_reset(self, state: MinesweeperState, action: MinesweeperAction) -> MinesweeperTransition:
        return state.fresh(), Effect.none()

    def _handle_reveal(self, state: MinesweeperState, action: MinesweeperAction) -> MinesweeperTransition:
        row, col = action.row, action.col
        if not state.in_bounds(row, col):
            return unchanged(state)
        target = state.cells[row][col]
        if target.is_flagged or target.is_revealed:
            return unchanged(state)

        s = state.clone()
        if not s.mines_placed:
            place_mines(s, exclude=(row, col))

        if s.cells[row][col].is_mine:
            s.cells[row][col].is_revealed = True
            for line in s.cells:
                for cell in line:
                    if cell.is_mine:
                        cell.is_revealed = True
            s.did_win = False
            s.end_game()
            return s, Effect.none()

        s.score += flood_reveal(s, row, col) * CELL_SCORE

        if s.all_safe_revealed:
            s.did_win = True
            s.score += WIN_BONUS
            s.end_game()
        return s, Effect.none()

    def _handle_toggle_flag(self, state: MinesweeperState, action: MinesweeperAction) -> MinesweeperTransition:
        row, col = action.row, action.col
        if not state.in_bounds(row, col) or state.cells[row][col].is_revealed:
            return unchanged(state)

        s = state.clone()
        cell = s.cells[row][col]
        cell.is_flagged = not cell.is_flagged
        s.flag_count += 1 if cell.is_flagged else -1
        return s, Effect.none()


def place_mines(state: MinesweeperState, exclude: tuple[int, int]) -> None:
    """Shuffle every other cell with the state RNG and mine the first N."""
    positions = [
        (row, col)
        for row in range(state.rows)
        for col in range(state.cols)
        if (row, col) != exclude
    ]
    state.rng.shuffle(positions)
    for row, col in positions[:state.mine_count]:
        state.cells[row][col].is_mine = True

    for row in range(state.rows):
        for col in range(state.cols):
            cell = state.cells[row][col]
            if not cell.is_mine:
                cell.adjacent_mines = sum(
                    1 for r, c in state.neighbors(row, col) if state.cells[r][c].is_mine
                )
    state.mines_placed = True


def flood_reveal(state: MinesweeperState, row: int, col: int) -> int:
    """Breadth-first reveal; returns the number of cells opened."""
    queue = deque([(row, col)])
    revealed = 0
    while queue:
        r, c = queue.popleft()
        cell = state.cells[r][c]
        if cell.is_revealed or cell.is_flagged:
            continue
        cell.is_revealed = True
        revealed += 1
        if cell.adjacent_mines == 0 and not cell.is_mine:
            queue.extend(state.neighbors(r, c))
    return revealed
