"""
Block Puzzle Reducer.

Pieces spawn centered on the top row and fall one row per tick. A piece
that cannot move down locks into the grid; full rows are cleared and the
preview piece spawns. The game ends when a spawned piece does not fit.

Rotation turns the offsets a quarter around the pivot. There is no wall
kick: a rotation that does not fit is ignored.
"""

from __future__ import annotations
from enum import Enum

from ...engine_core.effect import Effect
from ...engine_core.reducer import Handler, Reducer, Transition, unchanged
from .actions import BlockPuzzleAction, BlockPuzzleActionType
from .state import (
    LINE_CLEAR_SCORES,
    PIECE_BLUEPRINTS,
    BlockPuzzleState,
    Piece,
)

PuzzleTransition = Transition[BlockPuzzleState, BlockPuzzleAction]

SOFT_DROP_REWARD = 1
HARD_DROP_REWARD = 2


class BlockPuzzleReducer(Reducer[BlockPuzzleState, BlockPuzzleAction]):
    """Reducer for Block Puzzle."""

    def _handlers(self) -> dict[Enum, Handler]:
        return {
            BlockPuzzleActionType.START: self._handle_start,
            BlockPuzzleActionType.PAUSE: self._handle_pause,
            BlockPuzzleActionType.RESUME: self._handle_resume,
            BlockPuzzleActionType.RESET: self._handle_reset,
            BlockPuzzleActionType.TICK: self._handle_tick,
            BlockPuzzleActionType.MOVE_LEFT: self._handle_move_left,
            BlockPuzzleActionType.MOVE_RIGHT: self._handle_move_right,
            BlockPuzzleActionType.ROTATE: self._handle_rotate,
            BlockPuzzleActionType.SOFT_DROP: self._handle_soft_drop,
            BlockPuzzleActionType.HARD_DROP: self._handle_hard_drop,
        }

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _handle_start(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        s = state.fresh() if state.is_game_over else state.clone()
        s.is_running = True
        ensure_pieces(s)
        return s, Effect.none()

    def _handle_pause(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        if not state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = False
        return s, Effect.none()

    def _handle_resume(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        if state.is_game_over or state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_reset(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        return state.fresh(), Effect.none()

    # =========================================================================
    # Movement
    # =========================================================================

    def _handle_tick(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        s = state.clone()
        ensure_pieces(s)
        step_down(s, reward=0)
        return s, Effect.none()

    def _handle_move_left(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        return _try_place(state, lambda p: p.shifted(dx=-1))

    def _handle_move_right(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        return _try_place(state, lambda p: p.shifted(dx=1))

    def _handle_rotate(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        return _try_place(state, Piece.rotated)

    def _handle_soft_drop(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        s = state.clone()
        ensure_pieces(s)
        step_down(s, reward=SOFT_DROP_REWARD)
        return s, Effect.none()

    def _handle_hard_drop(self, state: BlockPuzzleState, action: BlockPuzzleAction) -> PuzzleTransition:
        s = state.clone()
        ensure_pieces(s)
        if s.current_piece is None or s.is_game_over:
            return s, Effect.none()

        piece = s.current_piece
        distance = 0
        while s.can_place(piece.shifted(dy=1)):
            piece = piece.shifted(dy=1)
            distance += 1

        s.current_piece = piece
        s.score += distance * HARD_DROP_REWARD
        lock_and_spawn(s)
        return s, Effect.none()


def _try_place(state: BlockPuzzleState, transform) -> PuzzleTransition:
    """Move the current piece if the result fits, else no-op."""
    if state.current_piece is None:
        return unchanged(state)
    candidate = transform(state.current_piece)
    if not state.can_place(candidate):
        return unchanged(state)
    s = state.clone()
    s.current_piece = candidate
    return s, Effect.none()


# ============================================================================
# Piece lifecycle (operate on a clone)
# ============================================================================

def random_piece(state: BlockPuzzleState) -> Piece:
    return state.rng.choice(PIECE_BLUEPRINTS).positioned(state.grid_width)


def ensure_pieces(state: BlockPuzzleState) -> None:
    """Fill in the preview and spawn a current piece when missing."""
    if state.next_piece is None:
        state.next_piece = random_piece(state)
    if state.current_piece is None:
        _spawn_next(state)


def _spawn_next(state: BlockPuzzleState) -> None:
    upcoming = state.next_piece or random_piece(state)
    state.current_piece = upcoming.positioned(state.grid_width)
    state.next_piece = random_piece(state)
    if not state.can_place(state.current_piece):
        state.end_game()


def step_down(state: BlockPuzzleState, reward: int) -> None:
    """Move down one row, or lock when blocked."""
    piece = state.current_piece
    if piece is None or state.is_game_over:
        return
    moved = piece.shifted(dy=1)
    if state.can_place(moved):
        state.current_piece = moved
        state.score += reward
        return
    lock_and_spawn(state)


def lock_and_spawn(state: BlockPuzzleState) -> None:
    piece = state.current_piece
    if piece is None:
        return

    for x, y in piece.occupied():
        if 0 <= x < state.grid_width and 0 <= y < state.grid_height:
            state.grid[y][x] = piece.color_index

    cleared = clear_full_rows(state)
    state.lines_cleared += cleared
    state.score += LINE_CLEAR_SCORES[min(cleared, len(LINE_CLEAR_SCORES) - 1)]

    _spawn_next(state)


def clear_full_rows(state: BlockPuzzleState) -> int:
    """Drop full rows and pad the top with empty ones. Returns rows cleared."""
    kept = [row for row in state.grid if 0 in row]
    cleared = len(state.grid) - len(kept)
    state.grid = [[0] * state.grid_width for _ in range(cleared)] + kept
    return cleared
