"""
Tests for Block Puzzle.
"""

import pytest

from ..games.block_puzzle import (
    PIECE_BLUEPRINTS,
    BlockPuzzleAction,
    BlockPuzzleReducer,
    BlockPuzzleState,
    Piece,
)
from ..games.block_puzzle.reducer import clear_full_rows


@pytest.fixture
def reducer():
    return BlockPuzzleReducer()


@pytest.fixture
def running(reducer):
    state, _ = reducer.reduce(BlockPuzzleState.create(seed=21), BlockPuzzleAction.start())
    return state


I_PIECE = PIECE_BLUEPRINTS[0]


class TestPiece:
    """Tests for piece geometry."""

    def test_positioned_centered_top(self):
        piece = I_PIECE.positioned(12)
        assert (piece.x, piece.y) == (6, 0)

    def test_rotation_quarter_turn(self):
        piece = Piece(cells=((1, 0),), color_index=1).rotated()
        assert piece.cells == ((0, 1),)

    def test_four_rotations_identity(self):
        piece = PIECE_BLUEPRINTS[1]
        assert piece.rotated().rotated().rotated().rotated() == piece


class TestBlockPuzzleMovement:
    """Tests for falling, moving and rotating."""

    def test_start_spawns_pieces(self, running):
        assert running.is_running
        assert running.current_piece is not None
        assert running.next_piece is not None
        assert running.current_piece.y == 0

    def test_tick_moves_down(self, reducer, running):
        state, _ = reducer.reduce(running, BlockPuzzleAction.tick())
        assert state.current_piece.y == 1
        assert state.score == 0

    def test_soft_drop_scores(self, reducer, running):
        state, _ = reducer.reduce(running, BlockPuzzleAction.soft_drop())
        assert state.current_piece.y == 1
        assert state.score == 1

    def test_moves_stop_at_wall(self, reducer, running):
        state = running
        for _ in range(20):
            state, _ = reducer.reduce(state, BlockPuzzleAction.move_left())
        assert min(x for x, _ in state.current_piece.occupied()) == 0

    def test_blocked_move_is_noop(self, reducer, running):
        state = running
        for _ in range(20):
            state, _ = reducer.reduce(state, BlockPuzzleAction.move_right())
        blocked, _ = reducer.reduce(state, BlockPuzzleAction.move_right())
        assert blocked is state

    def test_moves_ignored_while_paused(self, reducer, running):
        paused, _ = reducer.reduce(running, BlockPuzzleAction.pause())
        state, _ = reducer.reduce(paused, BlockPuzzleAction.move_left())
        assert state is paused

    def test_rotation_without_room_is_ignored(self, reducer, running):
        # Vertical I piece against the floor cannot turn into the floor
        running.current_piece = Piece(cells=((0, -1), (0, 0), (0, 1), (0, 2)), color_index=1, x=6, y=21)
        running.grid[21] = [1] * 6 + [0] + [1] * 5
        state, _ = reducer.reduce(running, BlockPuzzleAction.rotate())
        assert state is running


class TestBlockPuzzleLocking:
    """Tests for locking, line clears and game over."""

    def test_hard_drop_locks_and_spawns(self, reducer, running):
        piece = running.current_piece
        state, _ = reducer.reduce(running, BlockPuzzleAction.hard_drop())
        assert state.score > 0
        assert any(cell == piece.color_index for cell in state.grid[-1])
        assert state.current_piece is not None
        assert state.current_piece.y == 0

    def test_line_clear_scores(self, reducer, running):
        running.current_piece = I_PIECE.positioned(12).shifted(dy=22)
        running.next_piece = PIECE_BLUEPRINTS[3].positioned(12)
        running.grid[23] = [1] * 5 + [0, 0, 0, 0] + [1] * 3
        state, _ = reducer.reduce(running, BlockPuzzleAction.hard_drop())
        assert state.lines_cleared == 1
        assert state.score == 2 + 100
        assert all(cell == 0 for row in state.grid for cell in row)
        assert state.current_piece.color_index == PIECE_BLUEPRINTS[3].color_index

    def test_clear_full_rows_keeps_height(self):
        state = BlockPuzzleState.create(seed=1)
        state.grid[22] = [3] * 12
        state.grid[23] = [2] * 12
        state.grid[21][0] = 5
        assert clear_full_rows(state) == 2
        assert len(state.grid) == 24
        assert state.grid[23][0] == 5

    def test_blocked_spawn_ends_game(self, reducer, running):
        running.current_piece = None
        running.grid[0][6] = 1
        state, _ = reducer.reduce(running, BlockPuzzleAction.tick())
        assert state.is_game_over

    def test_pieces_are_seeded(self, reducer):
        def first_pieces(seed):
            state, _ = reducer.reduce(BlockPuzzleState.create(seed=seed), BlockPuzzleAction.start())
            return state.current_piece, state.next_piece

        assert first_pieces(4) == first_pieces(4)
