"""
Tests for Minesweeper.
"""

import pytest

from ..engine_core.action import ActionParseError
from ..games.minesweeper import MinesweeperAction, MinesweeperReducer, MinesweeperState, parse_action


@pytest.fixture
def reducer():
    return MinesweeperReducer()


def started(reducer, state):
    state, _ = reducer.reduce(state, MinesweeperAction.start())
    return state


def mine_positions(state):
    return {
        (r, c)
        for r in range(state.rows)
        for c in range(state.cols)
        if state.cells[r][c].is_mine
    }


class TestMinePlacement:
    """Tests for lazy, seeded mine placement."""

    def test_no_mines_before_first_reveal(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=10))
        assert not state.mines_placed
        assert mine_positions(state) == set()

    def test_first_reveal_is_safe(self, reducer):
        for seed in range(1, 30):
            state = started(reducer, MinesweeperState.create(seed=seed))
            state, _ = reducer.reduce(state, MinesweeperAction.reveal(4, 4))
            assert not state.cells[4][4].is_mine
            assert len(mine_positions(state)) == 10
            assert not state.is_game_over

    def test_layout_is_seeded(self, reducer):
        def layout(seed):
            state = started(reducer, MinesweeperState.create(seed=seed))
            state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
            return mine_positions(state)

        assert layout(77) == layout(77)

    def test_adjacent_counts(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=5))
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        mines = mine_positions(state)
        for r in range(state.rows):
            for c in range(state.cols):
                if (r, c) in mines:
                    continue
                expected = sum(1 for n in state.neighbors(r, c) if n in mines)
                assert state.cells[r][c].adjacent_mines == expected


class TestReveal:
    """Tests for reveals, flood fill and outcomes."""

    def test_flood_fill_open_board(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=1, rows=5, cols=5, mine_count=0))
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(2, 2))
        assert all(cell.is_revealed for row in state.cells for cell in row)
        assert state.did_win
        assert state.is_game_over
        assert state.score == 25 * 10 + 500

    def test_hitting_mine_loses(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=9))
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        row, col = sorted(mine_positions(state))[0]
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(row, col))
        assert state.is_game_over
        assert not state.did_win
        assert all(state.cells[r][c].is_revealed for r, c in mine_positions(state))

    def test_revealing_last_safe_cell_wins(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=3, rows=2, cols=2, mine_count=1))
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        safe = [
            (r, c)
            for r in range(2)
            for c in range(2)
            if not state.cells[r][c].is_mine and not state.cells[r][c].is_revealed
        ]
        for r, c in safe:
            state, _ = reducer.reduce(state, MinesweeperAction.reveal(r, c))
        assert state.did_win
        assert state.score == 3 * 10 + 500

    def test_revealed_cell_is_noop(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=9))
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        again, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        assert again is state

    def test_out_of_bounds_is_noop(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=9))
        new_state, _ = reducer.reduce(state, MinesweeperAction.reveal(9, 0))
        assert new_state is state

    def test_reveal_ignored_before_start(self, reducer):
        state = MinesweeperState.create(seed=9)
        new_state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        assert new_state is state


class TestFlags:
    """Tests for flagging."""

    def test_toggle_flag_counts(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=9))
        state, _ = reducer.reduce(state, MinesweeperAction.toggle_flag(1, 1))
        assert state.cells[1][1].is_flagged
        assert state.flag_count == 1
        state, _ = reducer.reduce(state, MinesweeperAction.toggle_flag(1, 1))
        assert not state.cells[1][1].is_flagged
        assert state.flag_count == 0

    def test_flag_blocks_reveal(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=9))
        state, _ = reducer.reduce(state, MinesweeperAction.toggle_flag(1, 1))
        new_state, _ = reducer.reduce(state, MinesweeperAction.reveal(1, 1))
        assert new_state is state

    def test_cannot_flag_revealed(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=9))
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        new_state, _ = reducer.reduce(state, MinesweeperAction.toggle_flag(0, 0))
        assert new_state is state

    def test_restart_after_game_over_clears_mines(self, reducer):
        state = started(reducer, MinesweeperState.create(seed=1, rows=3, cols=3, mine_count=0))
        state, _ = reducer.reduce(state, MinesweeperAction.reveal(0, 0))
        assert state.is_game_over
        restarted = started(reducer, state)
        assert restarted.is_running
        assert not restarted.mines_placed
        assert restarted.score == 0

    def test_parse_requires_coordinates(self):
        with pytest.raises(ActionParseError):
            parse_action("reveal", {"row": 1})
        assert parse_action("toggle_flag", {"row": "2", "col": 3}).row == 2
