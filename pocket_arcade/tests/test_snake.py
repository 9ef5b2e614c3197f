"""
Tests for Snake.
"""

import pytest

from ..engine_core.action import ActionParseError
from ..engine_core.state import Direction, GridPosition
from ..games.snake import SnakeAction, SnakeReducer, SnakeState, parse_action
from ..games.snake.state import FOOD_SCORE


@pytest.fixture
def reducer():
    return SnakeReducer()


@pytest.fixture
def running(reducer):
    state, _ = reducer.reduce(SnakeState.create(seed=3), SnakeAction.start())
    return state


class TestSnakeMovement:
    """Tests for ticks and direction changes."""

    def test_initial_layout(self):
        state = SnakeState.create(seed=3)
        assert state.head == GridPosition(10, 10)
        assert len(state.segments) == 3
        assert state.direction == Direction.RIGHT
        assert state.food == GridPosition(15, 10)

    def test_tick_moves_head(self, reducer, running):
        state, _ = reducer.reduce(running, SnakeAction.tick())
        assert state.head == GridPosition(11, 10)
        assert len(state.segments) == 3
        assert running.head == GridPosition(10, 10)

    def test_tick_ignored_when_not_running(self, reducer):
        idle = SnakeState.create(seed=3)
        state, _ = reducer.reduce(idle, SnakeAction.tick())
        assert state is idle

    def test_reverse_direction_rejected(self, reducer, running):
        state, _ = reducer.reduce(running, SnakeAction.change_direction(Direction.LEFT))
        assert state is running

    def test_same_direction_is_noop(self, reducer, running):
        state, _ = reducer.reduce(running, SnakeAction.change_direction(Direction.RIGHT))
        assert state is running

    def test_turn(self, reducer, running):
        state, _ = reducer.reduce(running, SnakeAction.change_direction(Direction.UP))
        state, _ = reducer.reduce(state, SnakeAction.tick())
        assert state.head == GridPosition(10, 9)

    def test_direction_change_accepted_while_paused(self, reducer, running):
        paused, _ = reducer.reduce(running, SnakeAction.pause())
        state, _ = reducer.reduce(paused, SnakeAction.change_direction(Direction.DOWN))
        assert state.direction == Direction.DOWN
        assert not state.is_running


class TestSnakeCollisions:
    """Tests for food, walls and self collision."""

    def test_eating_food_grows_and_scores(self, reducer, running):
        running.food = GridPosition(11, 10)
        state, _ = reducer.reduce(running, SnakeAction.tick())
        assert state.score == FOOD_SCORE
        assert len(state.segments) == 4
        assert state.food not in state.segments

    def test_wall_ends_game(self, reducer, running):
        running.segments = [GridPosition(19, 10), GridPosition(18, 10), GridPosition(17, 10)]
        state, _ = reducer.reduce(running, SnakeAction.tick())
        assert state.is_game_over
        assert not state.is_running

    def test_self_collision_ends_game(self, reducer, running):
        running.segments = [
            GridPosition(5, 5),
            GridPosition(6, 5),
            GridPosition(6, 6),
            GridPosition(5, 6),
            GridPosition(4, 6),
        ]
        running.direction = Direction.DOWN
        state, _ = reducer.reduce(running, SnakeAction.tick())
        assert state.is_game_over

    def test_start_after_game_over_restarts(self, reducer, running):
        running.score = 40
        running.end_game()
        state, _ = reducer.reduce(running, SnakeAction.start())
        assert state.is_running
        assert not state.is_game_over
        assert state.score == 0
        assert state.head == GridPosition(10, 10)

    def test_food_sequence_is_seeded(self, reducer):
        def eat_once(seed):
            state, _ = reducer.reduce(SnakeState.create(seed=seed), SnakeAction.start())
            state.food = GridPosition(11, 10)
            state, _ = reducer.reduce(state, SnakeAction.tick())
            return state.food

        assert eat_once(8) == eat_once(8)


class TestSnakeLifecycle:
    """Tests for pause, resume and reset."""

    def test_pause_and_resume(self, reducer, running):
        paused, _ = reducer.reduce(running, SnakeAction.pause())
        assert not paused.is_running
        resumed, _ = reducer.reduce(paused, SnakeAction.resume())
        assert resumed.is_running

    def test_reset_returns_idle_layout(self, reducer, running):
        moved, _ = reducer.reduce(running, SnakeAction.tick())
        state, _ = reducer.reduce(moved, SnakeAction.reset())
        assert not state.is_running
        assert state.head == GridPosition(10, 10)


class TestSnakeParsing:
    def test_parse_direction(self):
        action = parse_action("change_direction", {"direction": "up"})
        assert action.direction == Direction.UP

    def test_parse_bad_direction(self):
        with pytest.raises(ActionParseError):
            parse_action("change_direction", {"direction": "sideways"})

    def test_parse_missing_direction(self):
        with pytest.raises(ActionParseError):
            parse_action("change_direction", {})
