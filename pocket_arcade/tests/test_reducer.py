"""
Tests for the reducer base class.

Tests:
- Gameplay actions gated on running / game over
- Lifecycle and ungated actions always handled
- Failing handlers become no-ops
"""

from dataclasses import dataclass
from enum import Enum

import pytest

from ..engine_core.action import Action, ActionParseError, parse_action_type, require_param
from ..engine_core.effect import Effect
from ..engine_core.reducer import Reducer, unchanged
from ..engine_core.state import GameState


class CounterActionType(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"
    BUMP = "bump"
    NUDGE = "nudge"
    EXPLODE = "explode"
    UNHANDLED = "unhandled"


@dataclass(frozen=True)
class CounterAction(Action):
    pass


class CounterReducer(Reducer[GameState, CounterAction]):
    UNGATED = frozenset({CounterActionType.NUDGE.value})

    def _handlers(self):
        return {
            CounterActionType.START: self._start,
            CounterActionType.BUMP: self._bump,
            CounterActionType.NUDGE: self._bump,
            CounterActionType.EXPLODE: self._explode,
        }

    def _start(self, state, action):
        s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _bump(self, state, action):
        s = state.clone()
        s.score += 1
        return s, Effect.none()

    def _explode(self, state, action):
        raise RuntimeError("handler bug")


class TestGating:
    """Tests for which actions reach their handler."""

    def test_gameplay_rejected_when_idle(self):
        state = GameState()
        new_state, effect = CounterReducer().reduce(state, CounterAction(CounterActionType.BUMP))
        assert new_state is state
        assert effect.is_none

    def test_gameplay_rejected_after_game_over(self):
        state = GameState(is_running=True)
        state.end_game()
        new_state, _ = CounterReducer().reduce(state, CounterAction(CounterActionType.BUMP))
        assert new_state is state

    def test_gameplay_accepted_when_running(self):
        state = GameState(is_running=True)
        new_state, _ = CounterReducer().reduce(state, CounterAction(CounterActionType.BUMP))
        assert new_state.score == 1
        assert state.score == 0

    def test_lifecycle_always_handled(self):
        state = GameState()
        state.end_game()
        new_state, _ = CounterReducer().reduce(state, CounterAction(CounterActionType.START))
        assert new_state.is_running

    def test_ungated_action_handled_while_idle(self):
        new_state, _ = CounterReducer().reduce(GameState(), CounterAction(CounterActionType.NUDGE))
        assert new_state.score == 1

    def test_failing_handler_is_noop(self):
        state = GameState(is_running=True)
        new_state, effect = CounterReducer()(state, CounterAction(CounterActionType.EXPLODE))
        assert new_state is state
        assert effect.is_none

    def test_missing_handler_is_noop(self):
        state = GameState(is_running=True)
        new_state, _ = CounterReducer().reduce(state, CounterAction(CounterActionType.UNHANDLED))
        assert new_state is state

    def test_unchanged_returns_same_object(self):
        state = GameState()
        new_state, effect = unchanged(state)
        assert new_state is state
        assert effect.is_none


class TestActionParsing:
    """Tests for wire parsing helpers."""

    def test_parse_known_type(self):
        assert parse_action_type(CounterActionType, "bump") == CounterActionType.BUMP

    def test_parse_unknown_type_lists_choices(self):
        with pytest.raises(ActionParseError) as exc_info:
            parse_action_type(CounterActionType, "jump")
        assert "bump" in str(exc_info.value)

    def test_require_param_coerces(self):
        assert require_param({"row": "3"}, "row") == 3

    def test_require_param_missing(self):
        with pytest.raises(ActionParseError):
            require_param({}, "row")

    def test_require_param_bad_type(self):
        with pytest.raises(ActionParseError):
            require_param({"row": "three"}, "row")

    def test_lifecycle_flag(self):
        assert CounterAction(CounterActionType.RESET).is_lifecycle
        assert not CounterAction(CounterActionType.BUMP).is_lifecycle
