"""
Snake Reducer.

A tick moves the head one cell. Leaving the grid or running into the body
ends the game; eating food grows the snake by keeping its tail.
"""

from __future__ import annotations
from enum import Enum

from ...engine_core.effect import Effect
from ...engine_core.reducer import Handler, Reducer, Transition, unchanged
from ...engine_core.state import GridPosition
from .actions import SnakeAction, SnakeActionType
from .state import FOOD_SCORE, SnakeState

SnakeTransition = Transition[SnakeState, SnakeAction]


class SnakeReducer(Reducer[SnakeState, SnakeAction]):
    """Reducer for Snake. Direction changes are accepted while paused."""

    UNGATED = frozenset({SnakeActionType.CHANGE_DIRECTION.value})

    def _handlers(self) -> dict[Enum, Handler]:
        return {
            SnakeActionType.START: self._handle_start,
            SnakeActionType.PAUSE: self._handle_pause,
            SnakeActionType.RESUME: self._handle_resume,
            SnakeActionType.RESET: self._handle_reset,
            SnakeActionType.TICK: self._handle_tick,
            SnakeActionType.CHANGE_DIRECTION: self._handle_change_direction,
        }

    def _handle_start(self, state: SnakeState, action: SnakeAction) -> SnakeTransition:
        s = state.fresh() if state.is_game_over else state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_pause(self, state: SnakeState, action: SnakeAction) -> SnakeTransition:
        if not state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = False
        return s, Effect.none()

    def _handle_resume(self, state: SnakeState, action: SnakeAction) -> SnakeTransition:
        if state.is_game_over or state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_reset(self, state: SnakeState, action: SnakeAction) -> SnakeTransition:
        return state.fresh(), Effect.none()

    def _handle_change_direction(self, state: SnakeState, action: SnakeAction) -> SnakeTransition:
        direction = action.direction
        if direction is None or direction in (state.direction, state.direction.opposite):
            return unchanged(state)
        s = state.clone()
        s.direction = direction
        return s, Effect.none()

    def _handle_tick(self, state: SnakeState, action: SnakeAction) -> SnakeTransition:
        s = state.clone()
        head = s.head
        if head is None:
            s.end_game()
            return s, Effect.none()

        next_head = head.moved(s.direction)
        if not next_head.inside(s.grid_width, s.grid_height) or next_head in s.segments:
            s.end_game()
            return s, Effect.none()

        s.segments.insert(0, next_head)
        if next_head == s.food:
            s.score += FOOD_SCORE
            s.food = spawn_food(s)
        else:
            s.segments.pop()
        return s, Effect.none()


def spawn_food(state: SnakeState) -> GridPosition:
    """Uniform pick among free cells; the old food cell when the grid is full."""
    occupied = set(state.segments)
    free = [
        GridPosition(x, y)
        for y in range(state.grid_height)
        for x in range(state.grid_width)
        if GridPosition(x, y) not in occupied
    ]
    if not free:
        return state.food
    return state.rng.choice(free)
