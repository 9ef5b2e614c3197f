"""
Reducer - Applies actions to game state.

The reducer is the single point of state change for a game.
All state changes must go through it.

Design principles:
- Pure function: (state, action) -> (new_state, effect)
- No I/O: deferred work is described by the returned Effect
- Never raises: rejected actions are no-op transitions
- Handlers are looked up by action type, one method per action
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Generic, TypeVar

from loguru import logger

from .action import Action
from .effect import Effect
from .state import GameState

S = TypeVar("S", bound=GameState)
A = TypeVar("A", bound=Action)

Transition = tuple[S, Effect[A]]
Handler = Callable[[S, A], "Transition[S, A]"]


def unchanged(state: S) -> Transition[S, A]:
    """The no-op transition: same state object, no effect."""
    return state, Effect.none()


class Reducer(Generic[S, A]):
    """
    Base class for game reducers.

    Subclasses implement ``_handlers`` returning a mapping from action type
    to handler method. Gameplay actions are rejected up front while the
    session is paused or over; lifecycle actions and the names listed in
    ``UNGATED`` always reach their handler.
    """

    UNGATED: frozenset[str] = frozenset()

    def __call__(self, state: S, action: A) -> Transition[S, A]:
        return self.reduce(state, action)

    def reduce(self, state: S, action: A) -> Transition[S, A]:
        """
        Apply an action to the state.

        Returns (new_state, effect). Rejected actions return the input state.
        """
        handler = self._get_handler(action.action_type)
        if handler is None:
            logger.warning("No handler for action type: {}", action.action_type)
            return unchanged(state)

        if not self._is_accepted(state, action):
            return unchanged(state)

        try:
            return handler(state, action)
        except Exception:
            logger.exception("Reducer {} failed on {}", type(self).__name__, action)
            return unchanged(state)

    def _is_accepted(self, state: S, action: A) -> bool:
        if action.is_lifecycle or action.name in self.UNGATED:
            return True
        return state.accepts_gameplay

    def _get_handler(self, action_type: Enum) -> Handler | None:
        """Get the handler function for an action type."""
        return self._handlers().get(action_type)

    def _handlers(self) -> dict[Enum, Handler]:
        raise NotImplementedError
