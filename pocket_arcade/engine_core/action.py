"""
Action System - Actions and session controls.

Actions represent:
1. Player intent (move, play a card, reveal a cell)
2. Time (ticks synthesized by the game loop)
3. Follow-ups fed back by effects (AI phases, delayed reveals)

All state changes flow through actions. Each game defines its own
ActionType enum and an Action subclass carrying the parameters; the
four lifecycle values (start, pause, resume, reset) share the same names
across games so the session layer can drive any game.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

A = TypeVar("A")
E = TypeVar("E", bound=Enum)

LIFECYCLE_VALUES = frozenset({"start", "pause", "resume", "reset"})


class ActionParseError(ValueError):
    """Raised when an external payload cannot be turned into an action."""


@dataclass(frozen=True)
class Action:
    """
    Base class for game actions.

    Actions are immutable values: they can be logged, compared in tests and
    replayed against the same seed to reproduce a session.
    """
    action_type: Enum

    @property
    def is_lifecycle(self) -> bool:
        return self.action_type.value in LIFECYCLE_VALUES

    @property
    def name(self) -> str:
        return self.action_type.value


@dataclass(frozen=True)
class SessionControls(Generic[A]):
    """Standard lifecycle actions every game exposes."""
    start: A
    pause: A
    resume: A
    reset: A


def parse_action_type(enum_cls: type[E], raw: str) -> E:
    """Look up an action type by its wire value."""
    try:
        return enum_cls(raw)
    except ValueError:
        known = ", ".join(sorted(t.value for t in enum_cls))
        raise ActionParseError(f"Unknown action '{raw}'. Expected one of: {known}") from None


def require_param(params: Mapping[str, Any], key: str, kind: type = int) -> Any:
    """Fetch a required parameter and coerce it to ``kind``."""
    if key not in params or params[key] is None:
        raise ActionParseError(f"Missing parameter '{key}'")
    try:
        return kind(params[key])
    except (TypeError, ValueError) as e:
        raise ActionParseError(f"Invalid value for '{key}': {e}") from e
