"""
Snake Actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ...engine_core.action import (
    Action,
    ActionParseError,
    SessionControls,
    parse_action_type,
    require_param,
)
from ...engine_core.state import Direction


class SnakeActionType(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"

    TICK = "tick"
    CHANGE_DIRECTION = "change_direction"


@dataclass(frozen=True)
class SnakeAction(Action):
    direction: Direction | None = None

    @classmethod
    def start(cls) -> SnakeAction:
        return cls(SnakeActionType.START)

    @classmethod
    def pause(cls) -> SnakeAction:
        return cls(SnakeActionType.PAUSE)

    @classmethod
    def resume(cls) -> SnakeAction:
        return cls(SnakeActionType.RESUME)

    @classmethod
    def reset(cls) -> SnakeAction:
        return cls(SnakeActionType.RESET)

    @classmethod
    def tick(cls) -> SnakeAction:
        return cls(SnakeActionType.TICK)

    @classmethod
    def change_direction(cls, direction: Direction) -> SnakeAction:
        return cls(SnakeActionType.CHANGE_DIRECTION, direction=direction)


CONTROLS = SessionControls(
    start=SnakeAction.start(),
    pause=SnakeAction.pause(),
    resume=SnakeAction.resume(),
    reset=SnakeAction.reset(),
)


def parse_direction(raw: Any) -> Direction:
    try:
        return Direction(raw)
    except ValueError:
        raise ActionParseError(f"Unknown direction: {raw}") from None


def parse_action(action_type: str, params: Mapping[str, Any]) -> SnakeAction:
    kind = parse_action_type(SnakeActionType, action_type)
    if kind == SnakeActionType.CHANGE_DIRECTION:
        return SnakeAction.change_direction(
            parse_direction(require_param(params, "direction", str))
        )
    return SnakeAction(kind)
