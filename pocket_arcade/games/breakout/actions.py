"""
Breakout Actions.

``tick`` carries the real elapsed time since the previous tick, in seconds.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ...engine_core.action import Action, SessionControls, parse_action_type, require_param


class BreakoutActionType(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"

    TICK = "tick"
    MOVE_PADDLE = "move_paddle"
    LAUNCH = "launch"


@dataclass(frozen=True)
class BreakoutAction(Action):
    delta_time: float = 0.0
    x: float = 0.5

    @classmethod
    def start(cls) -> BreakoutAction:
        return cls(BreakoutActionType.START)

    @classmethod
    def pause(cls) -> BreakoutAction:
        return cls(BreakoutActionType.PAUSE)

    @classmethod
    def resume(cls) -> BreakoutAction:
        return cls(BreakoutActionType.RESUME)

    @classmethod
    def reset(cls) -> BreakoutAction:
        return cls(BreakoutActionType.RESET)

    @classmethod
    def tick(cls, delta_time: float) -> BreakoutAction:
        return cls(BreakoutActionType.TICK, delta_time=delta_time)

    @classmethod
    def move_paddle(cls, x: float) -> BreakoutAction:
        return cls(BreakoutActionType.MOVE_PADDLE, x=x)

    @classmethod
    def launch(cls) -> BreakoutAction:
        return cls(BreakoutActionType.LAUNCH)


CONTROLS = SessionControls(
    start=BreakoutAction.start(),
    pause=BreakoutAction.pause(),
    resume=BreakoutAction.resume(),
    reset=BreakoutAction.reset(),
)


def parse_action(action_type: str, params: Mapping[str, Any]) -> BreakoutAction:
    kind = parse_action_type(BreakoutActionType, action_type)
    if kind == BreakoutActionType.TICK:
        return BreakoutAction.tick(require_param(params, "delta_time", float))
    if kind == BreakoutActionType.MOVE_PADDLE:
        return BreakoutAction.move_paddle(require_param(params, "x", float))
    return BreakoutAction(kind)
