"""
Block Puzzle Actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ...engine_core.action import Action, SessionControls, parse_action_type


class BlockPuzzleActionType(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"

    TICK = "tick"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE = "rotate"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"


@dataclass(frozen=True)
class BlockPuzzleAction(Action):

    @classmethod
    def start(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.START)

    @classmethod
    def pause(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.PAUSE)

    @classmethod
    def resume(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.RESUME)

    @classmethod
    def reset(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.RESET)

    @classmethod
    def tick(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.TICK)

    @classmethod
    def move_left(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.MOVE_LEFT)

    @classmethod
    def move_right(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.MOVE_RIGHT)

    @classmethod
    def rotate(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.ROTATE)

    @classmethod
    def soft_drop(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.SOFT_DROP)

    @classmethod
    def hard_drop(cls) -> BlockPuzzleAction:
        return cls(BlockPuzzleActionType.HARD_DROP)


CONTROLS = SessionControls(
    start=BlockPuzzleAction.start(),
    pause=BlockPuzzleAction.pause(),
    resume=BlockPuzzleAction.resume(),
    reset=BlockPuzzleAction.reset(),
)


def parse_action(action_type: str, params: Mapping[str, Any]) -> BlockPuzzleAction:
    """No Block Puzzle action takes parameters."""
    return BlockPuzzleAction(parse_action_type(BlockPuzzleActionType, action_type))
