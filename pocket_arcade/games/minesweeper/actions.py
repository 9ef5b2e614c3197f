"""
Minesweeper Actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ...engine_core.action import Action, SessionControls, parse_action_type, require_param


class MinesweeperActionType(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"

    REVEAL = "reveal"
    TOGGLE_FLAG = "toggle_flag"


@dataclass(frozen=True)
class MinesweeperAction(Action):
    row: int = 0
    col: int = 0

    @classmethod
    def start(cls) -> MinesweeperAction:
        return cls(MinesweeperActionType.START)

    @classmethod
    def pause(cls) -> MinesweeperAction:
        return cls(MinesweeperActionType.PAUSE)

    @classmethod
    def resume(cls) -> MinesweeperAction:
        return cls(MinesweeperActionType.RESUME)

    @classmethod
    def reset(cls) -> MinesweeperAction:
        return cls(MinesweeperActionType.RESET)

    @classmethod
    def reveal(cls, row: int, col: int) -> MinesweeperAction:
        return cls(MinesweeperActionType.REVEAL, row=row, col=col)

    @classmethod
    def toggle_flag(cls, row: int, col: int) -> MinesweeperAction:
        return cls(MinesweeperActionType.TOGGLE_FLAG, row=row, col=col)


CONTROLS = SessionControls(
    start=MinesweeperAction.start(),
    pause=MinesweeperAction.pause(),
    resume=MinesweeperAction.resume(),
    reset=MinesweeperAction.reset(),
)


def parse_action(action_type: str, params: Mapping[str, Any]) -> MinesweeperAction:
    kind = parse_action_type(MinesweeperActionType, action_type)
    if kind in (MinesweeperActionType.REVEAL, MinesweeperActionType.TOGGLE_FLAG):
        return MinesweeperAction(
            kind,
            row=require_param(params, "row"),
            col=require_param(params, "col"),
        )
    return MinesweeperAction(kind)
