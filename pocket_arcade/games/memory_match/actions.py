"""
Memory Match Actions.

``hide_unmatched`` is normally sent by the delayed effect that follows a
mismatching second flip.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ...engine_core.action import Action, SessionControls, parse_action_type, require_param


class MemoryMatchActionType(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"

    FLIP_CARD = "flip_card"
    CHECK_MATCH = "check_match"
    HIDE_UNMATCHED = "hide_unmatched"


@dataclass(frozen=True)
class MemoryMatchAction(Action):
    index: int = 0

    @classmethod
    def start(cls) -> MemoryMatchAction:
        return cls(MemoryMatchActionType.START)

    @classmethod
    def pause(cls) -> MemoryMatchAction:
        return cls(MemoryMatchActionType.PAUSE)

    @classmethod
    def resume(cls) -> MemoryMatchAction:
        return cls(MemoryMatchActionType.RESUME)

    @classmethod
    def reset(cls) -> MemoryMatchAction:
        return cls(MemoryMatchActionType.RESET)

    @classmethod
    def flip_card(cls, index: int) -> MemoryMatchAction:
        return cls(MemoryMatchActionType.FLIP_CARD, index=index)

    @classmethod
    def check_match(cls) -> MemoryMatchAction:
        return cls(MemoryMatchActionType.CHECK_MATCH)

    @classmethod
    def hide_unmatched(cls) -> MemoryMatchAction:
        return cls(MemoryMatchActionType.HIDE_UNMATCHED)


CONTROLS = SessionControls(
    start=MemoryMatchAction.start(),
    pause=MemoryMatchAction.pause(),
    resume=MemoryMatchAction.resume(),
    reset=MemoryMatchAction.reset(),
)


def parse_action(action_type: str, params: Mapping[str, Any]) -> MemoryMatchAction:
    kind = parse_action_type(MemoryMatchActionType, action_type)
    if kind == MemoryMatchActionType.FLIP_CARD:
        return MemoryMatchAction.flip_card(require_param(params, "index"))
    return MemoryMatchAction(kind)
