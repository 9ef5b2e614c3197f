"""
Reaction Tap Actions.

``show_stimulus`` is produced by the delayed effect scheduled when a round
becomes ready and carries that schedule's token; one without a token (sent
by hand over the wire) is accepted for any ready round. ``tap`` defaults its timestamp to the current monotonic
time when parsed from the wire.
"""

from __future__ import annotations
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from ...engine_core.action import Action, SessionControls, parse_action_type, require_param


class ReactionTapActionType(Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"

    SHOW_STIMULUS = "show_stimulus"
    TAP = "tap"
    NEXT_ROUND = "next_round"


@dataclass(frozen=True)
class ReactionTapAction(Action):
    at: float = 0.0
    token: int | None = None

    @classmethod
    def start(cls) -> ReactionTapAction:
        return cls(ReactionTapActionType.START)

    @classmethod
    def pause(cls) -> ReactionTapAction:
        return cls(ReactionTapActionType.PAUSE)

    @classmethod
    def resume(cls) -> ReactionTapAction:
        return cls(ReactionTapActionType.RESUME)

    @classmethod
    def reset(cls) -> ReactionTapAction:
        return cls(ReactionTapActionType.RESET)

    @classmethod
    def show_stimulus(cls, at: float, token: int | None = None) -> ReactionTapAction:
        return cls(ReactionTapActionType.SHOW_STIMULUS, at=at, token=token)

    @classmethod
    def tap(cls, at: float) -> ReactionTapAction:
        return cls(ReactionTapActionType.TAP, at=at)

    @classmethod
    def next_round(cls) -> ReactionTapAction:
        return cls(ReactionTapActionType.NEXT_ROUND)


CONTROLS = SessionControls(
    start=ReactionTapAction.start(),
    pause=ReactionTapAction.pause(),
    resume=ReactionTapAction.resume(),
    reset=ReactionTapAction.reset(),
)


def parse_action(action_type: str, params: Mapping[str, Any]) -> ReactionTapAction:
    kind = parse_action_type(ReactionTapActionType, action_type)
    if kind in (ReactionTapActionType.TAP, ReactionTapActionType.SHOW_STIMULUS):
        at = require_param(params, "at", float) if "at" in params else time.monotonic()
        return ReactionTapAction(kind, at=at)
    return ReactionTapAction(kind)
