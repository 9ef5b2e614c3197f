"""
Card Duel Actions.

Player actions are only legal in the PLAYER_MAIN phase. The AI phases and
start_player_turn are internal: they are scheduled by effects returned
from end_turn and the AI phases themselves.
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
from .cards import Target, TargetKind


class CardDuelActionType(Enum):
    # Session lifecycle
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    RESET = "reset"

    # Player actions
    PLAY_CARD = "play_card"
    MINION_ATTACK = "minion_attack"

    # AI phases (internal)
    AI_PLAY_PHASE = "ai_play_phase"
    AI_ATTACK_PHASE = "ai_attack_phase"

    # Turn management
    END_TURN = "end_turn"
    START_PLAYER_TURN = "start_player_turn"


@dataclass(frozen=True)
class CardDuelAction(Action):
    hand_index: int | None = None
    attacker_id: int | None = None
    target: Target | None = None

    @classmethod
    def start(cls) -> CardDuelAction:
        return cls(CardDuelActionType.START)

    @classmethod
    def pause(cls) -> CardDuelAction:
        return cls(CardDuelActionType.PAUSE)

    @classmethod
    def resume(cls) -> CardDuelAction:
        return cls(CardDuelActionType.RESUME)

    @classmethod
    def reset(cls) -> CardDuelAction:
        return cls(CardDuelActionType.RESET)

    @classmethod
    def play_card(cls, hand_index: int, target: Target | None = None) -> CardDuelAction:
        """Play a card from hand. Targeted spells need a target."""
        return cls(CardDuelActionType.PLAY_CARD, hand_index=hand_index, target=target)

    @classmethod
    def minion_attack(cls, attacker_id: int, target: Target) -> CardDuelAction:
        return cls(CardDuelActionType.MINION_ATTACK, attacker_id=attacker_id, target=target)

    @classmethod
    def end_turn(cls) -> CardDuelAction:
        return cls(CardDuelActionType.END_TURN)

    @classmethod
    def ai_play_phase(cls) -> CardDuelAction:
        return cls(CardDuelActionType.AI_PLAY_PHASE)

    @classmethod
    def ai_attack_phase(cls) -> CardDuelAction:
        return cls(CardDuelActionType.AI_ATTACK_PHASE)

    @classmethod
    def start_player_turn(cls) -> CardDuelAction:
        return cls(CardDuelActionType.START_PLAYER_TURN)


CONTROLS = SessionControls(
    start=CardDuelAction.start(),
    pause=CardDuelAction.pause(),
    resume=CardDuelAction.resume(),
    reset=CardDuelAction.reset(),
)


def _parse_target(raw: Any) -> Target | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = {"kind": raw}
    if not isinstance(raw, Mapping):
        raise ActionParseError("Target must be an object or a hero name")
    try:
        kind = TargetKind(raw.get("kind"))
    except ValueError:
        raise ActionParseError(f"Unknown target kind: {raw.get('kind')}") from None
    if kind == TargetKind.MINION:
        return Target.minion(require_param(raw, "minion_id"))
    return Target(kind)


def parse_action(action_type: str, params: Mapping[str, Any]) -> CardDuelAction:
    """Build an action from its wire form."""
    kind = parse_action_type(CardDuelActionType, action_type)
    if kind == CardDuelActionType.PLAY_CARD:
        return CardDuelAction.play_card(
            require_param(params, "hand_index"),
            _parse_target(params.get("target")),
        )
    if kind == CardDuelActionType.MINION_ATTACK:
        target = _parse_target(params.get("target"))
        if target is None:
            raise ActionParseError("Missing parameter 'target'")
        return CardDuelAction.minion_attack(require_param(params, "attacker_id"), target)
    return CardDuelAction(kind)
