"""
Reaction Tap - Tap as soon as the stimulus shows; five rounds, averaged.
"""

from .state import ReactionPhase, ReactionTapState, final_score
from .actions import CONTROLS, ReactionTapAction, ReactionTapActionType, parse_action
from .reducer import ReactionTapReducer

__all__ = [
    "ReactionPhase",
    "ReactionTapState",
    "final_score",
    "CONTROLS",
    "ReactionTapAction",
    "ReactionTapActionType",
    "parse_action",
    "ReactionTapReducer",
]
