"""
Memory Match - Turn over cards two at a time to find all eight pairs.
"""

from .state import MemoryCard, MemoryMatchState, make_deck
from .actions import CONTROLS, MemoryMatchAction, MemoryMatchActionType, parse_action
from .reducer import MemoryMatchReducer

__all__ = [
    "MemoryCard",
    "MemoryMatchState",
    "make_deck",
    "CONTROLS",
    "MemoryMatchAction",
    "MemoryMatchActionType",
    "parse_action",
    "MemoryMatchReducer",
]
