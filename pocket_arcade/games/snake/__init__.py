"""
Snake - Steer a growing snake to the food without hitting walls or itself.
"""

from .state import SnakeState
from .actions import CONTROLS, SnakeAction, SnakeActionType, parse_action
from .reducer import SnakeReducer

__all__ = [
    "SnakeState",
    "CONTROLS",
    "SnakeAction",
    "SnakeActionType",
    "parse_action",
    "SnakeReducer",
]
