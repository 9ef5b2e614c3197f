"""
Breakout - Keep the ball in play with the paddle and clear the brick wall.
"""

from .state import Ball, Brick, BreakoutState, brick_wall
from .actions import CONTROLS, BreakoutAction, BreakoutActionType, parse_action
from .reducer import BreakoutReducer

__all__ = [
    "Ball",
    "Brick",
    "BreakoutState",
    "brick_wall",
    "CONTROLS",
    "BreakoutAction",
    "BreakoutActionType",
    "parse_action",
    "BreakoutReducer",
]
