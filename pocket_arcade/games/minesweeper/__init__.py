"""
Minesweeper - Clear a 9x9 field without touching any of its 10 mines.
"""

from .state import Cell, MinesweeperState
from .actions import CONTROLS, MinesweeperAction, MinesweeperActionType, parse_action
from .reducer import MinesweeperReducer

__all__ = [
    "Cell",
    "MinesweeperState",
    "CONTROLS",
    "MinesweeperAction",
    "MinesweeperActionType",
    "parse_action",
    "MinesweeperReducer",
]
