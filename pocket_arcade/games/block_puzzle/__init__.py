"""
Block Puzzle - Falling four-cell pieces on a wide 12x24 well.
"""

from .state import PIECE_BLUEPRINTS, BlockPuzzleState, Piece
from .actions import CONTROLS, BlockPuzzleAction, BlockPuzzleActionType, parse_action
from .reducer import BlockPuzzleReducer

__all__ = [
    "PIECE_BLUEPRINTS",
    "BlockPuzzleState",
    "Piece",
    "CONTROLS",
    "BlockPuzzleAction",
    "BlockPuzzleActionType",
    "parse_action",
    "BlockPuzzleReducer",
]
