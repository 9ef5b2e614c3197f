"""
Game State - The contract every game state satisfies.

Design principles:
- Immutable per step: reducers work on a clone and return it
- Comparable: dataclass equality makes "state unchanged" checkable
- Game-agnostic: each game subclasses GameState with its own fields
"""

from __future__ import annotations
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

S = TypeVar("S", bound="GameState")


class Direction(Enum):
    """Cardinal directions for swipes and grid movement."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) with y growing downward."""
        return _DELTAS[self]


_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class GridPosition:
    """A cell on a game grid."""
    x: int
    y: int

    def moved(self, direction: Direction) -> GridPosition:
        dx, dy = direction.delta
        return GridPosition(self.x + dx, self.y + dy)

    def inside(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height


@dataclass
class GameState:
    """
    Minimum interface the engine needs from a game state.

    - is_running: the session accepts gameplay actions
    - score: current score
    - is_game_over: terminal; only lifecycle actions are accepted
    """
    is_running: bool = False
    score: int = 0
    is_game_over: bool = False

    @property
    def accepts_gameplay(self) -> bool:
        return self.is_running and not self.is_game_over

    def clone(self: S) -> S:
        """Deep copy the state."""
        return deepcopy(self)

    def end_game(self) -> None:
        """Mark the session terminal (call on a clone)."""
        self.is_game_over = True
        self.is_running = False
