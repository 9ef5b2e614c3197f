"""
Breakout State.

All coordinates are normalized: x and y run from 0 to 1 with y growing
downward. The paddle moves along y = PADDLE_Y.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ...engine_core.state import GameState

BALL_RADIUS = 0.015
PADDLE_WIDTH = 0.22
PADDLE_HEIGHT = 0.03
PADDLE_Y = 0.92
PADDLE_MIN_X = 0.1
PADDLE_MAX_X = 0.9

BRICK_ROWS = 5
BRICK_COLS = 8
BRICK_GAP = 0.008
BRICK_TOP = 0.08
BRICK_HEIGHT = 0.05
BRICK_WIDTH = (1 - BRICK_GAP * (BRICK_COLS + 1)) / BRICK_COLS
# Rows above this index take two hits
TOUGH_ROWS = 2

STARTING_LIVES = 3


@dataclass
class Ball:
    x: float
    y: float
    vx: float
    vy: float


@dataclass
class Brick:
    brick_id: int
    row: int
    col: int
    hit_points: int = 1

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """(left, top, width, height) in normalized coordinates."""
        x = BRICK_GAP + self.col * (BRICK_WIDTH + BRICK_GAP)
        y = BRICK_TOP + self.row * (BRICK_HEIGHT + BRICK_GAP)
        return x, y, BRICK_WIDTH, BRICK_HEIGHT


def brick_wall(rows: int = BRICK_ROWS, cols: int = BRICK_COLS) -> list[Brick]:
    """The opening wall, top rows reinforced."""
    return [
        Brick(
            brick_id=row * cols + col,
            row=row,
            col=col,
            hit_points=2 if row < TOUGH_ROWS else 1,
        )
        for row in range(rows)
        for col in range(cols)
    ]


@dataclass
class BreakoutState(GameState):
    paddle_x: float = 0.5
    ball: Ball = field(default_factory=lambda: Ball(x=0.5, y=0.8, vx=0.3, vy=-0.4))
    bricks: list[Brick] = field(default_factory=list)
    lives: int = STARTING_LIVES
    is_ball_launched: bool = False
