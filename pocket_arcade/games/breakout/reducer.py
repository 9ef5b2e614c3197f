"""
Breakout Reducer - Ball physics step and collisions.

Each tick, in order:
1. Integrate the ball position over the clamped delta (max 50 ms)
2. Bounce off the side and top walls
3. Bounce off the paddle; the hit offset steers the ball
4. Hit at most one brick: decrement its hit points, remove it at zero
5. Lose a life when the ball drops below the bottom edge

Clearing every brick ends the game with a bonus.
"""

from __future__ import annotations
from enum import Enum

from ...engine_core.effect import Effect
from ...engine_core.reducer import Handler, Reducer, Transition, unchanged
from .actions import BreakoutAction, BreakoutActionType
from .state import (
    BALL_RADIUS,
    PADDLE_HEIGHT,
    PADDLE_MAX_X,
    PADDLE_MIN_X,
    PADDLE_WIDTH,
    PADDLE_Y,
    BreakoutState,
    brick_wall,
)

BreakoutTransition = Transition[BreakoutState, BreakoutAction]

MAX_DELTA = 0.05
LAUNCH_VX = 0.35
LAUNCH_VY = 0.45
MAX_VX = 0.75
PADDLE_STEER = 0.25
BRICK_SCORE = 50
CLEAR_BONUS = 500


class BreakoutReducer(Reducer[BreakoutState, BreakoutAction]):
    """Reducer for Breakout. The paddle also moves while paused."""

    UNGATED = frozenset({BreakoutActionType.MOVE_PADDLE.value})

    def _handlers(self) -> dict[Enum, Handler]:
        return {
            BreakoutActionType.START: self._handle_start,
            BreakoutActionType.PAUSE: self._handle_pause,
            BreakoutActionType.RESUME: self._handle_resume,
            BreakoutActionType.RESET: self._handle_reset,
            BreakoutActionType.TICK: self._handle_tick,
            BreakoutActionType.MOVE_PADDLE: self._handle_move_paddle,
            BreakoutActionType.LAUNCH: self._handle_launch,
        }

    def _handle_start(self, state: BreakoutState, action: BreakoutAction) -> BreakoutTransition:
        """Start a new wall, or continue the current one."""
        if state.is_game_over or not state.bricks:
            s = BreakoutState(bricks=brick_wall())
            park_ball(s)
        else:
            s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_pause(self, state: BreakoutState, action: BreakoutAction) -> BreakoutTransition:
        if not state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = False
        return s, Effect.none()

    def _handle_resume(self, state: BreakoutState, action: BreakoutAction) -> BreakoutTransition:
        if state.is_game_over or state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_reset(self, state: BreakoutState, action: BreakoutAction) -> BreakoutTransition:
        return BreakoutState(), Effect.none()

    def _handle_move_paddle(self, state: BreakoutState, action: BreakoutAction) -> BreakoutTransition:
        s = state.clone()
        s.paddle_x = min(max(action.x, PADDLE_MIN_X), PADDLE_MAX_X)
        if not s.is_ball_launched:
            park_ball(s)
        return s, Effect.none()

    def _handle_launch(self, state: BreakoutState, action: BreakoutAction) -> BreakoutTransition:
        if state.is_ball_launched:
            return unchanged(state)
        s = state.clone()
        s.is_ball_launched = True
        s.ball.vx = s.ball.vx or LAUNCH_VX
        s.ball.vy = -abs(s.ball.vy or LAUNCH_VY)
        return s, Effect.none()

    def _handle_tick(self, state: BreakoutState, action: BreakoutAction) -> BreakoutTransition:
        s = state.clone()
        if not s.bricks:
            _win(s)
            return s, Effect.none()

        if not s.is_ball_launched:
            park_ball(s)
            return s, Effect.none()

        step_ball(s, action.delta_time)
        _bounce_walls(s)
        _bounce_paddle(s)
        _hit_brick(s)
        _check_bottom_out(s)

        if not s.bricks and not s.is_game_over:
            _win(s)
        return s, Effect.none()


# ============================================================================
# Physics (operate on a clone)
# ============================================================================

def park_ball(state: BreakoutState) -> None:
    """Rest the ball on top of the paddle, aimed upward."""
    state.ball.x = state.paddle_x
    state.ball.y = PADDLE_Y - PADDLE_HEIGHT * 0.75
    state.ball.vy = -abs(state.ball.vy or LAUNCH_VY)


def step_ball(state: BreakoutState, delta_time: float) -> None:
    dt = min(max(delta_time, 0.0), MAX_DELTA)
    state.ball.x += state.ball.vx * dt
    state.ball.y += state.ball.vy * dt


def _bounce_walls(state: BreakoutState) -> None:
    ball = state.ball
    if ball.x - BALL_RADIUS <= 0:
        ball.x = BALL_RADIUS
        ball.vx = abs(ball.vx)
    if ball.x + BALL_RADIUS >= 1:
        ball.x = 1 - BALL_RADIUS
        ball.vx = -abs(ball.vx)
    if ball.y - BALL_RADIUS <= 0:
        ball.y = BALL_RADIUS
        ball.vy = abs(ball.vy)


def _bounce_paddle(state: BreakoutState) -> None:
    ball = state.ball
    if ball.vy <= 0:
        return

    half_width = PADDLE_WIDTH / 2
    left = state.paddle_x - half_width
    right = state.paddle_x + half_width
    top = PADDLE_Y - PADDLE_HEIGHT / 2

    hits_x = left - BALL_RADIUS <= ball.x <= right + BALL_RADIUS
    hits_y = ball.y + BALL_RADIUS >= top and ball.y <= PADDLE_Y + PADDLE_HEIGHT
    if not (hits_x and hits_y):
        return

    # -1 at the left edge, +1 at the right edge
    offset = (ball.x - state.paddle_x) / half_width
    ball.x = min(max(ball.x, left + BALL_RADIUS), right - BALL_RADIUS)
    ball.y = top - BALL_RADIUS
    ball.vy = -abs(ball.vy)
    ball.vx = min(max(ball.vx + offset * PADDLE_STEER, -MAX_VX), MAX_VX)


def _hit_brick(state: BreakoutState) -> None:
    ball = state.ball
    for index, brick in enumerate(state.bricks):
        x, y, width, height = brick.bounds
        center_x = x + width / 2
        center_y = y + height / 2
        if abs(ball.x - center_x) > width / 2 + BALL_RADIUS:
            continue
        if abs(ball.y - center_y) > height / 2 + BALL_RADIUS:
            continue

        brick.hit_points -= 1
        if brick.hit_points <= 0:
            del state.bricks[index]
            state.score += BRICK_SCORE
        ball.vy = -ball.vy
        return


def _check_bottom_out(state: BreakoutState) -> None:
    if state.ball.y - BALL_RADIUS <= 1:
        return

    state.lives -= 1
    state.is_ball_launched = False
    if state.lives <= 0:
        state.end_game()
        return

    state.ball.vx = LAUNCH_VX if state.ball.vx >= 0 else -LAUNCH_VX
    state.ball.vy = -LAUNCH_VY
    park_ball(state)


def _win(state: BreakoutState) -> None:
    state.end_game()
    state.score += CLEAR_BONUS
