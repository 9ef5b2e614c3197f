"""
Reaction Tap Reducer.

Round flow:
    READY --(random delay)--> STIMULUS --tap--> RESULT --next_round--> READY
    READY --tap--> TOO_EARLY (penalty recorded) --next_round--> READY

After the last round next_round moves to FINISHED and computes the score.
Each scheduled show_stimulus carries the state's stimulus token, and a
new schedule (next round, resume) bumps it, so a delay left over from an
earlier round or from before a pause is dropped.
"""

from __future__ import annotations
import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum

from ...config import PacingSettings, load_pacing
from ...engine_core.effect import Effect, EffectKind
from ...engine_core.reducer import Handler, Reducer, Transition, unchanged
from .actions import ReactionTapAction, ReactionTapActionType
from .state import (
    EARLY_TAP_PENALTY,
    ReactionPhase,
    ReactionTapState,
    final_score,
)

ReactionTransition = Transition[ReactionTapState, ReactionTapAction]


@dataclass
class ReactionTapReducer(Reducer[ReactionTapState, ReactionTapAction]):
    """Reducer for Reaction Tap."""
    pacing: PacingSettings = field(default_factory=load_pacing)

    def _handlers(self) -> dict[Enum, Handler]:
        return {
            ReactionTapActionType.START: self._handle_start,
            ReactionTapActionType.PAUSE: self._handle_pause,
            ReactionTapActionType.RESUME: self._handle_resume,
            ReactionTapActionType.RESET: self._handle_reset,
            ReactionTapActionType.SHOW_STIMULUS: self._handle_show_stimulus,
            ReactionTapActionType.TAP: self._handle_tap,
            ReactionTapActionType.NEXT_ROUND: self._handle_next_round,
        }

    def _handle_start(self, state: ReactionTapState, action: ReactionTapAction) -> ReactionTransition:
        s = state.fresh()
        s.is_running = True
        s.phase = ReactionPhase.READY
        return s, self._schedule_stimulus(s)

    def _handle_pause(self, state: ReactionTapState, action: ReactionTapAction) -> ReactionTransition:
        if not state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = False
        return s, Effect.none()

    def _handle_resume(self, state: ReactionTapState, action: ReactionTapAction) -> ReactionTransition:
        """Resume; a stimulus dropped while paused is rescheduled."""
        if state.is_game_over or state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = True
        if s.phase == ReactionPhase.WAITING:
            s.phase = ReactionPhase.READY
        if s.phase == ReactionPhase.READY:
            return s, self._schedule_stimulus(s)
        return s, Effect.none()

    def _handle_reset(self, state: ReactionTapState, action: ReactionTapAction) -> ReactionTransition:
        return state.fresh(), Effect.none()

    def _handle_show_stimulus(self, state: ReactionTapState, action: ReactionTapAction) -> ReactionTransition:
        if state.phase != ReactionPhase.READY:
            return unchanged(state)
        if action.token is not None and action.token != state.stimulus_token:
            return unchanged(state)
        s = state.clone()
        s.phase = ReactionPhase.STIMULUS
        s.stimulus_time = action.at
        return s, Effect.none()

    def _handle_tap(self, state: ReactionTapState, action: ReactionTapAction) -> ReactionTransition:
        if state.phase == ReactionPhase.READY:
            s = state.clone()
            s.reaction_times.append(EARLY_TAP_PENALTY)
            s.last_reaction = EARLY_TAP_PENALTY
            s.phase = ReactionPhase.TOO_EARLY
            s.stimulus_time = None
            return s, Effect.none()

        if state.phase == ReactionPhase.STIMULUS and state.stimulus_time is not None:
            s = state.clone()
            reaction = max(0.0, action.at - state.stimulus_time)
            s.reaction_times.append(reaction)
            s.last_reaction = reaction
            s.phase = ReactionPhase.RESULT
            s.stimulus_time = None
            return s, Effect.none()

        return unchanged(state)

    def _handle_next_round(self, state: ReactionTapState, action: ReactionTapAction) -> ReactionTransition:
        if state.phase not in (ReactionPhase.TOO_EARLY, ReactionPhase.RESULT):
            return unchanged(state)

        s = state.clone()
        if s.current_round >= s.total_rounds:
            s.phase = ReactionPhase.FINISHED
            s.score = final_score(s.reaction_times)
            s.end_game()
            return s, Effect.none()

        s.current_round += 1
        s.phase = ReactionPhase.READY
        s.stimulus_time = None
        s.last_reaction = None
        return s, self._schedule_stimulus(s)

    def _schedule_stimulus(self, state: ReactionTapState) -> Effect[ReactionTapAction]:
        """Draw the stimulus delay from the state RNG (call on a clone)."""
        state.stimulus_token += 1
        token = state.stimulus_token
        delay = state.rng.uniform(self.pacing.stimulus_delay_min, self.pacing.stimulus_delay_max)

        async def work() -> ReactionTapAction:
            if delay > 0:
                await asyncio.sleep(delay)
            return ReactionTapAction.show_stimulus(at=time.monotonic(), token=token)

        return Effect(kind=EffectKind.RUN, work=work, delay=delay)
