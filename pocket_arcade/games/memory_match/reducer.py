"""
Memory Match Reducer.

The second flip of a move resolves it on the spot: a pair is marked
matched (+100), a mismatch stays face up and a delayed hide_unmatched is
scheduled to turn it back over.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from ...config import PacingSettings, load_pacing
from ...engine_core.effect import Effect
from ...engine_core.reducer import Handler, Reducer, Transition, unchanged
from .actions import MemoryMatchAction, MemoryMatchActionType
from .state import MemoryMatchState, make_deck

MemoryTransition = Transition[MemoryMatchState, MemoryMatchAction]

MATCH_SCORE = 100
MAX_FACE_UP = 2


@dataclass
class MemoryMatchReducer(Reducer[MemoryMatchState, MemoryMatchAction]):
    """Reducer for Memory Match. Hiding a mismatch is not blocked by pause."""
    pacing: PacingSettings = field(default_factory=load_pacing)

    UNGATED = frozenset({
        MemoryMatchActionType.CHECK_MATCH.value,
        MemoryMatchActionType.HIDE_UNMATCHED.value,
    })

    def _handlers(self) -> dict[Enum, Handler]:
        return {
            MemoryMatchActionType.START: self._handle_start,
            MemoryMatchActionType.PAUSE: self._handle_pause,
            MemoryMatchActionType.RESUME: self._handle_resume,
            MemoryMatchActionType.RESET: self._handle_reset,
            MemoryMatchActionType.FLIP_CARD: self._handle_flip_card,
            MemoryMatchActionType.CHECK_MATCH: self._handle_check_match,
            MemoryMatchActionType.HIDE_UNMATCHED: self._handle_hide_unmatched,
        }

    def _handle_start(self, state: MemoryMatchState, action: MemoryMatchAction) -> MemoryTransition:
        """Deal a new table unless a game is in progress."""
        if not state.cards or state.is_game_over:
            s = state.fresh()
            s.cards = make_deck(s.pair_count, s.rng)
        else:
            s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_pause(self, state: MemoryMatchState, action: MemoryMatchAction) -> MemoryTransition:
        if not state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = False
        return s, Effect.none()

    def _handle_resume(self, state: MemoryMatchState, action: MemoryMatchAction) -> MemoryTransition:
        if state.is_game_over or state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = True
        return s, Effect.none()

    def _handle_reset(self, state: MemoryMatchState, action: MemoryMatchAction) -> MemoryTransition:
        return state.fresh(), Effect.none()

    def _handle_flip_card(self, state: MemoryMatchState, action: MemoryMatchAction) -> MemoryTransition:
        index = action.index
        if not 0 <= index < len(state.cards):
            return unchanged(state)
        card = state.cards[index]
        if card.is_matched or card.is_face_up or len(state.flipped_indices) >= MAX_FACE_UP:
            return unchanged(state)

        s = state.clone()
        s.cards[index].is_face_up = True
        s.flipped_indices.append(index)
        if len(s.flipped_indices) < MAX_FACE_UP:
            return s, Effect.none()

        s.moves += 1
        first, second = (s.cards[i] for i in s.flipped_indices)
        if first.symbol_id != second.symbol_id:
            return s, Effect.after(
                self.pacing.memory_hide_delay,
                MemoryMatchAction.hide_unmatched(),
            )

        first.is_matched = True
        second.is_matched = True
        s.matched_pairs += 1
        s.score += MATCH_SCORE
        s.flipped_indices.clear()
        if s.matched_pairs == s.pair_count:
            s.end_game()
        return s, Effect.none()

    def _handle_check_match(self, state: MemoryMatchState, action: MemoryMatchAction) -> MemoryTransition:
        # Resolved by the second flip
        return unchanged(state)

    def _handle_hide_unmatched(self, state: MemoryMatchState, action: MemoryMatchAction) -> MemoryTransition:
        if len(state.flipped_indices) != MAX_FACE_UP:
            return unchanged(state)
        s = state.clone()
        for index in s.flipped_indices:
            if not s.cards[index].is_matched:
                s.cards[index].is_face_up = False
        s.flipped_indices.clear()
        return s, Effect.none()
