"""
Reaction Tap State.

Timestamps are monotonic clock readings in seconds, carried by the
show_stimulus and tap actions so the reducer never reads a clock.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from ...engine_core.rng import SeededRNG
from ...engine_core.state import GameState

TOTAL_ROUNDS = 5
EARLY_TAP_PENALTY = 1.5
SCORE_CEILING = 1200


class ReactionPhase(Enum):
    WAITING = "waiting"
    READY = "ready"
    STIMULUS = "stimulus"
    TOO_EARLY = "too_early"
    RESULT = "result"
    FINISHED = "finished"


@dataclass
class ReactionTapState(GameState):
    current_round: int = 1
    total_rounds: int = TOTAL_ROUNDS
    reaction_times: list[float] = field(default_factory=list)
    stimulus_time: float | None = None
    phase: ReactionPhase = ReactionPhase.WAITING
    # Reaction time of the round just finished, shown in RESULT
    last_reaction: float | None = None
    # Identifies the one pending show_stimulus; bumped on every schedule
    stimulus_token: int = 0
    rng: SeededRNG = field(default_factory=SeededRNG)

    @classmethod
    def create(cls, seed: int | None = None, total_rounds: int = TOTAL_ROUNDS) -> ReactionTapState:
        if seed is None:
            seed = SeededRNG.system_seed()
        return cls(total_rounds=total_rounds, rng=SeededRNG(seed))

    def fresh(self) -> ReactionTapState:
        return ReactionTapState(
            total_rounds=self.total_rounds,
            stimulus_token=self.stimulus_token,
            rng=SeededRNG(self.rng.state),
        )

    @property
    def average_reaction(self) -> float | None:
        if not self.reaction_times:
            return None
        return sum(self.reaction_times) / len(self.reaction_times)


def final_score(reaction_times: list[float]) -> int:
    """Faster averages score higher; 1.2 s or slower scores 0."""
    if not reaction_times:
        return 0
    average = sum(reaction_times) / len(reaction_times)
    return max(0, SCORE_CEILING - int(average * 1000))
