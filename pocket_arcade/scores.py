"""
High Scores - In-memory score tables, one per game.

Nothing is persisted: a table lives as long as the process that owns it.
"""

from __future__ import annotations
import time
from dataclasses import dataclass, field

DEFAULT_PLAYER = "Player"


@dataclass(frozen=True)
class ScoreEntry:
    score: int
    player_name: str = DEFAULT_PLAYER
    recorded_at: float = field(default_factory=time.time)


class HighScoreStore:
    """
    Score table for a single game.

    Usage:
        store = HighScoreStore("snake")
        if store.record(340):
            print("new high score")
        best = store.top_scores(limit=5)
    """

    def __init__(self, game_id: str):
        self.game_id = game_id
        self._entries: list[ScoreEntry] = []

    def top_scores(self, limit: int = 10) -> list[ScoreEntry]:
        """Best scores first; ties keep recording order."""
        ranked = sorted(self._entries, key=lambda e: e.score, reverse=True)
        return ranked[:max(0, limit)]

    def record(self, score: int, player_name: str = DEFAULT_PLAYER) -> bool:
        """
        Add a score.

        Returns True when it is a new high score: the table was empty or the
        score beats the current best.
        """
        best = max((e.score for e in self._entries), default=None)
        is_high = best is None or score > best
        self._entries.append(ScoreEntry(score=score, player_name=player_name))
        return is_high

    def __len__(self) -> int:
        return len(self._entries)
