"""
Session Module - Manages in-memory game sessions.

A session represents one play-through of a game:
- Created when a client starts a game
- Holds the game's StateStore and, for real-time games, its tick loop
- Records the score each time the game ends
- Destroyed when the client ends it

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .game_loop import GameLoop, TickConfiguration
from .manager import Session, SessionManager, SessionNotFoundError

__all__ = [
    "GameLoop",
    "TickConfiguration",
    "Session",
    "SessionManager",
    "SessionNotFoundError",
]
