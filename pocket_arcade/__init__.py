"""
Pocket Arcade - Casual games engine

A deterministic, action-driven engine for a collection of casual games.
Every game is a pure reducer over its own state and provides:
- Seeded, reproducible sessions
- Real-time ticking for action games
- Delayed follow-ups (AI turns, card hides, reaction stimuli)
- In-memory high scores per game
"""

__version__ = "0.1.0"
