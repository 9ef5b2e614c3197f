"""
Engine Core - Deterministic state machines and effect scheduling.

The engine is the runtime that:
1. Holds a game's state in a StateStore
2. Applies actions via the game's Reducer
3. Runs the Effects a reducer returns, feeding follow-up actions back in
4. Draws all randomness from a SeededRNG stored in the state
"""

from .rng import SeededRNG
from .state import Direction, GameState, GridPosition
from .action import Action, ActionParseError, SessionControls, parse_action_type, require_param
from .effect import Effect, EffectKind
from .reducer import Reducer, Transition, unchanged
from .store import StateStore

__all__ = [
    "SeededRNG",
    "Direction",
    "GameState",
    "GridPosition",
    "Action",
    "ActionParseError",
    "SessionControls",
    "parse_action_type",
    "require_param",
    "Effect",
    "EffectKind",
    "Reducer",
    "Transition",
    "unchanged",
    "StateStore",
]
