"""
Card Duel - A turn-based card battler against a heuristic AI.

Players take turns spending mana to summon minions and cast spells, then
attack with their minions. Reduce the enemy hero to 0 HP to win.
"""

from .cards import CARD_POOL, CardType, DuelCard, Keyword, SpellEffect, SpellKind, Target, TargetKind
from .state import BoardMinion, CardDuelState, TurnOwner, TurnPhase
from .actions import CONTROLS, CardDuelAction, CardDuelActionType, parse_action
from .reducer import CardDuelReducer

__all__ = [
    "CARD_POOL",
    "CardType",
    "DuelCard",
    "Keyword",
    "SpellEffect",
    "SpellKind",
    "Target",
    "TargetKind",
    "BoardMinion",
    "CardDuelState",
    "TurnOwner",
    "TurnPhase",
    "CONTROLS",
    "CardDuelAction",
    "CardDuelActionType",
    "parse_action",
    "CardDuelReducer",
]
