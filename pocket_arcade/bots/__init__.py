"""
Bots module - Card Duel AI implementations.

Provides:
- DuelPolicy: Interface for bot decision-making
- HeuristicEvaluator: Scores cards by value density
- HeuristicDuelBot: The greedy AI opponent
- PassivePolicy: Never acts (testing / practice)
"""

from .policy import DuelPolicy, PlayPlan, AttackPlan, PassivePolicy
from .evaluator import HeuristicEvaluator, EvaluationWeights
from .duel_bot import HeuristicDuelBot, play_actions, attack_actions

__all__ = [
    "DuelPolicy",
    "PlayPlan",
    "AttackPlan",
    "PassivePolicy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "HeuristicDuelBot",
    "play_actions",
    "attack_actions",
]
