"""
Heuristic Evaluator - Scores cards for the Card Duel AI.

The evaluator assigns each card a "value density": how much it is worth
per mana spent, given the current public board.

- Minions: (attack + health + keyword bonus) / cost
- Damage spells: amount / cost, or a flat lethal score when the spell
  alone can finish the opposing hero
- Heals: amount / cost, doubled when the caster is low
- Area damage: (minions it would kill * amount) / cost
- Card draw and buffs: magnitude / cost

Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..games.card_duel.cards import DuelCard, SpellKind
from ..games.card_duel.state import TurnOwner

if TYPE_CHECKING:
    from ..games.card_duel.state import CardDuelState


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    keyword_bonus: float = 1.5  # Per keyword on a minion
    lethal_score: float = 1000.0  # Damage spell that kills the opposing hero
    heal_urgency: float = 2.0  # Heal multiplier when at or below the threshold
    heal_urgency_threshold: int = 10
    draw_value: float = 2.0  # Per card drawn


class HeuristicEvaluator:
    """Ranks cards by value density from one side's point of view."""

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def value_density(self, card: DuelCard, state: CardDuelState, side: TurnOwner) -> float:
        if card.cost <= 0:
            return 0.0

        if card.is_minion:
            stats = card.attack + card.health
            bonus = len(card.keywords) * self.weights.keyword_bonus
            return (stats + bonus) / card.cost

        effect = card.spell_effect
        if effect is None:
            return 0.0

        if effect.kind == SpellKind.DAMAGE_TARGET:
            if effect.amount >= state.hp(side.opponent):
                return self.weights.lethal_score
            return effect.amount / card.cost

        if effect.kind == SpellKind.HEAL_TARGET:
            urgency = 1.0
            if state.hp(side) <= self.weights.heal_urgency_threshold:
                urgency = self.weights.heal_urgency
            return effect.amount * urgency / card.cost

        if effect.kind == SpellKind.AOE_ENEMY_MINIONS:
            kills = sum(
                1 for m in state.board(side.opponent) if m.current_health <= effect.amount
            )
            return kills * effect.amount / card.cost

        if effect.kind == SpellKind.DRAW_CARDS:
            return effect.amount * self.weights.draw_value / card.cost

        if effect.kind == SpellKind.BUFF_MINION:
            return (effect.attack_bonus + effect.health_bonus) / card.cost

        return 0.0
