"""
Duel Bot - Board-aware heuristic AI for Card Duel.

Play phase:
1. Rank affordable hand cards by value density (see evaluator)
2. Walk them in descending order, greedily spending simulated mana and
   board slots; no lookahead or backtracking
3. Skip cards that no longer fit or need a target that does not exist

Attack phase, per attack-eligible minion:
1. Enemy Taunt present: hit a Taunt minion, preferring one we kill
2. Otherwise take a trade that kills the defender and survives
3. Otherwise go face, unless Rush-restricted this turn
4. Rush-restricted: hit any enemy minion, or skip the attack

The bot only reads public state: boards, hero health and its own hand.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from ..games.card_duel.cards import DuelCard, SpellKind, Target
from ..games.card_duel.state import MAX_BOARD_SIZE, BoardMinion, TurnOwner
from .evaluator import EvaluationWeights, HeuristicEvaluator
from .policy import AttackPlan, DuelPolicy, PlayPlan

if TYPE_CHECKING:
    from ..games.card_duel.state import CardDuelState


class HeuristicDuelBot(DuelPolicy):
    """
    Greedy value-density bot.

    Usage:
        bot = HeuristicDuelBot()
        for plan in bot.play_plans(state):
            ...
    """

    def __init__(
        self,
        side: TurnOwner = TurnOwner.AI,
        weights: EvaluationWeights | None = None,
    ):
        self.side = side
        self.evaluator = HeuristicEvaluator(weights)

    # =========================================================================
    # Play phase
    # =========================================================================

    def play_plans(self, state: CardDuelState) -> list[PlayPlan]:
        plans: list[PlayPlan] = []
        mana = state.mana(self.side)
        board_count = len(state.board(self.side))

        ranked = sorted(
            enumerate(state.hand(self.side)),
            key=lambda item: self.evaluator.value_density(item[1], state, self.side),
            reverse=True,
        )

        for hand_index, card in ranked:
            if card.cost > mana:
                continue
            if card.is_minion and board_count >= MAX_BOARD_SIZE:
                continue

            target = self.choose_target(card, state)
            if card.spell_effect and card.spell_effect.needs_target and target is None:
                continue

            plans.append(PlayPlan(hand_index=hand_index, card_id=card.card_id, target=target))
            mana -= card.cost
            if card.is_minion:
                board_count += 1

        return plans

    def choose_target(self, card: DuelCard, state: CardDuelState) -> Target | None:
        """Deterministic target for a spell; None when no target is needed."""
        effect = card.spell_effect
        if effect is None:
            return None

        if effect.kind == SpellKind.DAMAGE_TARGET:
            enemy = _highest_attack(state.board(self.side.opponent))
            return Target.minion(enemy.minion_id) if enemy else Target.enemy_hero()

        if effect.kind == SpellKind.HEAL_TARGET:
            return Target.friendly_hero()

        if effect.kind == SpellKind.BUFF_MINION:
            ally = _highest_attack(state.board(self.side))
            return Target.minion(ally.minion_id) if ally else None

        return None

    # =========================================================================
    # Attack phase
    # =========================================================================

    def attack_plans(self, state: CardDuelState) -> list[AttackPlan]:
        plans: list[AttackPlan] = []
        enemy_board = state.board(self.side.opponent)
        taunters = state.taunters(self.side.opponent)

        for minion in state.board(self.side):
            if not minion.can_attack or minion.current_attack <= 0:
                continue
            target = self._choose_attack_target(minion, taunters, enemy_board)
            if target is not None:
                plans.append(AttackPlan(attacker_id=minion.minion_id, target=target))

        return plans

    def _choose_attack_target(
        self,
        attacker: BoardMinion,
        taunters: list[BoardMinion],
        enemy_board: list[BoardMinion],
    ) -> Target | None:
        if taunters:
            kill = next(
                (t for t in taunters if t.current_health <= attacker.current_attack),
                taunters[0],
            )
            return Target.minion(kill.minion_id)

        trade = next(
            (
                m for m in enemy_board
                if m.current_health <= attacker.current_attack
                and attacker.current_health > m.current_attack
            ),
            None,
        )
        if trade is not None:
            return Target.minion(trade.minion_id)

        if not attacker.is_rush_restricted:
            return Target.enemy_hero()

        if enemy_board:
            return Target.minion(enemy_board[0].minion_id)

        # Rush minion with nothing it may hit: the attack is wasted
        return None


def _highest_attack(board: list[BoardMinion]) -> BoardMinion | None:
    if not board:
        return None
    return max(board, key=lambda m: m.current_attack)


_DEFAULT_BOT = HeuristicDuelBot()


def play_actions(state: CardDuelState) -> list[PlayPlan]:
    """Play plans for the AI side using the default bot."""
    return _DEFAULT_BOT.play_plans(state)


def attack_actions(state: CardDuelState) -> list[AttackPlan]:
    """Attack plans for the AI side using the default bot."""
    return _DEFAULT_BOT.attack_plans(state)
