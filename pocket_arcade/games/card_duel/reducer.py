"""
Card Duel Reducer - Turn-based combat state machine.

Phases:
    PLAYER_MAIN --end_turn--> AI_PLAY --ai_play_phase--> AI_ATTACK
        --ai_attack_phase--> start_player_turn --> PLAYER_MAIN

The AI half of a round is driven entirely by effects: end_turn schedules
ai_play_phase after a short pause, which schedules ai_attack_phase, which
schedules start_player_turn. There is no separate scheduler.

Rejections (wrong phase, not enough mana, full board, Taunt violations)
are no-op transitions; rule violations leave a line in the battle log.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ...config import PacingSettings, load_pacing
from ...engine_core.effect import Effect
from ...engine_core.reducer import Handler, Reducer, Transition, unchanged
from ...engine_core.rng import SeededRNG
from .actions import CardDuelAction, CardDuelActionType
from .cards import DuelCard, SpellEffect, SpellKind, Target, TargetKind, make_deck
from .state import (
    AI_CARD_ID_BASE,
    DECK_SIZE,
    DRAW_PER_TURN,
    INITIAL_HAND_SIZE,
    MAX_BOARD_SIZE,
    MAX_HAND_SIZE,
    MAX_HP,
    MAX_MANA,
    PLAYER_CARD_ID_BASE,
    BoardMinion,
    CardDuelState,
    TurnOwner,
    TurnPhase,
)

if TYPE_CHECKING:
    from ...bots import DuelPolicy

PLAYER = TurnOwner.PLAYER
AI = TurnOwner.AI

DuelTransition = Transition[CardDuelState, CardDuelAction]


def _default_bot() -> DuelPolicy:
    # bots imports the card modules of this package
    from ...bots import HeuristicDuelBot
    return HeuristicDuelBot()


@dataclass
class CardDuelReducer(Reducer[CardDuelState, CardDuelAction]):
    """
    Reducer for Card Duel.

    ``bot`` decides the AI side's plays and attacks; ``pacing`` sets the
    artificial delays between AI phases.
    """
    pacing: PacingSettings = field(default_factory=load_pacing)
    bot: DuelPolicy = field(default_factory=_default_bot)

    def _handlers(self) -> dict[Enum, Handler]:
        return {
            CardDuelActionType.START: self._handle_start,
            CardDuelActionType.PAUSE: self._handle_pause,
            CardDuelActionType.RESUME: self._handle_resume,
            CardDuelActionType.RESET: self._handle_reset,
            CardDuelActionType.PLAY_CARD: self._handle_play_card,
            CardDuelActionType.MINION_ATTACK: self._handle_minion_attack,
            CardDuelActionType.END_TURN: self._handle_end_turn,
            CardDuelActionType.AI_PLAY_PHASE: self._handle_ai_play_phase,
            CardDuelActionType.AI_ATTACK_PHASE: self._handle_ai_attack_phase,
            CardDuelActionType.START_PLAYER_TURN: self._handle_start_player_turn,
        }

    # =========================================================================
    # Session lifecycle
    # =========================================================================

    def _handle_start(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        """Start a fresh duel seeded from the current RNG stream."""
        seed = SeededRNG(state.rng.state).next_uint64()
        return setup_new_game(seed), Effect.none()

    def _handle_pause(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        if state.is_game_over or not state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = False
        s.log("Paused.")
        return s, Effect.none()

    def _handle_resume(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        """Resume; a duel paused mid AI turn picks the pending phase back up."""
        if state.is_game_over or state.is_running:
            return unchanged(state)
        s = state.clone()
        s.is_running = True
        s.log("Resumed.")
        if s.turn_phase == TurnPhase.AI_PLAY:
            return s, Effect.after(0, CardDuelAction.ai_play_phase())
        if s.turn_phase == TurnPhase.AI_ATTACK:
            return s, Effect.after(0, CardDuelAction.ai_attack_phase())
        return s, Effect.none()

    def _handle_reset(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        return CardDuelState.create(seed=state.seed), Effect.none()

    # =========================================================================
    # Player actions
    # =========================================================================

    def _handle_play_card(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        """
        Play a hand card.

        A targeted spell sent without a target is refused before its card or
        mana is spent.
        """
        if state.turn_phase != TurnPhase.PLAYER_MAIN:
            return unchanged(state)
        index = action.hand_index
        if index is None or not 0 <= index < len(state.player_hand):
            return unchanged(state)

        card = state.player_hand[index]
        s = state.clone()

        if s.player_mana < card.cost:
            s.log(f"Insufficient mana to play {card.name_key}.")
            return s, Effect.none()
        if card.is_minion and len(s.player_board) >= MAX_BOARD_SIZE:
            s.log("Board is full.")
            return s, Effect.none()
        if card.spell_effect and card.spell_effect.needs_target and action.target is None:
            s.log(f"{card.name_key} needs a target.")
            return s, Effect.none()

        del s.player_hand[index]
        s.spend_mana(PLAYER, card.cost)
        _play(s, PLAYER, card, action.target)
        return _settle(s)

    def _handle_minion_attack(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        target = action.target
        if state.turn_phase != TurnPhase.PLAYER_MAIN or target is None:
            return unchanged(state)
        if target.kind == TargetKind.FRIENDLY_HERO:
            return unchanged(state)

        attacker_idx = state.find_minion(PLAYER, action.attacker_id)
        if attacker_idx is None:
            return unchanged(state)
        attacker = state.player_board[attacker_idx]
        if not attacker.can_attack or attacker.current_attack <= 0:
            return unchanged(state)

        taunt_ids = {m.minion_id for m in state.taunters(AI)}
        if taunt_ids and not (target.is_minion and target.minion_id in taunt_ids):
            s = state.clone()
            s.log("Must attack a Taunt minion first.")
            return s, Effect.none()

        if attacker.is_rush_restricted and target.kind == TargetKind.ENEMY_HERO:
            s = state.clone()
            s.log("Rush minions cannot attack the hero on summon turn.")
            return s, Effect.none()

        if target.is_minion and state.find_minion(AI, target.minion_id) is None:
            return unchanged(state)

        s = state.clone()
        _attack(s, PLAYER, attacker_idx, target)
        return _settle(s)

    # =========================================================================
    # Turn management
    # =========================================================================

    def _handle_end_turn(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        if state.turn_phase != TurnPhase.PLAYER_MAIN:
            return unchanged(state)

        s = state.clone()
        for minion in s.player_board:
            minion.can_attack = False
            minion.summoned_this_turn = False

        s.turn_owner = AI
        s.turn_phase = TurnPhase.AI_PLAY
        s.ai_max_mana = min(s.ai_max_mana + 1, MAX_MANA)
        s.ai_mana = s.ai_max_mana
        for _ in range(DRAW_PER_TURN):
            draw_card(s, AI)
        _refresh_board(s, AI)
        s.log(f"AI turn begins (mana {s.ai_mana}/{s.ai_max_mana}).")
        return s, Effect.after(self.pacing.ai_play_delay, CardDuelAction.ai_play_phase())

    def _handle_ai_play_phase(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        if state.turn_phase != TurnPhase.AI_PLAY:
            return unchanged(state)

        plans = self.bot.play_plans(state)
        s = state.clone()
        for plan in plans:
            index = next(
                (i for i, c in enumerate(s.ai_hand) if c.card_id == plan.card_id),
                None,
            )
            if index is None:
                continue
            card = s.ai_hand[index]
            if s.ai_mana < card.cost:
                continue
            if card.is_minion and len(s.ai_board) >= MAX_BOARD_SIZE:
                continue

            del s.ai_hand[index]
            s.spend_mana(AI, card.cost)
            _play(s, AI, card, plan.target)

        _remove_dead(s)
        if _check_game_over(s):
            return s, Effect.none()

        _update_score(s)
        s.turn_phase = TurnPhase.AI_ATTACK
        return s, Effect.after(self.pacing.ai_attack_delay, CardDuelAction.ai_attack_phase())

    def _handle_ai_attack_phase(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        if state.turn_phase != TurnPhase.AI_ATTACK:
            return unchanged(state)

        plans = self.bot.attack_plans(state)
        s = state.clone()
        for plan in plans:
            attacker_idx = s.find_minion(AI, plan.attacker_id)
            if attacker_idx is None or not s.ai_board[attacker_idx].can_attack:
                continue
            if plan.target.is_minion and s.find_minion(PLAYER, plan.target.minion_id) is None:
                continue

            _attack(s, AI, attacker_idx, plan.target)
            _remove_dead(s)
            if _check_game_over(s):
                return s, Effect.none()

        _update_score(s)
        return s, Effect.after(0, CardDuelAction.start_player_turn())

    def _handle_start_player_turn(self, state: CardDuelState, action: CardDuelAction) -> DuelTransition:
        if state.turn_phase != TurnPhase.AI_ATTACK:
            return unchanged(state)

        s = state.clone()
        s.turn_number += 1
        s.player_max_mana = min(s.player_max_mana + 1, MAX_MANA)
        s.player_mana = s.player_max_mana
        for _ in range(DRAW_PER_TURN):
            draw_card(s, PLAYER)
        _refresh_board(s, PLAYER)
        s.turn_owner = PLAYER
        s.turn_phase = TurnPhase.PLAYER_MAIN
        s.log(f"Your turn (mana {s.player_mana}/{s.player_max_mana}).")
        _update_score(s)
        return s, Effect.none()


# ============================================================================
# Setup
# ============================================================================

def setup_new_game(seed: int) -> CardDuelState:
    """
    Deal a new duel.

    Player deck first, then AI deck, then alternating opening draws. The
    player opens with 1/1 mana and does not draw on turn 1.
    """
    state = CardDuelState.create(seed=seed)
    state.player_deck = make_deck(DECK_SIZE, PLAYER_CARD_ID_BASE, state.rng)
    state.ai_deck = make_deck(DECK_SIZE, AI_CARD_ID_BASE, state.rng)

    for _ in range(INITIAL_HAND_SIZE):
        draw_card(state, PLAYER)
        draw_card(state, AI)

    state.player_max_mana = 1
    state.player_mana = 1
    state.ai_max_mana = 0
    state.ai_mana = 0
    state.turn_number = 1
    state.turn_owner = PLAYER
    state.turn_phase = TurnPhase.PLAYER_MAIN
    state.is_running = True
    state.is_game_over = False
    state.log("Duel started. Your turn (mana 1/1).")
    _update_score(state)
    return state


# ============================================================================
# Cards and combat (operate on a clone)
# ============================================================================

def draw_card(state: CardDuelState, side: TurnOwner) -> None:
    """Draw from the front of the deck; a full hand burns the card."""
    deck = state.deck(side)
    if not deck:
        return
    card = deck.pop(0)
    hand = state.hand(side)
    if len(hand) >= MAX_HAND_SIZE:
        if side == PLAYER:
            state.log(f"Player burned {card.name_key} (hand full).")
        return
    hand.append(card)


def _play(state: CardDuelState, side: TurnOwner, card: DuelCard, target: Target | None) -> None:
    actor = "Player" if side == PLAYER else "AI"
    if card.is_minion:
        state.board(side).append(BoardMinion.summon(card))
        state.log(f"{actor} summoned {card.name_key} ({card.attack}/{card.health}).")
    elif card.spell_effect is not None:
        resolve_spell(state, card.spell_effect, side, target)


def _attack(state: CardDuelState, side: TurnOwner, attacker_idx: int, target: Target) -> None:
    """Resolve one attack: hero damage or a mutual trade."""
    board = state.board(side)
    attacker = board[attacker_idx]
    attacker.can_attack = False
    prefix = "" if side == PLAYER else "AI "

    if target.is_minion:
        enemy_board = state.board(side.opponent)
        defender_idx = state.find_minion(side.opponent, target.minion_id)
        if defender_idx is None:
            return
        defender = enemy_board[defender_idx]
        defender_attack = defender.current_attack
        deal_damage_to_minion(defender, attacker.current_attack)
        deal_damage_to_minion(attacker, defender_attack)
        state.log(f"{prefix}{attacker.card.name_key} traded with {defender.card.name_key}.")
        return

    dealt = deal_damage_to_hero(state, side.opponent, attacker.current_attack)
    hero = "enemy hero" if side == PLAYER else "your hero"
    state.log(f"{prefix}{attacker.card.name_key} attacked {hero} for {dealt}.")


def resolve_spell(
    state: CardDuelState,
    effect: SpellEffect,
    caster: TurnOwner,
    target: Target | None,
) -> None:
    """
    Apply a spell's effect for ``caster``.

    Minion targets for damage must be on the opposing board; heals and buffs
    only reach the caster's own minions. Illegal targets do nothing.
    """
    actor = "Player" if caster == PLAYER else "AI"
    enemy = caster.opponent

    if effect.kind == SpellKind.DAMAGE_TARGET:
        if target is None:
            return
        if target.kind == TargetKind.ENEMY_HERO:
            dealt = deal_damage_to_hero(state, enemy, effect.amount)
            state.log(f"{actor}'s spell dealt {dealt} to enemy hero.")
        elif target.kind == TargetKind.FRIENDLY_HERO:
            dealt = deal_damage_to_hero(state, caster, effect.amount)
            state.log(f"{actor}'s spell dealt {dealt} to own hero.")
        else:
            idx = state.find_minion(enemy, target.minion_id)
            if idx is not None:
                deal_damage_to_minion(state.board(enemy)[idx], effect.amount)
                state.log(f"{actor}'s spell dealt {effect.amount} to enemy minion.")

    elif effect.kind == SpellKind.HEAL_TARGET:
        if target is None or target.kind == TargetKind.ENEMY_HERO:
            return
        if target.kind == TargetKind.FRIENDLY_HERO:
            healed = heal_hero(state, caster, effect.amount)
            state.log(f"{actor} healed hero for {healed}.")
        else:
            idx = state.find_minion(caster, target.minion_id)
            if idx is not None:
                minion = state.board(caster)[idx]
                healed = max(0, min(effect.amount, minion.max_health - minion.current_health))
                minion.current_health += healed
                state.log(f"{actor} healed minion for {healed}.")

    elif effect.kind == SpellKind.AOE_ENEMY_MINIONS:
        for minion in state.board(enemy):
            deal_damage_to_minion(minion, effect.amount)
        state.log(f"{actor}'s AOE dealt {effect.amount} to all enemy minions.")

    elif effect.kind == SpellKind.DRAW_CARDS:
        for _ in range(effect.amount):
            draw_card(state, caster)
        state.log(f"{actor} drew {effect.amount} card(s).")

    elif effect.kind == SpellKind.BUFF_MINION:
        if target is None or not target.is_minion:
            return
        idx = state.find_minion(caster, target.minion_id)
        if idx is None:
            return
        # max_health stays put: later heals cap at the printed health
        minion = state.board(caster)[idx]
        minion.current_attack += effect.attack_bonus
        minion.current_health += effect.health_bonus
        state.log(f"{actor} buffed minion +{effect.attack_bonus}/+{effect.health_bonus}.")


def deal_damage_to_hero(state: CardDuelState, side: TurnOwner, amount: int) -> int:
    actual = max(0, amount)
    state.set_hp(side, max(0, state.hp(side) - actual))
    return actual


def deal_damage_to_minion(minion: BoardMinion, amount: int) -> None:
    """Divine Shield absorbs one whole hit and is consumed."""
    if amount <= 0:
        return
    if minion.has_divine_shield:
        minion.has_divine_shield = False
        return
    minion.current_health -= amount


def heal_hero(state: CardDuelState, side: TurnOwner, amount: int) -> int:
    healed = max(0, min(amount, MAX_HP - state.hp(side)))
    state.set_hp(side, state.hp(side) + healed)
    return healed


# ============================================================================
# Bookkeeping
# ============================================================================

def _refresh_board(state: CardDuelState, side: TurnOwner) -> None:
    for minion in state.board(side):
        minion.can_attack = True
        minion.summoned_this_turn = False


def _remove_dead(state: CardDuelState) -> None:
    state.player_board[:] = [m for m in state.player_board if not m.is_dead]
    state.ai_board[:] = [m for m in state.ai_board if not m.is_dead]


def _check_game_over(state: CardDuelState) -> bool:
    if state.player_hp > 0 and state.ai_hp > 0:
        return False
    state.end_game()
    if state.ai_hp <= 0 < state.player_hp:
        state.log("You win!")
    elif state.player_hp <= 0 < state.ai_hp:
        state.log("AI wins.")
    else:
        state.log("Draw.")
    _update_score(state)
    return True


def _update_score(state: CardDuelState) -> None:
    win_bonus = 100 if state.ai_hp <= 0 < state.player_hp else 0
    state.score = max(0, (MAX_HP - state.ai_hp) * 10) + state.player_hp * 3 + win_bonus


def _settle(state: CardDuelState) -> DuelTransition:
    """Purge the dead, check for a winner, refresh the score."""
    _remove_dead(state)
    if not _check_game_over(state):
        _update_score(state)
    return state, Effect.none()
