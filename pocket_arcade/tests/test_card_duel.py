"""
Tests for Card Duel.

Tests:
- Setup and determinism
- Playing cards and spells
- Combat keywords (Taunt, Charge, Rush, Divine Shield)
- Turn flow through the AI phases
"""

import asyncio

import pytest

from ..engine_core.store import StateStore
from ..games.card_duel import (
    BoardMinion,
    CardType,
    CardDuelAction,
    CardDuelState,
    DuelCard,
    SpellEffect,
    Target,
    TurnOwner,
    TurnPhase,
)
from ..games.card_duel.reducer import deal_damage_to_minion, draw_card, resolve_spell, setup_new_game
from .conftest import make_card


def summon(state, side, name_key, card_id, ready=True):
    minion = BoardMinion.summon(make_card(name_key, card_id))
    if ready:
        minion.can_attack = True
        minion.summoned_this_turn = False
    state.board(side).append(minion)
    return minion


class TestSetup:
    """Tests for dealing a new duel."""

    def test_opening_state(self):
        state = setup_new_game(seed=7)
        assert len(state.player_hand) == 3
        assert len(state.ai_hand) == 3
        assert len(state.player_deck) == 15
        assert len(state.ai_deck) == 15
        assert (state.player_mana, state.player_max_mana) == (1, 1)
        assert state.turn_number == 1
        assert state.turn_phase == TurnPhase.PLAYER_MAIN
        assert state.turn_owner == TurnOwner.PLAYER
        assert state.is_running

    def test_same_seed_same_deal(self):
        assert setup_new_game(seed=7).player_hand == setup_new_game(seed=7).player_hand

    def test_card_ids_by_side(self):
        state = setup_new_game(seed=7)
        assert all(c.card_id < 10_000 for c in state.player_deck + state.player_hand)
        assert all(c.card_id >= 10_000 for c in state.ai_deck + state.ai_hand)

    def test_start_action_deals(self, duel_reducer):
        state, _ = duel_reducer.reduce(CardDuelState.create(seed=3), CardDuelAction.start())
        assert state.is_running
        assert len(state.player_hand) == 3

    def test_seeded_start_scenario(self, duel_reducer):
        state, effect = duel_reducer.reduce(CardDuelState.create(seed=42), CardDuelAction.start())
        assert (len(state.player_hand), len(state.ai_hand)) == (3, 3)
        assert (len(state.player_deck), len(state.ai_deck)) == (15, 15)
        assert state.turn_phase == TurnPhase.PLAYER_MAIN
        assert (state.player_mana, state.player_max_mana) == (1, 1)
        assert (state.player_hp, state.ai_hp) == (30, 30)
        assert effect.is_none

    def test_burn_on_full_hand(self, duel_state):
        duel_state.player_hand.extend(make_card("card.scout", 900 + i) for i in range(7))
        deck_before = len(duel_state.player_deck)
        draw_card(duel_state, TurnOwner.PLAYER)
        assert len(duel_state.player_hand) == 7
        assert len(duel_state.player_deck) == deck_before - 1
        assert "burned" in duel_state.battle_log[-1]

    def test_battle_log_capped(self, duel_state):
        for i in range(50):
            duel_state.log(f"entry {i}")
        assert len(duel_state.battle_log) == 30
        assert duel_state.battle_log[-1] == "entry 49"


class TestPlayCard:
    """Tests for playing minions and spells."""

    def test_play_minion(self, duel_reducer, duel_state):
        duel_state.player_hand.append(make_card("card.scout", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        assert state.player_hand == []
        assert state.player_mana == 0
        assert state.player_board[0].minion_id == 1
        assert not state.player_board[0].can_attack

    def test_insufficient_mana(self, duel_reducer, duel_state):
        duel_state.player_hand.append(make_card("card.knight", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        assert len(state.player_hand) == 1
        assert state.player_board == []
        assert "Insufficient mana" in state.battle_log[-1]

    def test_full_board(self, duel_reducer, duel_state):
        for i in range(7):
            summon(duel_state, TurnOwner.PLAYER, "card.scout", 100 + i)
        duel_state.player_hand.append(make_card("card.scout", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        assert len(state.player_board) == 7
        assert state.battle_log[-1] == "Board is full."

    def test_targeted_spell_needs_target(self, duel_reducer, duel_state):
        duel_state.player_mana = 4
        duel_state.player_hand.append(make_card("card.fireball", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        assert len(state.player_hand) == 1
        assert state.player_mana == 4

    def test_fireball_face(self, duel_reducer, duel_state):
        duel_state.player_mana = 4
        duel_state.player_hand.append(make_card("card.fireball", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0, Target.enemy_hero()))
        assert state.ai_hp == 24
        assert state.player_mana == 0

    def test_lethal_fireball_wins(self, duel_reducer, duel_state):
        duel_state.player_mana = 4
        duel_state.ai_hp = 5
        duel_state.player_hand.append(make_card("card.fireball", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0, Target.enemy_hero()))
        assert state.is_game_over
        assert state.battle_log[-1] == "You win!"
        assert state.score == 30 * 10 + 30 * 3 + 100

    def test_heal_capped_at_max(self, duel_reducer, duel_state):
        duel_state.player_mana = 3
        duel_state.player_hp = 25
        duel_state.player_hand.append(make_card("card.heal", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0, Target.friendly_hero()))
        assert state.player_hp == 30

    def test_nova_hits_enemy_minions_only(self, duel_reducer, duel_state):
        duel_state.player_mana = 6
        summon(duel_state, TurnOwner.AI, "card.scout", 10_001)
        summon(duel_state, TurnOwner.AI, "card.knight", 10_002)
        summon(duel_state, TurnOwner.PLAYER, "card.scout", 2)
        duel_state.player_hand.append(make_card("card.nova", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        assert [m.minion_id for m in state.ai_board] == [10_002]
        assert state.ai_board[0].current_health == 2
        assert len(state.player_board) == 1

    def test_wisdom_draws(self, duel_reducer, duel_state):
        duel_state.player_mana = 2
        duel_state.player_hand.append(make_card("card.wisdom", 1))
        deck_before = len(duel_state.player_deck)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        assert len(state.player_hand) == 2
        assert len(state.player_deck) == deck_before - 2

    def test_bad_hand_index_is_noop(self, duel_reducer, duel_state):
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(5))
        assert state is duel_state


class TestCombat:
    """Tests for minion attacks and keywords."""

    def test_attack_hero(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.squire", 1)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.enemy_hero()))
        assert state.ai_hp == 28
        assert not state.player_board[0].can_attack

    def test_fresh_minion_cannot_attack(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.squire", 1, ready=False)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.enemy_hero()))
        assert state is duel_state

    def test_charge_attacks_immediately(self, duel_reducer, duel_state):
        duel_state.player_mana = 3
        duel_state.player_hand.append(make_card("card.charger", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        state, _ = duel_reducer.reduce(state, CardDuelAction.minion_attack(1, Target.enemy_hero()))
        assert state.ai_hp == 27

    def test_rush_cannot_hit_hero_on_summon(self, duel_reducer, duel_state):
        duel_state.player_mana = 4
        duel_state.player_hand.append(make_card("card.berserker", 1))
        summon(duel_state, TurnOwner.AI, "card.squire", 10_001)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0))
        blocked, _ = duel_reducer.reduce(state, CardDuelAction.minion_attack(1, Target.enemy_hero()))
        assert blocked.ai_hp == 30
        assert "Rush" in blocked.battle_log[-1]
        traded, _ = duel_reducer.reduce(state, CardDuelAction.minion_attack(1, Target.minion(10_001)))
        assert traded.ai_board == []

    def test_taunt_must_be_attacked(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.squire", 1)
        summon(duel_state, TurnOwner.AI, "card.guardian", 10_001)
        summon(duel_state, TurnOwner.AI, "card.scout", 10_002)
        face, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.enemy_hero()))
        assert face.ai_hp == 30
        assert face.battle_log[-1] == "Must attack a Taunt minion first."
        other, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.minion(10_002)))
        assert len(other.ai_board) == 2
        taunt, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.minion(10_001)))
        assert taunt.ai_board[0].current_health == 2

    def test_trade_damages_both(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.knight", 1)
        summon(duel_state, TurnOwner.AI, "card.squire", 10_001)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.minion(10_001)))
        assert state.ai_board == []
        assert state.player_board[0].current_health == 3
        assert "traded with" in state.battle_log[-1]

    def test_divine_shield_absorbs_hit(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.knight", 1)
        summon(duel_state, TurnOwner.AI, "card.paladin", 10_001)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.minion(10_001)))
        paladin = state.ai_board[0]
        assert paladin.current_health == 6
        assert not paladin.has_divine_shield

    def test_second_hit_after_shield_deals_full_damage(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.knight", 1)
        summon(duel_state, TurnOwner.PLAYER, "card.knight", 2)
        summon(duel_state, TurnOwner.AI, "card.paladin", 10_001)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.minion(10_001)))
        state, _ = duel_reducer.reduce(state, CardDuelAction.minion_attack(2, Target.minion(10_001)))
        assert state.ai_board[0].current_health == 2

    def test_damage_spell_only_pops_shield(self, duel_reducer, duel_state):
        duel_state.player_mana = 4
        summon(duel_state, TurnOwner.AI, "card.paladin", 10_001)
        duel_state.player_hand.append(make_card("card.fireball", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0, Target.minion(10_001)))
        paladin = state.ai_board[0]
        assert paladin.current_health == 6
        assert not paladin.has_divine_shield
        assert state.player_mana == 0

    def test_attacking_own_hero_is_noop(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.squire", 1)
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.minion_attack(1, Target.friendly_hero()))
        assert state is duel_state


class TestBuff:
    """Tests for buff_minion, which never raises max_health."""

    @staticmethod
    def blessing(card_id):
        return DuelCard(
            card_id=card_id,
            name_key="card.blessing",
            card_type=CardType.SPELL,
            cost=1,
            spell_effect=SpellEffect.buff_minion(2, 3),
        )

    def test_buff_raises_attack_and_health(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.PLAYER, "card.squire", 1)
        duel_state.player_hand.append(self.blessing(2))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.play_card(0, Target.minion(1)))
        squire = state.player_board[0]
        assert (squire.current_attack, squire.current_health) == (4, 6)
        assert squire.max_health == 3

    def test_heal_after_buff_capped_at_printed_health(self, duel_state):
        squire = summon(duel_state, TurnOwner.PLAYER, "card.squire", 1)
        resolve_spell(duel_state, SpellEffect.buff_minion(2, 3), TurnOwner.PLAYER, Target.minion(1))
        deal_damage_to_minion(squire, 4)
        assert squire.current_health == 2
        resolve_spell(duel_state, SpellEffect.heal_target(8), TurnOwner.PLAYER, Target.minion(1))
        assert squire.current_health == 3

    def test_buff_ignores_enemy_minion(self, duel_state):
        enemy = summon(duel_state, TurnOwner.AI, "card.squire", 10_001)
        resolve_spell(duel_state, SpellEffect.buff_minion(2, 3), TurnOwner.PLAYER, Target.minion(10_001))
        assert (enemy.current_attack, enemy.current_health) == (2, 3)


class TestGameOver:
    """Gameplay actions after the duel ends are rejected unchanged."""

    @pytest.fixture
    def finished(self, duel_state):
        duel_state.player_mana = 4
        duel_state.player_hand.append(make_card("card.scout", 1))
        summon(duel_state, TurnOwner.PLAYER, "card.squire", 2)
        duel_state.end_game()
        return duel_state

    def test_play_card_rejected(self, duel_reducer, finished):
        state, _ = duel_reducer.reduce(finished, CardDuelAction.play_card(0))
        assert state is finished

    def test_minion_attack_rejected(self, duel_reducer, finished):
        state, _ = duel_reducer.reduce(finished, CardDuelAction.minion_attack(2, Target.enemy_hero()))
        assert state is finished

    def test_end_turn_rejected(self, duel_reducer, finished):
        state, effect = duel_reducer.reduce(finished, CardDuelAction.end_turn())
        assert state is finished
        assert effect.is_none


class TestTurnFlow:
    """Tests for end_turn and the AI phases."""

    def test_end_turn_schedules_ai(self, duel_reducer, duel_state):
        state, effect = duel_reducer.reduce(duel_state, CardDuelAction.end_turn())
        assert state.turn_phase == TurnPhase.AI_PLAY
        assert state.turn_owner == TurnOwner.AI
        assert (state.ai_mana, state.ai_max_mana) == (1, 1)
        assert effect.follow_up == CardDuelAction.ai_play_phase()

    def test_player_actions_rejected_during_ai_turn(self, duel_reducer, duel_state):
        duel_state.player_hand.append(make_card("card.scout", 1))
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.end_turn())
        after, _ = duel_reducer.reduce(state, CardDuelAction.play_card(0))
        assert after is state

    def test_full_round_returns_to_player(self, passive_duel_reducer, duel_state):
        async def scenario():
            store = StateStore(duel_state, passive_duel_reducer)
            await store.send(CardDuelAction.end_turn())
            return store.state

        state = asyncio.run(scenario())
        assert state.turn_phase == TurnPhase.PLAYER_MAIN
        assert state.turn_owner == TurnOwner.PLAYER
        assert state.turn_number == 2
        assert (state.player_mana, state.player_max_mana) == (2, 2)
        assert len(state.player_hand) == 1
        assert state.battle_log[-1] == "Your turn (mana 2/2)."

    def test_ai_attacks_face(self, duel_reducer, duel_state):
        summon(duel_state, TurnOwner.AI, "card.charger", 10_001)
        duel_state.turn_phase = TurnPhase.AI_ATTACK
        duel_state.turn_owner = TurnOwner.AI
        state, effect = duel_reducer.reduce(duel_state, CardDuelAction.ai_attack_phase())
        assert state.player_hp == 27
        assert effect.follow_up == CardDuelAction.start_player_turn()

    def test_ai_lethal_ends_game(self, duel_reducer, duel_state):
        duel_state.player_hp = 2
        summon(duel_state, TurnOwner.AI, "card.charger", 10_001)
        duel_state.turn_phase = TurnPhase.AI_ATTACK
        state, effect = duel_reducer.reduce(duel_state, CardDuelAction.ai_attack_phase())
        assert state.is_game_over
        assert state.battle_log[-1] == "AI wins."
        assert effect.is_none

    def test_ai_plays_cards(self, duel_reducer, duel_state):
        duel_state.ai_hand.append(make_card("card.squire", 10_001))
        duel_state.turn_phase = TurnPhase.AI_PLAY
        duel_state.ai_mana = 2
        state, effect = duel_reducer.reduce(duel_state, CardDuelAction.ai_play_phase())
        assert [m.minion_id for m in state.ai_board] == [10_001]
        assert state.turn_phase == TurnPhase.AI_ATTACK
        assert effect.follow_up == CardDuelAction.ai_attack_phase()

    def test_ai_play_updates_score(self, duel_reducer, duel_state):
        duel_state.ai_hand.append(make_card("card.fireball", 10_001))
        duel_state.turn_phase = TurnPhase.AI_PLAY
        duel_state.ai_mana = 4
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.ai_play_phase())
        assert state.player_hp == 24
        assert state.score == 24 * 3

    def test_start_player_turn_outside_ai_attack_is_noop(self, duel_reducer, duel_state):
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.start_player_turn())
        assert state is duel_state

    def test_resume_mid_ai_turn_reschedules(self, duel_reducer, duel_state):
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.end_turn())
        paused, _ = duel_reducer.reduce(state, CardDuelAction.pause())
        dropped, _ = duel_reducer.reduce(paused, CardDuelAction.ai_play_phase())
        assert dropped is paused
        resumed, effect = duel_reducer.reduce(paused, CardDuelAction.resume())
        assert resumed.is_running
        assert effect.follow_up == CardDuelAction.ai_play_phase()

    def test_reset_keeps_seed(self, duel_reducer, duel_state):
        state, _ = duel_reducer.reduce(duel_state, CardDuelAction.reset())
        assert state.seed == duel_state.seed
        assert not state.is_running
        assert state.player_hand == []
