"""
Card Duel Cards - Card definitions and deck generation.

The pool is a fixed set of 13 templates. Decks are built by sampling the
pool with replacement and shuffling with the session's SeededRNG, so a
seed fully determines both decks.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ...engine_core.rng import SeededRNG


class CardType(Enum):
    MINION = "minion"  # Persists on the board after being played
    SPELL = "spell"  # Resolves immediately


class Keyword(Enum):
    """Minion keyword abilities."""
    TAUNT = "taunt"  # Enemies must attack this minion first
    RUSH = "rush"  # Can attack minions (not the hero) on the summon turn
    CHARGE = "charge"  # Can attack anything on the summon turn
    DIVINE_SHIELD = "divine_shield"  # Absorbs the first damage instance


class SpellKind(Enum):
    DAMAGE_TARGET = "damage_target"
    HEAL_TARGET = "heal_target"
    AOE_ENEMY_MINIONS = "aoe_enemy_minions"
    DRAW_CARDS = "draw_cards"
    BUFF_MINION = "buff_minion"


@dataclass(frozen=True)
class SpellEffect:
    """
    The resolved effect of a spell card.

    ``amount`` carries N for damage/heal/aoe/draw; buffs use the two bonus
    fields instead.
    """
    kind: SpellKind
    amount: int = 0
    attack_bonus: int = 0
    health_bonus: int = 0

    @classmethod
    def damage_target(cls, amount: int) -> SpellEffect:
        return cls(SpellKind.DAMAGE_TARGET, amount=amount)

    @classmethod
    def heal_target(cls, amount: int) -> SpellEffect:
        return cls(SpellKind.HEAL_TARGET, amount=amount)

    @classmethod
    def aoe_enemy_minions(cls, amount: int) -> SpellEffect:
        return cls(SpellKind.AOE_ENEMY_MINIONS, amount=amount)

    @classmethod
    def draw_cards(cls, count: int) -> SpellEffect:
        return cls(SpellKind.DRAW_CARDS, amount=count)

    @classmethod
    def buff_minion(cls, attack: int, health: int) -> SpellEffect:
        return cls(SpellKind.BUFF_MINION, attack_bonus=attack, health_bonus=health)

    @property
    def needs_target(self) -> bool:
        return self.kind in {
            SpellKind.DAMAGE_TARGET,
            SpellKind.HEAL_TARGET,
            SpellKind.BUFF_MINION,
        }


class TargetKind(Enum):
    ENEMY_HERO = "enemy_hero"
    FRIENDLY_HERO = "friendly_hero"
    MINION = "minion"


@dataclass(frozen=True)
class Target:
    """
    Who or what a card effect or attack is directed at.

    Hero targets are relative to the acting side. Minion targets name a
    minion id; the reducer decides which board it must be on.
    """
    kind: TargetKind
    minion_id: int | None = None

    @classmethod
    def enemy_hero(cls) -> Target:
        return cls(TargetKind.ENEMY_HERO)

    @classmethod
    def friendly_hero(cls) -> Target:
        return cls(TargetKind.FRIENDLY_HERO)

    @classmethod
    def minion(cls, minion_id: int) -> Target:
        return cls(TargetKind.MINION, minion_id=minion_id)

    @property
    def is_minion(self) -> bool:
        return self.kind == TargetKind.MINION


@dataclass(frozen=True)
class DuelCard:
    """A card instance. Immutable once created by the deck factory."""
    card_id: int
    name_key: str
    card_type: CardType
    cost: int
    attack: int = 0
    health: int = 0
    keywords: tuple[Keyword, ...] = ()
    spell_effect: SpellEffect | None = None

    @property
    def is_minion(self) -> bool:
        return self.card_type == CardType.MINION

    def has(self, keyword: Keyword) -> bool:
        return keyword in self.keywords


@dataclass(frozen=True)
class CardTemplate:
    """A pool entry; stamped into DuelCards with fresh ids."""
    name_key: str
    card_type: CardType
    cost: int
    attack: int = 0
    health: int = 0
    keywords: tuple[Keyword, ...] = ()
    spell: SpellEffect | None = None

    def make(self, card_id: int) -> DuelCard:
        return DuelCard(
            card_id=card_id,
            name_key=self.name_key,
            card_type=self.card_type,
            cost=self.cost,
            attack=self.attack,
            health=self.health,
            keywords=self.keywords,
            spell_effect=self.spell,
        )


# ============================================================================
# Card Pool
# ============================================================================

CARD_POOL: tuple[CardTemplate, ...] = (
    # Low cost (1-3 mana)
    CardTemplate("card.scout", CardType.MINION, cost=1, attack=1, health=2),
    CardTemplate("card.squire", CardType.MINION, cost=2, attack=2, health=3),
    CardTemplate("card.guardian", CardType.MINION, cost=2, attack=1, health=4,
                 keywords=(Keyword.TAUNT,)),
    CardTemplate("card.charger", CardType.MINION, cost=3, attack=3, health=2,
                 keywords=(Keyword.CHARGE,)),
    # Mid cost (4-6 mana)
    CardTemplate("card.knight", CardType.MINION, cost=4, attack=4, health=5),
    CardTemplate("card.paladin", CardType.MINION, cost=5, attack=3, health=6,
                 keywords=(Keyword.TAUNT, Keyword.DIVINE_SHIELD)),
    CardTemplate("card.berserker", CardType.MINION, cost=4, attack=5, health=3,
                 keywords=(Keyword.RUSH,)),
    # High cost (7+ mana)
    CardTemplate("card.dragon", CardType.MINION, cost=7, attack=7, health=7,
                 keywords=(Keyword.CHARGE,)),
    CardTemplate("card.titan", CardType.MINION, cost=8, attack=8, health=8,
                 keywords=(Keyword.TAUNT,)),
    # Spells
    CardTemplate("card.fireball", CardType.SPELL, cost=4, spell=SpellEffect.damage_target(6)),
    CardTemplate("card.heal", CardType.SPELL, cost=3, spell=SpellEffect.heal_target(8)),
    CardTemplate("card.nova", CardType.SPELL, cost=6, spell=SpellEffect.aoe_enemy_minions(3)),
    CardTemplate("card.wisdom", CardType.SPELL, cost=2, spell=SpellEffect.draw_cards(2)),
)


def make_deck(size: int, starting_id: int, rng: SeededRNG) -> list[DuelCard]:
    """
    Build a shuffled deck by sampling the pool with replacement.

    Card ids run from ``starting_id`` upward in sampling order; the shuffle
    happens afterwards. ``rng`` is advanced in place.
    """
    cards = [
        CARD_POOL[rng.next_int(0, len(CARD_POOL) - 1)].make(starting_id + offset)
        for offset in range(size)
    ]
    rng.shuffle(cards)
    return cards
