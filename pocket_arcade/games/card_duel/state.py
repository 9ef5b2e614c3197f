"""
Card Duel State - Complete state for one duel session.

Holds both heroes, decks, hands, boards and mana pools, the turn state
machine position, a capped battle log and the session RNG.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from ...engine_core.rng import SeededRNG
from ...engine_core.state import GameState
from .cards import DuelCard, Keyword

MAX_HP = 30
INITIAL_HAND_SIZE = 3
DRAW_PER_TURN = 1
MAX_HAND_SIZE = 7
MAX_BOARD_SIZE = 7
DECK_SIZE = 18
MAX_MANA = 10
LOG_CAPACITY = 30
PLAYER_CARD_ID_BASE = 0
AI_CARD_ID_BASE = 10_000


class TurnOwner(Enum):
    PLAYER = "player"
    AI = "ai"

    @property
    def opponent(self) -> TurnOwner:
        return TurnOwner.AI if self == TurnOwner.PLAYER else TurnOwner.PLAYER


class TurnPhase(Enum):
    PLAYER_MAIN = "player_main"  # Player plays cards / attacks with minions
    AI_PLAY = "ai_play"  # AI plays cards
    AI_ATTACK = "ai_attack"  # AI orders minion attacks


@dataclass
class BoardMinion:
    """
    A minion occupying a board slot.

    max_health is fixed at summon time; buffs raise current_health only.
    """
    minion_id: int
    card: DuelCard
    current_attack: int
    current_health: int
    max_health: int
    can_attack: bool = False
    has_divine_shield: bool = False
    summoned_this_turn: bool = True

    @classmethod
    def summon(cls, card: DuelCard) -> BoardMinion:
        """Materialize a minion card. Charge and Rush may attack at once."""
        return cls(
            minion_id=card.card_id,
            card=card,
            current_attack=card.attack,
            current_health=card.health,
            max_health=card.health,
            can_attack=card.has(Keyword.CHARGE) or card.has(Keyword.RUSH),
            has_divine_shield=card.has(Keyword.DIVINE_SHIELD),
            summoned_this_turn=True,
        )

    def has(self, keyword: Keyword) -> bool:
        return self.card.has(keyword)

    @property
    def is_dead(self) -> bool:
        return self.current_health <= 0

    @property
    def is_rush_restricted(self) -> bool:
        """Rush minions cannot hit the hero on the turn they are played."""
        return self.has(Keyword.RUSH) and self.summoned_this_turn


@dataclass
class CardDuelState(GameState):
    """
    State for a Card Duel session.

    Sides are addressed by TurnOwner through the ``hand``/``deck``/``board``
    helpers so rules can be written once for both players.
    """
    seed: int = 0

    # Hero health
    player_hp: int = MAX_HP
    ai_hp: int = MAX_HP

    # Decks (draw from front) and hands (insertion ordered)
    player_deck: list[DuelCard] = field(default_factory=list)
    ai_deck: list[DuelCard] = field(default_factory=list)
    player_hand: list[DuelCard] = field(default_factory=list)
    ai_hand: list[DuelCard] = field(default_factory=list)

    # Boards (ordered, max 7 each)
    player_board: list[BoardMinion] = field(default_factory=list)
    ai_board: list[BoardMinion] = field(default_factory=list)

    # Mana
    player_mana: int = 0
    player_max_mana: int = 0
    ai_mana: int = 0
    ai_max_mana: int = 0

    # Turn tracking
    turn_owner: TurnOwner = TurnOwner.PLAYER
    turn_phase: TurnPhase = TurnPhase.PLAYER_MAIN
    turn_number: int = 0

    battle_log: list[str] = field(default_factory=list)
    rng: SeededRNG = field(default_factory=SeededRNG)

    @classmethod
    def create(cls, seed: int | None = None) -> CardDuelState:
        """Idle state for a seed (system seed when omitted)."""
        if seed is None:
            seed = SeededRNG.system_seed()
        return cls(seed=seed, rng=SeededRNG(seed))

    def hand(self, side: TurnOwner) -> list[DuelCard]:
        return self.player_hand if side == TurnOwner.PLAYER else self.ai_hand

    def deck(self, side: TurnOwner) -> list[DuelCard]:
        return self.player_deck if side == TurnOwner.PLAYER else self.ai_deck

    def board(self, side: TurnOwner) -> list[BoardMinion]:
        return self.player_board if side == TurnOwner.PLAYER else self.ai_board

    def hp(self, side: TurnOwner) -> int:
        return self.player_hp if side == TurnOwner.PLAYER else self.ai_hp

    def set_hp(self, side: TurnOwner, value: int) -> None:
        if side == TurnOwner.PLAYER:
            self.player_hp = value
        else:
            self.ai_hp = value

    def mana(self, side: TurnOwner) -> int:
        return self.player_mana if side == TurnOwner.PLAYER else self.ai_mana

    def spend_mana(self, side: TurnOwner, amount: int) -> None:
        if side == TurnOwner.PLAYER:
            self.player_mana -= amount
        else:
            self.ai_mana -= amount

    def find_minion(self, side: TurnOwner, minion_id: int) -> int | None:
        """Index of a minion on a side's board, or None."""
        for index, minion in enumerate(self.board(side)):
            if minion.minion_id == minion_id:
                return index
        return None

    def taunters(self, side: TurnOwner) -> list[BoardMinion]:
        return [m for m in self.board(side) if m.has(Keyword.TAUNT)]

    def log(self, entry: str) -> None:
        self.battle_log.append(entry)
        overflow = len(self.battle_log) - LOG_CAPACITY
        if overflow > 0:
            del self.battle_log[:overflow]
