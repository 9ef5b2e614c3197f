"""
Bot Policy - Interface for Card Duel AI decision-making.

A DuelPolicy looks at the public duel state and returns plans:
- Which hand cards to play, in order, and at what
- Which minions attack, and what they attack

Plans are advisory. The reducer executes them one by one and re-checks
mana, board space and targets before each step.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..games.card_duel.cards import Target

if TYPE_CHECKING:
    from ..games.card_duel.state import CardDuelState


@dataclass(frozen=True)
class PlayPlan:
    """
    A card the bot wants to play.

    ``card_id`` identifies the card independent of hand position, which
    shifts as earlier plans in the same batch are executed.
    """
    hand_index: int
    card_id: int
    target: Target | None = None


@dataclass(frozen=True)
class AttackPlan:
    attacker_id: int
    target: Target


class DuelPolicy(ABC):
    """
    Abstract base class for Card Duel policies.

    Implementations range from passive test doubles to the heuristic bot.
    """

    @abstractmethod
    def play_plans(self, state: CardDuelState) -> list[PlayPlan]:
        """Ordered list of cards to play this phase."""

    @abstractmethod
    def attack_plans(self, state: CardDuelState) -> list[AttackPlan]:
        """Ordered list of attacks to make this phase."""

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class PassivePolicy(DuelPolicy):
    """
    Never plays or attacks.

    Used for:
    - Deterministic testing of turn flow
    - Practice games
    """

    def play_plans(self, state: CardDuelState) -> list[PlayPlan]:
        return []

    def attack_plans(self, state: CardDuelState) -> list[AttackPlan]:
        return []
