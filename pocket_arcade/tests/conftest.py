"""
Pytest fixtures for Pocket Arcade tests.
"""

import pytest

from ..config import PacingSettings
from ..bots import PassivePolicy
from ..games.card_duel import CARD_POOL, CardDuelReducer, DuelCard
from ..games.card_duel.reducer import setup_new_game
from ..games.registry import GameRegistry, default_registry
from ..session import SessionManager


@pytest.fixture
def instant_pacing() -> PacingSettings:
    """Pacing with every delay disabled."""
    return PacingSettings.instant()


@pytest.fixture
def registry(instant_pacing) -> GameRegistry:
    return default_registry(instant_pacing)


@pytest.fixture
def manager(registry) -> SessionManager:
    return SessionManager(registry)


@pytest.fixture
def duel_reducer(instant_pacing) -> CardDuelReducer:
    """Card Duel reducer with the heuristic bot and no delays."""
    return CardDuelReducer(pacing=instant_pacing)


@pytest.fixture
def passive_duel_reducer(instant_pacing) -> CardDuelReducer:
    """Card Duel reducer whose AI never plays or attacks."""
    return CardDuelReducer(pacing=instant_pacing, bot=PassivePolicy())


@pytest.fixture
def duel_state():
    """A freshly dealt duel with empty hands, for hand-built scenarios."""
    state = setup_new_game(seed=42)
    state.player_hand.clear()
    state.ai_hand.clear()
    return state


def make_card(name_key: str, card_id: int) -> DuelCard:
    """Stamp a pool card by name, e.g. make_card("card.fireball", 1)."""
    template = next(t for t in CARD_POOL if t.name_key == name_key)
    return template.make(card_id)
