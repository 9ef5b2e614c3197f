"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Client picks a game -> session created with a fresh seeded state
2. Real-time games get a GameLoop feeding tick actions into the store
3. Client actions are parsed by the game and dispatched to the store;
   delayed follow-ups (AI turns, hides, stimuli) run in the background
4. Each time a session enters game over, its score is recorded once
5. Session ended -> loop stopped, pending effects cancelled, state dropped

PERSISTENCE RULES:
- NO database: sessions and high scores live in memory only
- A session is fully described by its game id and seed plus the actions
  applied to it
"""

from __future__ import annotations
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping, TYPE_CHECKING

from loguru import logger

from ..engine_core.state import GameState
from ..engine_core.store import StateStore
from ..scores import DEFAULT_PLAYER, HighScoreStore
from .game_loop import GameLoop

if TYPE_CHECKING:
    from ..games.registry import GameDefinition, GameRegistry


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or already ended."""


@dataclass
class Session:
    """
    One play-through of one game.

    ``was_game_over`` tracks the last published game-over flag so a score
    is recorded on the false -> true edge only.
    """
    session_id: str
    game_id: str
    definition: GameDefinition
    store: StateStore
    seed: int | None
    created_at: float
    player_name: str = DEFAULT_PLAYER
    loop: GameLoop | None = None
    was_game_over: bool = False
    recorded_scores: list[int] = field(default_factory=list)

    @property
    def state(self) -> GameState:
        return self.store.state


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions for registered games
    - Route actions to the right store
    - Record high scores on game over
    - Clean up ended sessions

    Usage:
        manager = SessionManager()
        session = await manager.create_session("snake", seed=7)
        await manager.apply(session.session_id, "change_direction", {"direction": "up"})
        await manager.end_session(session.session_id)
    """

    def __init__(self, registry: GameRegistry | None = None):
        if registry is None:
            from ..games.registry import default_registry
            registry = default_registry()
        self.registry = registry
        self._sessions: dict[str, Session] = {}
        self._scores: dict[str, HighScoreStore] = {}

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def create_session(
        self,
        game_id: str,
        seed: int | None = None,
        player_name: str = DEFAULT_PLAYER,
    ) -> Session:
        """
        Create a new session.

        Args:
            game_id: Registered game id (raises UnknownGameError otherwise)
            seed: RNG seed; a system seed is used when omitted
            player_name: Name used for high score entries

        Must be called from a running event loop: real-time games start
        their tick loop immediately.
        """
        definition = self.registry.get(game_id)
        store = StateStore(definition.make_state(seed), definition.reducer)
        session = Session(
            session_id=str(uuid.uuid4()),
            game_id=game_id,
            definition=definition,
            store=store,
            seed=seed,
            created_at=time.time(),
            player_name=player_name,
        )
        store.subscribe(lambda state: self._on_state(session, state))

        if definition.tick is not None:
            tick = definition.tick

            async def on_tick(delta: float) -> None:
                store.dispatch(tick.make_action(delta))

            session.loop = GameLoop(tick.tick_rate, on_tick)
            session.loop.start()

        self._sessions[session.session_id] = session
        logger.info("Session {} created for {} (seed={})", session.session_id, game_id, seed)
        return session

    def get_session(self, session_id: str) -> Session:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def list_sessions(self) -> list[Session]:
        return list(self._sessions.values())

    async def end_session(self, session_id: str) -> Session:
        """
        End a session and clean up.

        Stops the tick loop and cancels pending effects; a delayed follow-up
        that has not fired yet is never applied.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        if session.loop is not None:
            await session.loop.stop()
        await session.store.close()
        logger.info("Session {} ended", session_id)
        return session

    async def close(self) -> None:
        """End every session."""
        for session_id in list(self._sessions):
            await self.end_session(session_id)

    # =========================================================================
    # Actions
    # =========================================================================

    def apply(self, session_id: str, action_type: str, params: Mapping[str, Any] | None = None) -> GameState:
        """
        Parse and dispatch a wire action.

        Returns the state right after the action; follow-ups run in the
        background. Raises ActionParseError for malformed input.
        """
        session = self.get_session(session_id)
        action = session.definition.parse_action(action_type, params or {})
        return self.dispatch(session_id, action)

    def dispatch(self, session_id: str, action: Any) -> GameState:
        session = self.get_session(session_id)
        session.store.dispatch(action)
        return session.store.state

    async def send(self, session_id: str, action: Any) -> GameState:
        """Apply an action and wait for its whole effect chain."""
        return await self.get_session(session_id).store.send(action)

    # =========================================================================
    # High scores
    # =========================================================================

    def high_scores(self, game_id: str) -> HighScoreStore:
        """Score table for a registered game (raises UnknownGameError)."""
        self.registry.get(game_id)
        if game_id not in self._scores:
            self._scores[game_id] = HighScoreStore(game_id)
        return self._scores[game_id]

    def _on_state(self, session: Session, state: GameState) -> None:
        entered = state.is_game_over and not session.was_game_over
        session.was_game_over = state.is_game_over
        if not entered:
            return

        session.recorded_scores.append(state.score)
        if self.high_scores(session.game_id).record(state.score, session.player_name):
            logger.info("New high score for {}: {} ({})", session.game_id, state.score, session.player_name)
