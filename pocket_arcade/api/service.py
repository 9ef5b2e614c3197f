"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session manager calls
2. Parses wire actions with each game's parser
3. Serializes game states for clients
4. Maps engine errors to structured error responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger
from pydantic import TypeAdapter

from .schemas import (
    # Requests
    ActionRequest,
    CreateSessionRequest,
    # Responses
    EndSessionResponse,
    ErrorResponse,
    GameListResponse,
    ScoresResponse,
    SessionListResponse,
    SessionResponse,
    SessionSummary,
    # Shared
    GameInfo,
    ScoreEntryInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)
from ..engine_core.action import ActionParseError
from ..engine_core.state import GameState
from ..games.registry import GameDefinition, UnknownGameError
from ..session import Session, SessionManager, SessionNotFoundError

# Internal RNG position is not part of the public state
HIDDEN_FIELDS = {"rng"}

_adapters: dict[type, TypeAdapter] = {}


def state_to_dict(state: GameState) -> dict[str, Any]:
    """JSON-ready dict of a game state, enums by value."""
    adapter = _adapters.get(type(state))
    if adapter is None:
        adapter = _adapters[type(state)] = TypeAdapter(type(state))
    return adapter.dump_python(state, mode="json", exclude=HIDDEN_FIELDS)


def session_status(state: GameState) -> SessionStatus:
    if state.is_game_over:
        return SessionStatus.GAME_OVER
    if state.is_running:
        return SessionStatus.RUNNING
    return SessionStatus.IDLE


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        games = service.list_games()
        session = await service.create_session(CreateSessionRequest(game_id="snake"))
        state = service.apply_action(session.session_id, ActionRequest(type="start"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # =========================================================================
    # Catalog
    # =========================================================================

    def list_games(self) -> GameListResponse:
        games = [self._game_info(d) for d in self.session_manager.registry.all_games()]
        return GameListResponse(games=games, count=len(games))

    def get_scores(self, game_id: str, limit: int = 10) -> ScoresResponse | ErrorResponse:
        try:
            table = self.session_manager.high_scores(game_id)
        except UnknownGameError:
            return self._unknown_game(game_id)
        return ScoresResponse(
            game_id=game_id,
            scores=[ScoreEntryInfo.model_validate(e) for e in table.top_scores(limit)],
        )

    # =========================================================================
    # Sessions
    # =========================================================================

    async def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """
        Create a new game session, optionally starting it.
        """
        try:
            session = await self.session_manager.create_session(
                request.game_id,
                seed=request.seed,
                player_name=request.player_name,
            )
        except UnknownGameError:
            return self._unknown_game(request.game_id)

        if request.auto_start:
            self.session_manager.dispatch(session.session_id, session.definition.controls.start)
        return self.session_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        try:
            session = self.session_manager.get_session(session_id)
        except SessionNotFoundError:
            return self._session_not_found(session_id)
        return self.session_response(session)

    def list_sessions(self) -> SessionListResponse:
        sessions = [
            SessionSummary(
                session_id=s.session_id,
                game_id=s.game_id,
                status=session_status(s.state),
                score=s.state.score,
            )
            for s in self.session_manager.list_sessions()
        ]
        return SessionListResponse(sessions=sessions, count=len(sessions))

    def apply_action(self, session_id: str, request: ActionRequest) -> SessionResponse | ErrorResponse:
        """
        Apply a client action.

        The response carries the state right after the action; delayed
        follow-ups (AI turns, hides, stimuli) keep running in the background.
        """
        try:
            self.session_manager.apply(session_id, request.type, request.params)
            session = self.session_manager.get_session(session_id)
        except SessionNotFoundError:
            return self._session_not_found(session_id)
        except ActionParseError as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.INVALID_ACTION,
                details={"type": request.type},
            )
        return self.session_response(session)

    async def end_session(self, session_id: str) -> EndSessionResponse | ErrorResponse:
        try:
            session = await self.session_manager.end_session(session_id)
        except SessionNotFoundError:
            return self._session_not_found(session_id)
        return EndSessionResponse(
            success=True,
            session_id=session_id,
            final_score=session.state.score,
        )

    def subscribe(self, session_id: str, listener: Callable[[GameState], None]) -> Callable[[], None]:
        """Listen to a session's state changes (raises SessionNotFoundError)."""
        return self.session_manager.get_session(session_id).store.subscribe(listener)

    async def shutdown(self) -> None:
        logger.info("Shutting down {} session(s)", len(self.session_manager.list_sessions()))
        await self.session_manager.close()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def session_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        state = session.state
        return SessionResponse(
            session_id=session.session_id,
            game_id=session.game_id,
            status=session_status(state),
            player_name=session.player_name,
            seed=session.seed,
            score=state.score,
            created_at=session.created_at,
            state=state_to_dict(state),
        )

    def _game_info(self, definition: GameDefinition) -> GameInfo:
        meta = definition.metadata
        action_enum = type(definition.controls.start.action_type)
        return GameInfo(
            game_id=meta.game_id,
            display_name_key=meta.display_name_key,
            description_key=meta.description_key,
            icon_name=meta.icon_name,
            category=meta.category.value,
            min_age=meta.min_age,
            tick_rate=definition.tick.tick_rate if definition.tick else None,
            actions=[t.value for t in action_enum],
        )

    def _unknown_game(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Unknown game: {game_id}",
            error_code=ErrorCode.UNKNOWN_GAME,
            details={"game_id": game_id},
        )

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error="Session not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": session_id},
        )
