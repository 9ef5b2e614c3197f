"""
FastAPI Application - REST and WebSocket API for the arcade.

Endpoints:
    GET    /api/v1/games                     List playable games
    GET    /api/v1/games/{id}/scores         Top scores for a game
    POST   /api/v1/sessions                  Create game session
    GET    /api/v1/sessions                  List active sessions
    GET    /api/v1/sessions/{id}             Get session status and state
    POST   /api/v1/sessions/{id}/actions     Apply an action
    DELETE /api/v1/sessions/{id}             End session
    WS     /api/v1/sessions/{id}/ws          WebSocket for real-time updates

Real-time games (snake, block-puzzle, breakout) tick on the server; clients
either poll GET /sessions/{id} or keep a WebSocket open and receive a
state_update whenever the state changes. Updates are coalesced: a slow
client only ever gets the latest state.

All responses are JSON with explicit Pydantic schemas.
"""

from __future__ import annotations
import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any, Optional, Union

from fastapi import FastAPI, Query, WebSocket, WebSocketDisconnect
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..config import ALLOWED_ORIGINS, ARCADE_ENV
from ..engine_core.state import GameState
from ..session import SessionNotFoundError
from .schemas import (
    # Request models
    ActionRequest,
    CreateSessionRequest,
    # Response models
    EndSessionResponse,
    ErrorResponse,
    GameListResponse,
    HealthResponse,
    ScoresResponse,
    SessionListResponse,
    SessionResponse,
    # Enums
    ErrorCode,
)
from .service import APIService, state_to_dict

NOT_FOUND_CODES = {ErrorCode.UNKNOWN_GAME, ErrorCode.SESSION_NOT_FOUND}


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    api_service = service or APIService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await api_service.shutdown()

    app = FastAPI(
        title="Pocket Arcade API",
        description="Casual games engine: sessions, actions and high scores",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def error_from(response: ErrorResponse) -> JSONResponse:
        status_code = 404 if response.error_code in NOT_FOUND_CODES else 400
        return make_error_response(
            response.error_code,
            response.error,
            status_code=status_code,
            details=response.details,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": json.loads(json.dumps(exc.errors(), default=str))},
        )

    # =========================================================================
    # Game Catalog Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List playable games",
    )
    async def list_games() -> GameListResponse:
        """All registered games, sorted by display name key."""
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{game_id}/scores",
        response_model=ScoresResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Top scores for a game",
    )
    async def get_scores(
        game_id: str,
        limit: int = Query(10, ge=1, le=100, description="Number of entries"),
    ) -> Union[ScoresResponse, JSONResponse]:
        response = api_service.get_scores(game_id, limit)
        if hasattr(response, "error"):
            return error_from(response)
        return response

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse, "description": "Unknown game id"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        Pass a `seed` to make the session reproducible. With `auto_start`
        the game's start action is applied before the response is built.
        """
        response = await api_service.create_session(request)
        if hasattr(response, "error"):
            return error_from(response)
        return response

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        return api_service.list_sessions()

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status and state",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        response = api_service.get_session(session_id)
        if hasattr(response, "error"):
            return error_from(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/actions",
        response_model=SessionResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Unknown action or bad parameters"},
            404: {"model": ErrorResponse},
        },
        tags=["Sessions"],
        summary="Apply an action",
    )
    async def apply_action(session_id: str, request: ActionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Apply an action to a session.

        Actions the game ignores in its current state (moving while paused,
        attacking on the AI's turn) succeed and return the unchanged state.
        """
        response = api_service.apply_action(session_id, request)
        if hasattr(response, "error"):
            return error_from(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> Union[EndSessionResponse, JSONResponse]:
        """End a game session and release resources."""
        response = await api_service.end_session(session_id)
        if hasattr(response, "error"):
            return error_from(response)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed (latest state only)
        - pong: Reply to ping
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        - action: {"type": "action", "payload": {"type": ..., "params": {...}}}
        """
        await websocket.accept()

        updates: asyncio.Queue[GameState] = asyncio.Queue(maxsize=1)

        def on_state(state: GameState) -> None:
            if updates.full():
                updates.get_nowait()
            updates.put_nowait(state)

        try:
            unsubscribe = api_service.subscribe(session_id, on_state)
        except SessionNotFoundError:
            await websocket.send_json({
                "type": "error",
                "payload": {"message": "Session not found", "error_code": ErrorCode.SESSION_NOT_FOUND.value},
            })
            await websocket.close(code=4404)
            return

        initial = api_service.get_session(session_id)
        if not hasattr(initial, "error"):
            await websocket.send_json({"type": "state_update", "payload": initial.state})

        async def push_updates() -> None:
            last_sent: GameState | None = None
            while True:
                state = await updates.get()
                if state is last_sent:
                    continue
                last_sent = state
                await websocket.send_json({"type": "state_update", "payload": state_to_dict(state)})

        async def handle_messages() -> None:
            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue
                reply = handle_client_message(session_id, message)
                if reply is not None:
                    await websocket.send_json(reply)

        pusher = asyncio.create_task(push_updates())
        receiver = asyncio.create_task(handle_messages())
        try:
            done, _ = await asyncio.wait({pusher, receiver}, return_when=asyncio.FIRST_COMPLETED)
            for task in done:
                exc = task.exception()
                if exc is not None and not isinstance(exc, WebSocketDisconnect):
                    logger.warning("WebSocket for session {} closed: {}", session_id, exc)
        finally:
            unsubscribe()
            for task in (pusher, receiver):
                task.cancel()
            await asyncio.gather(pusher, receiver, return_exceptions=True)

    def handle_client_message(session_id: str, message: Any) -> dict | None:
        """Reply for one client message; None when the reply is a state push."""
        kind = message.get("type") if isinstance(message, dict) else None
        if kind == "ping":
            return {"type": "pong"}
        if kind == "action":
            try:
                request = ActionRequest.model_validate(message.get("payload") or {})
            except ValueError as e:
                return {
                    "type": "error",
                    "payload": {"message": str(e), "error_code": ErrorCode.VALIDATION_ERROR.value},
                }
            response = api_service.apply_action(session_id, request)
            if hasattr(response, "error"):
                return {
                    "type": "error",
                    "payload": {"message": response.error, "error_code": response.error_code.value},
                }
            return None
        return {
            "type": "error",
            "payload": {"message": f"Unknown message type: {kind}"},
        }

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="pocket-arcade",
            version=__version__,
            environment=ARCADE_ENV,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Pocket Arcade API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn pocket_arcade.api.app:app
app = create_app()
