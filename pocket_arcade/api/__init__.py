"""
API Module - HTTP and WebSocket interface.

Exposes the game engine to clients:
1. Browse the game catalog and high scores
2. Create sessions (optionally seeded)
3. Send actions and read back state
4. Follow real-time games over a WebSocket

All state is session-scoped and in memory. No user accounts.
"""

from .schemas import (
    # Requests
    ActionRequest,
    CreateSessionRequest,
    # Responses
    EndSessionResponse,
    ErrorResponse,
    GameListResponse,
    HealthResponse,
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
from .service import APIService, state_to_dict
from .app import create_app

__all__ = [
    # Requests
    "ActionRequest",
    "CreateSessionRequest",
    # Responses
    "EndSessionResponse",
    "ErrorResponse",
    "GameListResponse",
    "HealthResponse",
    "ScoresResponse",
    "SessionListResponse",
    "SessionResponse",
    "SessionSummary",
    # Shared
    "GameInfo",
    "ScoreEntryInfo",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "state_to_dict",
    "create_app",
]
