"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between HTTP clients and the engine.
Game states are returned as plain JSON objects (``state``) with enums
serialized by value; their shape is specific to each game.

Error Codes:
- UNKNOWN_GAME: Game id is not registered
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_ACTION: Action type unknown to the game, or bad parameters
- VALIDATION_ERROR: Request body failed validation
- INTERNAL_ERROR: Unexpected server error
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    UNKNOWN_GAME = "UNKNOWN_GAME"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_ACTION = "INVALID_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class GameInfo(BaseModel):
    """Catalog entry for a game."""
    game_id: str
    display_name_key: str
    description_key: str
    icon_name: str
    category: str = Field(description="Action, Puzzle, Classic or Reflex")
    min_age: int = 4
    tick_rate: Optional[float] = Field(None, description="Ticks per second for real-time games")
    actions: list[str] = Field(default_factory=list, description="Accepted action types")


class ScoreEntryInfo(BaseModel):
    """A recorded score."""
    score: int
    player_name: str
    recorded_at: float

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start a game session."""
    game_id: str = Field(..., description="Game id from GET /games")
    seed: Optional[int] = Field(None, ge=0, lt=2**64, description="RNG seed for a reproducible session")
    player_name: str = Field("Player", min_length=1, max_length=40)
    auto_start: bool = Field(False, description="Send the game's start action right away")


class ActionRequest(BaseModel):
    """An action in wire form."""
    type: str = Field(..., description="Action type, e.g. 'play_card' or 'tick'")
    params: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameListResponse(BaseModel):
    games: list[GameInfo]
    count: int


class ScoresResponse(BaseModel):
    game_id: str
    scores: list[ScoreEntryInfo] = Field(default_factory=list)


class SessionResponse(BaseModel):
    """Session information with the full current game state."""
    session_id: str
    game_id: str
    status: SessionStatus
    player_name: str
    seed: Optional[int] = None
    score: int = 0
    created_at: float = 0.0
    state: dict[str, Any] = Field(default_factory=dict)
    api_version: str = "v1"


class SessionSummary(BaseModel):
    session_id: str
    game_id: str
    status: SessionStatus
    score: int = 0


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[SessionSummary]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str
    final_score: int = 0


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    environment: str
