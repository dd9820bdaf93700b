"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a scoreboard client and the
engine. All responses include explicit types for OpenAPI schema generation.

Error Codes:
- INVALID_ROSTER: Player add/remove refused (started, full, empty or duplicate name)
- INSUFFICIENT_PLAYERS: Start requested with fewer than 2 players
- INVALID_GAME_STATE: Command not allowed in the current phase
- ILLEGAL_POCKET: Ball not owned by any active player; shooter loses the turn
- SESSION_NOT_FOUND: Session does not exist or has ended
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


MAX_NAME_LENGTH = 20


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class NotificationSeverity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_ROSTER = "INVALID_ROSTER"
    INSUFFICIENT_PLAYERS = "INSUFFICIENT_PLAYERS"
    INVALID_GAME_STATE = "INVALID_GAME_STATE"
    ILLEGAL_POCKET = "ILLEGAL_POCKET"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    balls: list[int] = Field(default_factory=list)
    ball_count: int = 0
    score: int = 0
    is_active: bool = True
    is_current_turn: bool = False

    model_config = {"from_attributes": True}


class HistoryEventInfo(BaseModel):
    """One line of the game log."""
    timestamp: float
    player_name: str
    action: str
    ball_number: Optional[int] = None
    text: str = Field(description="Ready-to-display log line")


class NotificationInfo(BaseModel):
    """A message for the client to show (toast, log line, ...)."""
    severity: NotificationSeverity
    message: str


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Open a new table."""
    seed: Optional[int] = Field(None, description="Shuffle seed for reproducible deals")


class CreatePlayerRequest(BaseModel):
    """Add a player to the roster."""
    name: str = Field(max_length=MAX_NAME_LENGTH, description="Display name, unique at the table")


class PocketBallRequest(BaseModel):
    """Report a ball going into a pocket."""
    ball_number: int = Field(ge=1, le=15, description="Ball number, 1-15")


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """Full state of one table."""
    session_id: str
    status: SessionStatus
    game_started: bool
    game_finished: bool
    current_turn: int
    current_player_id: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    available_balls: list[int] = Field(default_factory=list)
    available_balls_count: int = 0
    pocketed_balls: list[int] = Field(default_factory=list)
    winner: Optional[PlayerInfo] = None
    history: list[HistoryEventInfo] = Field(default_factory=list)
    api_version: str = "v1"


class CommandResponse(BaseModel):
    """
    Result of a game command.

    `success=false` means the command was refused and the state is unchanged.
    An illegal pocket is applied (the turn moves) and reports
    `success=true` together with `error_code=ILLEGAL_POCKET`.
    """
    success: bool
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None
    notifications: list[NotificationInfo] = Field(default_factory=list)
    state: GameStateResponse


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class ErrorResponse(BaseModel):
    """Error returned for transport-level failures (unknown session, ...)."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
