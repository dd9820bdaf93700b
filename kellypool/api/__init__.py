"""
API Module - Scoreboard client interface.

Exposes the engine via REST API. A client:
1. Opens a table session
2. Builds the roster
3. Starts the game (balls are dealt secretly)
4. Reports pocketed balls
5. Shows the notifications and state it gets back

All state is session-scoped. No accounts, no persistence.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    CreatePlayerRequest,
    PocketBallRequest,
    # Responses
    CommandResponse,
    GameStateResponse,
    SessionListResponse,
    EndSessionResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    HistoryEventInfo,
    NotificationInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "CreatePlayerRequest",
    "PocketBallRequest",
    # Responses
    "CommandResponse",
    "GameStateResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "HistoryEventInfo",
    "NotificationInfo",
    # Service
    "APIService",
    "create_app",
]
