"""
FastAPI Application - REST API for scoreboard clients.

Endpoints:
    GET    /health                                  Liveness check
    POST   /api/v1/sessions                         Open a table
    GET    /api/v1/sessions                         List open tables
    GET    /api/v1/sessions/{id}                    Get table state
    DELETE /api/v1/sessions/{id}                    Close a table
    POST   /api/v1/sessions/{id}/players            Add a player
    DELETE /api/v1/sessions/{id}/players/{pid}      Remove a player
    POST   /api/v1/sessions/{id}/start              Deal and start
    POST   /api/v1/sessions/{id}/pocket             Report a pocketed ball
    POST   /api/v1/sessions/{id}/reset              Reset the game

Game rule refusals are not HTTP errors: commands answer 200 with
`success=false` and an error notification. Only an unknown session (404) and
malformed requests (422) are transport errors.
"""

from typing import Optional
import logging

from .. import __version__
from ..config import Settings
from ..errors import SessionNotFoundError


logger = logging.getLogger(__name__)


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        CreatePlayerRequest,
        PocketBallRequest,
        # Response models
        CommandResponse,
        GameStateResponse,
        SessionListResponse,
        EndSessionResponse,
        ErrorResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from ..session import SessionManager

    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Kelly Pool API",
        description="""
Scorekeeping for Kelly Pool tables.

## Flow

1. `POST /sessions` to open a table
2. `POST /players` for each player (2-15)
3. `POST /start` deals the balls secretly
4. `POST /pocket` for every ball that drops
5. `POST /reset` to play again with the same roster

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_ROSTER` | Roster change refused |
| `INSUFFICIENT_PLAYERS` | Fewer than 2 players at start |
| `INVALID_GAME_STATE` | Command not allowed in this phase |
| `ILLEGAL_POCKET` | Ball not owned by an active player |
| `SESSION_NOT_FOUND` | Session does not exist |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(
        session_manager=SessionManager(seed=settings.seed),
    )
    app.state.api_service = api_service

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

    @app.exception_handler(SessionNotFoundError)
    async def session_not_found(request: Request, exc: SessionNotFoundError) -> JSONResponse:
        return make_error_response(
            ErrorCode.SESSION_NOT_FOUND,
            str(exc),
            status_code=404,
            details={"session_id": exc.session_id},
        )

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        api_service.session_manager.cleanup_stale_sessions(settings.session_ttl)
        return HealthResponse(status="ok", version=__version__)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        status_code=201,
        tags=["Sessions"],
        summary="Open a new table",
    )
    async def create_session(body: Optional[CreateSessionRequest] = None) -> GameStateResponse:
        """Open a table with an empty roster. Pass `seed` for reproducible deals."""
        return api_service.create_session(body or CreateSessionRequest())

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List open tables",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get table state",
    )
    async def get_session(session_id: str) -> GameStateResponse:
        return api_service.get_game_state(session_id)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="Close a table",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Roster Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/players",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Roster"],
        summary="Add a player",
    )
    async def create_player(session_id: str, body: CreatePlayerRequest) -> CommandResponse:
        return api_service.create_player(session_id, body)

    @app.delete(
        "/api/v1/sessions/{session_id}/players/{player_id}",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Roster"],
        summary="Remove a player",
    )
    async def remove_player(session_id: str, player_id: str) -> CommandResponse:
        return api_service.remove_player(session_id, player_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/start",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Deal the balls and start",
    )
    async def start_game(session_id: str) -> CommandResponse:
        return api_service.start_game(session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/pocket",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Report a pocketed ball",
    )
    async def pocket_ball(session_id: str, body: PocketBallRequest) -> CommandResponse:
        """
        Report that a ball went down.

        The engine works out whose ball it was, finishes and wins,
        8-ball scratches, and whose turn is next.
        """
        return api_service.pocket_ball(session_id, body)

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=CommandResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Reset with the same roster",
    )
    async def reset_game(session_id: str) -> CommandResponse:
        return api_service.reset_game(session_id)

    logger.info("Kelly Pool API ready (%s)", settings.env)
    return app
