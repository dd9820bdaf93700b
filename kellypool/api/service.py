"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine actions
2. Routes them through the session manager
3. Formats state and notifications for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    CreatePlayerRequest,
    PocketBallRequest,
    # Responses
    CommandResponse,
    GameStateResponse,
    # Shared
    PlayerInfo,
    HistoryEventInfo,
    NotificationInfo,
    # Enums
    SessionStatus,
    NotificationSeverity,
    ErrorCode,
)
from ..engine_core.action import Action, ActionResult
from ..engine_core.state import GameState, PlayerState
from ..session import SessionManager, TableSession


@dataclass
class APIService:
    """
    Main API service for scoreboard clients.

    Usage:
        service = APIService()

        table = service.create_session(CreateSessionRequest())
        service.create_player(table.session_id, CreatePlayerRequest(name="Ann"))
        service.start_game(table.session_id)
        service.pocket_ball(table.session_id, PocketBallRequest(ball_number=3))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """Open a new table with an empty roster."""
        session = self.session_manager.create_session(seed=request.seed)
        return self._state_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse:
        """
        Get full table state.

        Raises:
            SessionNotFoundError: if the session does not exist
        """
        session = self.session_manager.require_session(session_id)
        return self._state_response(session)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    # =========================================================================
    # Commands
    # =========================================================================

    def create_player(self, session_id: str, request: CreatePlayerRequest) -> CommandResponse:
        return self._run(session_id, Action.create_player(request.name))

    def remove_player(self, session_id: str, player_id: str) -> CommandResponse:
        return self._run(session_id, Action.remove_player(player_id))

    def start_game(self, session_id: str) -> CommandResponse:
        return self._run(session_id, Action.start_game())

    def pocket_ball(self, session_id: str, request: PocketBallRequest) -> CommandResponse:
        return self._run(session_id, Action.pocket_ball(request.ball_number))

    def reset_game(self, session_id: str) -> CommandResponse:
        return self._run(session_id, Action.reset_game())

    def _run(self, session_id: str, action: Action) -> CommandResponse:
        result: ActionResult = self.session_manager.dispatch(session_id, action)
        session = self.session_manager.require_session(session_id)

        return CommandResponse(
            success=result.success,
            error=result.error,
            error_code=_error_code(result),
            notifications=[
                NotificationInfo(
                    severity=NotificationSeverity(n.severity.value),
                    message=n.message,
                )
                for n in session.drain_notifications()
            ],
            state=self._state_response(session),
        )

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _state_response(self, session: TableSession) -> GameStateResponse:
        state = session.game_state
        current = state.current_player if state.in_progress else None
        winner = state.winner

        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            game_started=state.game_started,
            game_finished=state.game_finished,
            current_turn=state.current_turn,
            current_player_id=current.player_id if current else None,
            players=[
                _player_info(p, is_current=current is not None and p.player_id == current.player_id)
                for p in state.players
            ],
            available_balls=list(state.available_balls),
            available_balls_count=state.available_balls_count,
            pocketed_balls=list(state.pocketed_balls),
            winner=_player_info(winner) if winner else None,
            history=_history_info(state),
        )


def _error_code(result: ActionResult) -> ErrorCode | None:
    """Map engine error codes onto the API enum; unknown ones are internal."""
    if result.error_code is None:
        return None
    try:
        return ErrorCode(result.error_code.value)
    except ValueError:
        return ErrorCode.INTERNAL_ERROR


def _player_info(player: PlayerState, is_current: bool = False) -> PlayerInfo:
    return PlayerInfo(
        player_id=player.player_id,
        name=player.name,
        balls=list(player.balls),
        ball_count=len(player.balls),
        score=player.score,
        is_active=player.is_active,
        is_current_turn=is_current,
    )


def _history_info(state: GameState) -> list[HistoryEventInfo]:
    return [
        HistoryEventInfo(
            timestamp=event.timestamp,
            player_name=event.player_name,
            action=event.action,
            ball_number=event.ball_number,
            text=event.describe(),
        )
        for event in state.history
    ]
