"""
Session Manager - Creates and manages table sessions.

A session is one physical pool table being scored:
- Created when someone opens a scoresheet
- Holds the current game state (the only place it lives)
- Runs every command through one dispatch point, in order
- Destroyed when the table is closed or goes stale

PERSISTENCE RULES:
- No database
- State is ephemeral (session-scoped only)
- Reset starts a new game on the same session
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..engine_core.state import GameState, GamePhase
from ..engine_core.action import Action, ActionResult, Notification
from ..engine_core.reducer import Reducer
from ..engine_core.dealing import seeded_shuffler
from ..errors import SessionNotFoundError


logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a table session."""
    CREATED = "created"  # Roster being built
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Winner known, waiting for reset or close
    ABANDONED = "abandoned"  # Closed before the game ended


_PHASE_TO_SESSION = {
    GamePhase.SETUP: SessionState.CREATED,
    GamePhase.PLAYING: SessionState.ACTIVE,
    GamePhase.GAME_OVER: SessionState.GAME_OVER,
}


@dataclass
class TableSession:
    """
    An ephemeral scoring session for one table.

    Contains:
    - The current canonical game state
    - The reducer (with this table's shuffler)
    - Notifications not yet shown to the players
    """
    session_id: str
    created_at: float
    reducer: Reducer = field(default_factory=Reducer)

    state: SessionState = SessionState.CREATED
    game_state: GameState = field(default_factory=GameState)
    updated_at: float = 0.0

    # Notification sink, drained by the presentation layer
    pending_notifications: list[Notification] = field(default_factory=list)

    def drain_notifications(self) -> list[Notification]:
        """Get notifications not yet shown, and forget them."""
        notifications = self.pending_notifications.copy()
        self.pending_notifications.clear()
        return notifications


class SessionManager:
    """
    Manages table sessions.

    Responsibilities:
    - Create sessions
    - Serialize commands per session through dispatch()
    - Clean up closed and idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, seed: int | None = None):
        self._sessions: dict[str, TableSession] = {}
        self._seed = seed

    def create_session(self, seed: int | None = None) -> TableSession:
        """
        Create a new table session.

        Args:
            seed: Shuffle seed for reproducible deals (falls back to the
                manager's seed, then to an unseeded shuffle)

        Returns:
            New TableSession with an empty roster
        """
        seed = seed if seed is not None else self._seed
        now = time.time()
        session = TableSession(
            session_id=str(uuid.uuid4()),
            created_at=now,
            updated_at=now,
            reducer=Reducer(shuffle=seeded_shuffler(seed)),
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> TableSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> TableSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def dispatch(self, session_id: str, action: Action) -> ActionResult:
        """
        Apply an action to a session's game and keep the result.

        Raises:
            SessionNotFoundError: if the session does not exist
        """
        session = self.require_session(session_id)
        result = session.reducer.apply(session.game_state, action)

        if result.new_state is not None:
            session.game_state = result.new_state
            session.state = _PHASE_TO_SESSION[result.new_state.phase]
        session.pending_notifications.extend(result.notifications)
        session.updated_at = time.time()

        return result

    def end_session(self, session_id: str) -> bool:
        """
        End a session and forget its state.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        if session.state != SessionState.GAME_OVER:
            session.state = SessionState.ABANDONED
        session.pending_notifications.clear()
        logger.info("Ended session %s (%s)", session_id, session.state.value)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still held. Ended sessions are dropped."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove sessions with no command for max_age_seconds.

        Returns the IDs that were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.updated_at > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id)

        return to_remove
