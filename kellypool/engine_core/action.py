"""
Action System - Commands, notifications, and results.

Actions represent everything a caller can ask of the table:
1. Roster commands (create player, remove player)
2. Game commands (start, pocket a ball, reset)

All state changes flow through actions. The reducer answers every action
with an ActionResult carrying the new state and the notifications the
presentation layer should surface.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Roster
    CREATE_PLAYER = "create_player"
    REMOVE_PLAYER = "remove_player"

    # Game flow
    START_GAME = "start_game"
    POCKET_BALL = "pocket_ball"
    RESET_GAME = "reset_game"


class Severity(Enum):
    """How the presentation layer should classify a notification."""
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_ROSTER = "INVALID_ROSTER"
    INSUFFICIENT_PLAYERS = "INSUFFICIENT_PLAYERS"
    INVALID_GAME_STATE = "INVALID_GAME_STATE"
    ILLEGAL_POCKET = "ILLEGAL_POCKET"
    NO_HANDLER = "NO_HANDLER"
    HANDLER_ERROR = "HANDLER_ERROR"


@dataclass(frozen=True)
class Notification:
    """A human-readable message for the caller to display."""
    severity: Severity
    message: str

    @classmethod
    def info(cls, message: str) -> Notification:
        return cls(Severity.INFO, message)

    @classmethod
    def success(cls, message: str) -> Notification:
        return cls(Severity.SUCCESS, message)

    @classmethod
    def error(cls, message: str) -> Notification:
        return cls(Severity.ERROR, message)


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    player_id: str | None = None
    name: str | None = None
    ball_number: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are:
    - Validated before application
    - Applied atomically by the reducer
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def create_player(cls, name: str) -> Action:
        """Factory for adding a player to the roster."""
        return cls(
            action_type=ActionType.CREATE_PLAYER,
            payload=ActionPayload(name=name),
        )

    @classmethod
    def remove_player(cls, player_id: str) -> Action:
        """Factory for removing a player from the roster."""
        return cls(
            action_type=ActionType.REMOVE_PLAYER,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def start_game(cls) -> Action:
        return cls(action_type=ActionType.START_GAME)

    @classmethod
    def pocket_ball(cls, ball_number: int) -> Action:
        """Factory for a ball going into a pocket."""
        return cls(
            action_type=ActionType.POCKET_BALL,
            payload=ActionPayload(ball_number=ball_number),
        )

    @classmethod
    def reset_game(cls) -> Action:
        return cls(action_type=ActionType.RESET_GAME)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action was applied
    - New state (the unchanged input state on rejection)
    - Error message and code (on rejection or penalty)
    - Notifications for the presentation layer
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    notifications: list[Notification] = field(default_factory=list)

    @classmethod
    def failure(
        cls,
        state: Any,
        error: str,
        error_code: ErrorCode | None = None,
    ) -> ActionResult:
        """Create a failure result that leaves the state untouched."""
        return cls(
            success=False,
            new_state=state,
            error=error,
            error_code=error_code,
            notifications=[Notification.error(error)],
        )

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        notifications: list[Notification] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            notifications=notifications or [],
        )

    @property
    def messages(self) -> list[str]:
        return [n.message for n in self.notifications]
