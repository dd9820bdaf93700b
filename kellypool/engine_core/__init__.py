"""
Engine Core - Deterministic Kelly Pool state management.

The engine is the runtime that:
1. Holds an immutable GameState
2. Accepts Actions (roster changes, start, pocket, reset)
3. Applies them via the reducer, returning a new state and notifications
4. Deals the rack through an injectable shuffler
"""

from .state import (
    GameState,
    GamePhase,
    PlayerState,
    HistoryEvent,
    TOTAL_BALLS,
    MAX_PLAYERS,
    MIN_PLAYERS,
    EIGHT_BALL,
)
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode, Notification, Severity
from .dealing import Shuffler, seeded_shuffler, deal_balls, hand_sizes
from .reducer import Reducer, apply_action, advance_turn, ordinal

__all__ = [
    "GameState",
    "GamePhase",
    "PlayerState",
    "HistoryEvent",
    "TOTAL_BALLS",
    "MAX_PLAYERS",
    "MIN_PLAYERS",
    "EIGHT_BALL",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "Notification",
    "Severity",
    "Shuffler",
    "seeded_shuffler",
    "deal_balls",
    "hand_sizes",
    "Reducer",
    "apply_action",
    "advance_turn",
    "ordinal",
]
