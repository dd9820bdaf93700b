"""
Session Module - Manages ephemeral table sessions.

A session represents one table being scored:
- Created when a scoresheet is opened
- Holds the current game state
- Serializes commands through a single dispatch point
- Destroyed when the table closes

Sessions are EPHEMERAL: nothing outlives the process.
"""

from .manager import SessionManager, TableSession, SessionState

__all__ = [
    "SessionManager",
    "TableSession",
    "SessionState",
]
