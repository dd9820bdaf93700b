"""
Exceptions raised outside the engine.

The reducer never raises for game rule violations; those come back as
ActionResult values. These are for the hosting layers.
"""


class KellyPoolError(Exception):
    """Base exception for the kellypool package."""
    pass


class SessionNotFoundError(KellyPoolError):
    """Raised when a table session id is unknown or has ended."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")
