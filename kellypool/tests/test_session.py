"""
Tests for table sessions.

Tests:
- Session lifecycle
- Dispatch keeps the latest state
- Notification feed
- Cleanup
"""

import time

import pytest

from ..engine_core.action import Action, Severity
from ..engine_core.reducer import Reducer
from ..errors import SessionNotFoundError
from ..session import SessionManager, SessionState
from .conftest import in_order


@pytest.fixture
def manager():
    return SessionManager(seed=7)


@pytest.fixture
def session(manager):
    session = manager.create_session()
    session.reducer = Reducer(shuffle=in_order)
    return session


def seat_two(manager, session):
    manager.dispatch(session.session_id, Action.create_player("Alice"))
    manager.dispatch(session.session_id, Action.create_player("Bob"))


class TestSessionLifecycle:

    def test_create_session(self, manager):
        session = manager.create_session()

        assert session.state == SessionState.CREATED
        assert session.game_state.players == ()
        assert manager.get_session(session.session_id) is session
        assert session.session_id in manager.list_active_sessions()

    def test_end_session(self, manager, session):
        assert manager.end_session(session.session_id)
        assert manager.get_session(session.session_id) is None
        assert session.state == SessionState.ABANDONED
        assert not manager.end_session(session.session_id)

    def test_ended_session_not_listed(self, manager, session):
        other = manager.create_session()

        manager.end_session(session.session_id)

        assert manager.list_active_sessions() == [other.session_id]

    def test_end_finished_session_keeps_game_over(self, manager, session):
        seat_two(manager, session)
        manager.dispatch(session.session_id, Action.start_game())
        for ball in range(1, 9):
            manager.dispatch(session.session_id, Action.pocket_ball(ball))
        assert session.state == SessionState.GAME_OVER

        manager.end_session(session.session_id)
        assert session.state == SessionState.GAME_OVER

    def test_unknown_session(self, manager):
        with pytest.raises(SessionNotFoundError) as exc_info:
            manager.dispatch("missing", Action.start_game())
        assert exc_info.value.session_id == "missing"

    def test_cleanup_stale_sessions(self, manager, session):
        fresh = manager.create_session()
        session.updated_at = time.time() - 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == [session.session_id]
        assert manager.get_session(fresh.session_id) is fresh


class TestDispatch:

    def test_dispatch_stores_new_state(self, manager, session):
        seat_two(manager, session)

        assert [p.name for p in session.game_state.players] == ["Alice", "Bob"]

    def test_session_state_follows_game(self, manager, session):
        seat_two(manager, session)
        manager.dispatch(session.session_id, Action.start_game())
        assert session.state == SessionState.ACTIVE

        manager.dispatch(session.session_id, Action.reset_game())
        assert session.state == SessionState.CREATED

    def test_rejected_command_keeps_state(self, manager, session):
        before = session.game_state
        result = manager.dispatch(session.session_id, Action.start_game())

        assert not result.success
        assert session.game_state is before

    def test_notifications_collect_until_drained(self, manager, session):
        seat_two(manager, session)
        manager.dispatch(session.session_id, Action.create_player("Alice"))

        notifications = session.drain_notifications()

        assert [n.severity for n in notifications] == [
            Severity.SUCCESS, Severity.SUCCESS, Severity.ERROR,
        ]
        assert session.drain_notifications() == []

    def test_seed_makes_deals_repeatable(self):
        hands = []
        for _ in range(2):
            manager = SessionManager(seed=99)
            session = manager.create_session()
            seat_two(manager, session)
            manager.dispatch(session.session_id, Action.start_game())
            hands.append([p.balls for p in session.game_state.players])

        assert hands[0] == hands[1]
