"""
Pytest fixtures for Kelly Pool tests.
"""

import itertools

import pytest

from ..engine_core.state import GameState, PlayerState, full_rack
from ..engine_core.reducer import Reducer


def in_order(balls):
    """Shuffler that keeps the rack in order, so deals are predictable."""
    return list(balls)


@pytest.fixture
def reducer() -> Reducer:
    """Reducer with an identity shuffle, a ticking clock and readable ids."""
    ticks = itertools.count()
    ids = itertools.count(1)
    return Reducer(
        shuffle=in_order,
        clock=lambda: float(next(ticks)),
        new_player_id=lambda: f"p{next(ids)}",
    )


@pytest.fixture
def empty_state() -> GameState:
    """Create an empty game state for testing."""
    return GameState()


@pytest.fixture
def two_player_state(reducer, empty_state) -> GameState:
    """Alice and Bob at the table, game not started."""
    state = reducer.create_player(empty_state, "Alice").new_state
    return reducer.create_player(state, "Bob").new_state


@pytest.fixture
def started_two_player(reducer, two_player_state) -> GameState:
    """
    Two-player game in progress.

    With the identity shuffle Alice holds 1-8 and Bob holds 9-15.
    """
    return reducer.start_game(two_player_state).new_state


@pytest.fixture
def build_state():
    """
    Factory for a game in progress with hand-picked hands.

    Usage:
        state = build_state({"Alice": (3, 8), "Bob": (1, 2)}, current_turn=0)

    Every ball not in a hand is counted as pocketed, so the rack stays whole.
    Names listed in `inactive` start out of the round.
    """
    def _build(hands, current_turn=0, inactive=(), scores=None):
        scores = scores or {}
        players = tuple(
            PlayerState(
                player_id=f"p{i + 1}",
                name=name,
                balls=tuple(balls),
                score=scores.get(name, 0),
                is_active=name not in inactive,
            )
            for i, (name, balls) in enumerate(hands.items())
        )
        held = {b for balls in hands.values() for b in balls}
        return GameState(
            players=players,
            available_balls=(),
            pocketed_balls=tuple(b for b in full_rack() if b not in held),
            game_started=True,
            current_turn=current_turn,
        )

    return _build
