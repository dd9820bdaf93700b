"""
Invariant checks over randomly played games.

Each game uses its own seed for both the deal and the sequence of balls
reported, so failures are reproducible.
"""

import random

import pytest

from ..engine_core.state import GameState
from ..engine_core.reducer import Reducer
from ..engine_core.dealing import seeded_shuffler


def play_random_game(seed, max_steps=200):
    """Yield every state reached while playing a random game."""
    rng = random.Random(seed)
    reducer = Reducer(shuffle=seeded_shuffler(seed))

    state = GameState()
    for i in range(rng.randint(2, 8)):
        state = reducer.create_player(state, f"Player {i}").new_state
    state = reducer.start_game(state).new_state
    yield state

    for _ in range(max_steps):
        if not state.in_progress:
            break
        state = reducer.pocket_ball(state, rng.randint(1, 15)).new_state
        yield state


@pytest.mark.parametrize("seed", range(40))
def test_random_play_keeps_invariants(seed):
    previous_scores = {}

    for state in play_random_game(seed):
        # Every ball is exactly once in the pool, a hand, or the pockets
        assert sorted(state.all_balls()) == list(range(1, 16))

        # Scores never go down or below zero
        for player in state.players:
            assert player.score >= previous_scores.get(player.player_id, 0) >= 0
            previous_scores[player.player_id] = player.score

        if state.in_progress:
            assert state.players[state.current_turn].is_active

        if state.game_finished:
            assert state.winner is not None
            assert state.winner in state.players


@pytest.mark.parametrize("seed", range(10))
def test_roster_fixed_once_started(seed):
    states = list(play_random_game(seed))
    ids = [p.player_id for p in states[0].players]

    assert all([p.player_id for p in s.players] == ids for s in states)
