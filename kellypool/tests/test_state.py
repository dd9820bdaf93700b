"""
Tests for the game state container.
"""

import dataclasses

import pytest

from ..engine_core.state import GameState, GamePhase, PlayerState, HistoryEvent, full_rack


class TestGameState:

    def test_fresh_state(self):
        state = GameState()

        assert state.players == ()
        assert state.available_balls == tuple(range(1, 16))
        assert state.available_balls_count == 15
        assert state.phase == GamePhase.SETUP
        assert state.current_player is None
        assert state.winner is None
        assert state.history == ()

    def test_phase_follows_flags(self):
        assert GameState(game_started=True).phase == GamePhase.PLAYING
        assert GameState(game_started=True, game_finished=True).phase == GamePhase.GAME_OVER

    def test_winner_resolves_to_current_player_state(self):
        alice = PlayerState(player_id="a", name="Alice", score=1)
        state = GameState(players=(alice,), winner_id="a")

        assert state.winner is alice

    def test_owner_ignores_inactive_players(self):
        state = GameState(players=(
            PlayerState(player_id="a", name="Alice", balls=(1, 2), is_active=False),
            PlayerState(player_id="b", name="Bob", balls=(3,)),
        ))

        assert state.owner_of(1) is None
        assert state.owner_of(3).name == "Bob"

    def test_all_balls_counts_everything(self):
        state = GameState(
            players=(PlayerState(player_id="a", name="Alice", balls=(1, 2)),),
            available_balls=(4, 5),
            pocketed_balls=(3,),
        )
        assert sorted(state.all_balls()) == [1, 2, 3, 4, 5]

    def test_with_player_returns_new_state(self):
        alice = PlayerState(player_id="a", name="Alice")
        state = GameState(players=(alice,))

        new_state = state.with_player(alice._copy_with(score=3))

        assert new_state.players[0].score == 3
        assert state.players[0].score == 0

    def test_clearing_winner(self):
        state = GameState(winner_id="a")
        assert state._copy_with(winner_id=None).winner_id is None

    def test_state_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            GameState().game_started = True


class TestPlayerState:

    def test_without_ball(self):
        player = PlayerState(player_id="a", name="Alice", balls=(4, 1, 9))
        assert player.without_ball(1).balls == (4, 9)
        assert player.balls == (4, 1, 9)

    def test_owns(self):
        player = PlayerState(player_id="a", name="Alice", balls=(4,))
        assert player.owns(4)
        assert not player.owns(5)


def test_history_event_describe():
    assert HistoryEvent(0.0, "Alice", "pocketed ball", 3).describe() == "Alice pocketed ball 3"
    assert HistoryEvent(0.0, "Game", "started").describe() == "Game started"


def test_full_rack():
    assert full_rack() == tuple(range(1, 16))
