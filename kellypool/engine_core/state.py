"""
Game State - Immutable snapshot of one Kelly Pool table.

Design principles:
- Immutable: every command returns a new GameState, nothing is edited in place
- Complete: the 15 balls are always accounted for (pool, hands, pocketed)
- Observable: history records what happened, in order
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


TOTAL_BALLS = 15
MAX_PLAYERS = 15
MIN_PLAYERS = 2
EIGHT_BALL = 8


def full_rack() -> tuple[int, ...]:
    """All numbered balls, 1..15."""
    return tuple(range(1, TOTAL_BALLS + 1))


class GamePhase(Enum):
    """High-level game phases, derived from the state flags."""
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class PlayerState:
    """
    State for a single player.

    `balls` keeps the dealt order for display; membership is what matters.
    `is_active` False means out of the round, either finished or scratched.
    """
    player_id: str
    name: str
    balls: tuple[int, ...] = ()
    score: int = 0
    is_active: bool = True

    def owns(self, ball_number: int) -> bool:
        return ball_number in self.balls

    def without_ball(self, ball_number: int) -> PlayerState:
        """Return new player state with the ball removed from hand."""
        return self._copy_with(balls=tuple(b for b in self.balls if b != ball_number))

    def _copy_with(self, **kwargs) -> PlayerState:
        """Create a copy with some fields replaced."""
        return PlayerState(
            player_id=kwargs.get("player_id", self.player_id),
            name=kwargs.get("name", self.name),
            balls=kwargs.get("balls", self.balls),
            score=kwargs.get("score", self.score),
            is_active=kwargs.get("is_active", self.is_active),
        )


@dataclass(frozen=True)
class HistoryEvent:
    """One line of the game log."""
    timestamp: float
    player_name: str
    action: str
    ball_number: int | None = None

    def describe(self) -> str:
        text = f"{self.player_name} {self.action}"
        if self.ball_number is not None:
            text += f" {self.ball_number}"
        return text


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    # Roster, in turn order
    players: tuple[PlayerState, ...] = ()

    # Ball locations
    available_balls: tuple[int, ...] = field(default_factory=full_rack)
    pocketed_balls: tuple[int, ...] = ()

    # Lifecycle
    game_started: bool = False
    game_finished: bool = False
    current_turn: int = 0
    winner_id: str | None = None

    history: tuple[HistoryEvent, ...] = ()

    @property
    def phase(self) -> GamePhase:
        if self.game_finished:
            return GamePhase.GAME_OVER
        if self.game_started:
            return GamePhase.PLAYING
        return GamePhase.SETUP

    @property
    def in_progress(self) -> bool:
        return self.game_started and not self.game_finished

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> PlayerState | None:
        """Get the player whose turn it is, if the roster is not empty."""
        if 0 <= self.current_turn < len(self.players):
            return self.players[self.current_turn]
        return None

    @property
    def winner(self) -> PlayerState | None:
        if self.winner_id is None:
            return None
        return self.get_player(self.winner_id)

    @property
    def active_players(self) -> list[PlayerState]:
        return [p for p in self.players if p.is_active]

    @property
    def available_balls_count(self) -> int:
        return len(self.available_balls)

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def get_player_by_name(self, name: str) -> PlayerState | None:
        for p in self.players:
            if p.name == name:
                return p
        return None

    def owner_of(self, ball_number: int) -> PlayerState | None:
        """The active player holding this ball, if any."""
        for p in self.players:
            if p.is_active and p.owns(ball_number):
                return p
        return None

    def all_balls(self) -> list[int]:
        """Every ball the state knows about, duplicates included."""
        balls = list(self.available_balls) + list(self.pocketed_balls)
        for p in self.players:
            balls.extend(p.balls)
        return balls

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def with_event(self, event: HistoryEvent) -> GameState:
        """Return new state with an event appended to history."""
        return self._copy_with(history=self.history + (event,))

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            players=kwargs.get("players", self.players),
            available_balls=kwargs.get("available_balls", self.available_balls),
            pocketed_balls=kwargs.get("pocketed_balls", self.pocketed_balls),
            game_started=kwargs.get("game_started", self.game_started),
            game_finished=kwargs.get("game_finished", self.game_finished),
            current_turn=kwargs.get("current_turn", self.current_turn),
            winner_id=kwargs.get("winner_id", self.winner_id),
            history=kwargs.get("history", self.history),
        )
