"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state + notifications
- Validates before applying
- Rejections leave the state untouched and carry one error notification
- Randomness only through the injected shuffler
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import logging
import time
import uuid

from .state import (
    GameState,
    PlayerState,
    HistoryEvent,
    MAX_PLAYERS,
    MIN_PLAYERS,
    EIGHT_BALL,
)
from .action import Action, ActionType, ActionResult, ErrorCode, Notification
from .dealing import Shuffler, deal_balls, seeded_shuffler


logger = logging.getLogger(__name__)

SYSTEM_NAME = "System"
GAME_NAME = "Game"


def ordinal(position: int) -> str:
    """1 -> '1st', 2 -> '2nd', 3 -> '3rd', anything else -> 'Nth'."""
    if position == 1:
        return "1st"
    if position == 2:
        return "2nd"
    if position == 3:
        return "3rd"
    return f"{position}th"


def advance_turn(state: GameState) -> GameState:
    """
    Move the turn to the next active player, wrapping around the roster.

    With nobody active there is no one to hand the turn to; the state is
    returned unchanged.
    """
    if not state.active_players:
        logger.debug("No active players, turn stays at %d", state.current_turn)
        return state

    turn = state.current_turn
    while True:
        turn = (turn + 1) % state.num_players
        if state.players[turn].is_active:
            break
    return state._copy_with(current_turn=turn)


def _new_player_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The shuffler, clock and id factory are injectable for tests.
    """
    shuffle: Shuffler = field(default_factory=seeded_shuffler)
    clock: Callable[[], float] = time.time
    new_player_id: Callable[[], str] = _new_player_id

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state and notifications.
        """
        # Validate action is legal
        validation_error = self._validate_action(state, action)
        if validation_error:
            message, code = validation_error
            return ActionResult.failure(state, message, error_code=code)

        # Dispatch to handler based on action type
        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                state,
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        try:
            return handler(state, action)
        except Exception as e:
            logger.exception("Handler for %s failed", action.action_type.value)
            return ActionResult.failure(state, str(e), error_code=ErrorCode.HANDLER_ERROR)

    # Commands

    def create_player(self, state: GameState, name: str) -> ActionResult:
        return self.apply(state, Action.create_player(name))

    def remove_player(self, state: GameState, player_id: str) -> ActionResult:
        return self.apply(state, Action.remove_player(player_id))

    def start_game(self, state: GameState) -> ActionResult:
        return self.apply(state, Action.start_game())

    def pocket_ball(self, state: GameState, ball_number: int) -> ActionResult:
        return self.apply(state, Action.pocket_ball(ball_number))

    def reset_game(self, state: GameState) -> ActionResult:
        return self.apply(state, Action.reset_game())

    def available_balls_count(self, state: GameState) -> int:
        """Balls still in the undealt pool."""
        return state.available_balls_count

    def _validate_action(
        self, state: GameState, action: Action
    ) -> tuple[str, ErrorCode] | None:
        """
        Validate that an action is legal in the current phase.

        Returns (message, code) if invalid, None if valid.
        """
        if action.action_type == ActionType.CREATE_PLAYER and state.game_started:
            return "Cannot add players once game has started", ErrorCode.INVALID_ROSTER

        if action.action_type == ActionType.REMOVE_PLAYER and state.game_started:
            return "Cannot remove players once game has started", ErrorCode.INVALID_ROSTER

        if action.action_type == ActionType.POCKET_BALL and not state.in_progress:
            return "Game not in progress", ErrorCode.INVALID_GAME_STATE

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.CREATE_PLAYER: self._handle_create_player,
            ActionType.REMOVE_PLAYER: self._handle_remove_player,
            ActionType.START_GAME: self._handle_start_game,
            ActionType.POCKET_BALL: self._handle_pocket_ball,
            ActionType.RESET_GAME: self._handle_reset_game,
        }
        return handlers.get(action_type)

    def _event(self, player_name: str, action: str, ball_number: int | None = None) -> HistoryEvent:
        return HistoryEvent(
            timestamp=self.clock(),
            player_name=player_name,
            action=action,
            ball_number=ball_number,
        )

    def _handle_create_player(self, state: GameState, action: Action) -> ActionResult:
        """Handle a new player joining the roster."""
        name = (action.payload.name or "").strip()

        if state.num_players >= MAX_PLAYERS:
            return ActionResult.failure(
                state, f"Maximum {MAX_PLAYERS} players allowed", ErrorCode.INVALID_ROSTER
            )
        if not name:
            return ActionResult.failure(state, "Player name cannot be empty", ErrorCode.INVALID_ROSTER)
        if state.get_player_by_name(name):
            return ActionResult.failure(state, "Player name already exists", ErrorCode.INVALID_ROSTER)

        player = PlayerState(player_id=self.new_player_id(), name=name)
        new_state = state._copy_with(players=state.players + (player,))
        new_state = new_state.with_event(self._event(name, "joined the game"))

        return ActionResult.success_with_state(
            new_state,
            notifications=[Notification.success(f"{name} added to the game")],
        )

    def _handle_remove_player(self, state: GameState, action: Action) -> ActionResult:
        """Handle a player leaving the roster."""
        player = state.get_player(action.payload.player_id)
        if not player:
            logger.debug("No player with id %s to remove", action.payload.player_id)
            return ActionResult.success_with_state(state)

        new_players = tuple(p for p in state.players if p.player_id != player.player_id)
        new_state = state._copy_with(players=new_players)
        new_state = new_state.with_event(self._event(player.name, "left the game"))

        return ActionResult.success_with_state(
            new_state,
            notifications=[Notification.info(f"{player.name} removed from the game")],
        )

    def _handle_start_game(self, state: GameState, action: Action) -> ActionResult:
        """Handle game start: deal the rack and open play."""
        if state.num_players < MIN_PLAYERS:
            return ActionResult.failure(
                state, f"Need at least {MIN_PLAYERS} players to start", ErrorCode.INSUFFICIENT_PLAYERS
            )
        if state.game_started:
            return ActionResult.failure(state, "Game already started", ErrorCode.INVALID_GAME_STATE)

        players = deal_balls(state.players, state.available_balls, self.shuffle)
        new_state = state._copy_with(
            players=players,
            available_balls=(),
            game_started=True,
            current_turn=0,
        )
        new_state = new_state.with_event(self._event(SYSTEM_NAME, "assigned balls to players"))
        new_state = new_state.with_event(self._event(GAME_NAME, "started"))

        notifications = [
            Notification.info(f"{p.name} got balls: {', '.join(str(b) for b in p.balls)}")
            for p in players
        ]
        notifications.append(Notification.success("Game started!"))

        logger.info("Game started with %d players", len(players))
        return ActionResult.success_with_state(new_state, notifications=notifications)

    def _handle_pocket_ball(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle a ball going into a pocket.

        The 8-ball has its own rules: it wins outright for a player whose
        only remaining ball it is, and is a scratch for the shooter otherwise.
        Any other ball scores for its active owner, or costs the shooter
        their turn when nobody active owns it.
        """
        ball_number = action.payload.ball_number

        if ball_number == EIGHT_BALL:
            return self._pocket_eight_ball(state)

        owner = state.owner_of(ball_number)
        if owner is None:
            return self._illegal_pocket(state)

        return self._pocket_owned_ball(state, owner, ball_number)

    def _pocket_owned_ball(
        self, state: GameState, owner: PlayerState, ball_number: int
    ) -> ActionResult:
        player = owner.without_ball(ball_number)
        finished = not player.balls
        if finished:
            player = player._copy_with(is_active=False)

        new_state = state.with_player(player)._copy_with(
            pocketed_balls=state.pocketed_balls + (ball_number,),
        )
        new_state = new_state.with_event(self._event(owner.name, "pocketed ball", ball_number))
        notifications = [Notification.success(f"{owner.name} pocketed ball {ball_number}")]

        if finished:
            position = sum(1 for p in new_state.players if not p.is_active)
            place = ordinal(position)

            # First to finish scores highest
            player = player._copy_with(score=new_state.num_players - position + 1)
            new_state = new_state.with_player(player)
            new_state = new_state.with_event(self._event(owner.name, f"finished in {place} place"))
            notifications.append(Notification.success(f"{owner.name} finished in {place} place!"))

            active = new_state.active_players
            if len(active) <= 1:
                winner = active[0] if active else player
                new_state = self._declare_winner(new_state, winner, notifications)

        return ActionResult.success_with_state(
            self._advance_turn(new_state),
            notifications=notifications,
        )

    def _pocket_eight_ball(self, state: GameState) -> ActionResult:
        holder = next(
            (p for p in state.active_players if p.balls == (EIGHT_BALL,)),
            None,
        )

        if holder:
            winner = holder._copy_with(
                score=holder.score + 1, balls=(), is_active=False,
            )
            new_state = state.with_player(winner)._copy_with(
                pocketed_balls=state.pocketed_balls + (EIGHT_BALL,),
                game_finished=True,
                winner_id=winner.player_id,
            )
            new_state = new_state.with_event(
                self._event(winner.name, "won by pocketing the 8-ball", EIGHT_BALL)
            )
            logger.info("%s won by pocketing the 8-ball", winner.name)
            return ActionResult.success_with_state(
                new_state,
                notifications=[Notification.success(f"{winner.name} wins the game!")],
            )

        shooter = state.current_player
        new_state = state.with_player(shooter._copy_with(is_active=False))
        new_state = new_state.with_event(
            self._event(shooter.name, "scratched by pocketing the 8-ball early", EIGHT_BALL)
        )
        notifications = [
            Notification.error(f"{shooter.name} scratched by pocketing the 8-ball early!")
        ]

        active = new_state.active_players
        if len(active) == 1:
            new_state = self._declare_winner(new_state, active[0], notifications)

        return ActionResult.success_with_state(
            self._advance_turn(new_state),
            notifications=notifications,
        )

    def _illegal_pocket(self, state: GameState) -> ActionResult:
        """Nobody active owns the ball: the shooter loses the turn."""
        shooter = state.current_player
        message = f"{shooter.name} pocketed someone else's ball, next player's turn"
        return ActionResult(
            success=True,
            new_state=self._advance_turn(state),
            error=message,
            error_code=ErrorCode.ILLEGAL_POCKET,
            notifications=[Notification.error(message)],
        )

    def _declare_winner(
        self,
        state: GameState,
        winner: PlayerState,
        notifications: list[Notification],
    ) -> GameState:
        new_state = state._copy_with(game_finished=True, winner_id=winner.player_id)
        new_state = new_state.with_event(self._event(winner.name, "won the game"))
        notifications.append(Notification.success(f"{winner.name} wins the game!"))
        logger.info("%s won the game", winner.name)
        return new_state

    def _advance_turn(self, state: GameState) -> GameState:
        # The turn pointer is frozen once a winner is known
        if state.game_finished:
            return state
        return advance_turn(state)

    def _handle_reset_game(self, state: GameState, action: Action) -> ActionResult:
        """Handle reset: same roster, fresh rack, history starts over."""
        players = tuple(
            p._copy_with(balls=(), score=0, is_active=True)
            for p in state.players
        )
        new_state = GameState(
            players=players,
            history=(self._event(GAME_NAME, "reset"),),
        )
        return ActionResult.success_with_state(
            new_state,
            notifications=[Notification.info("Game reset")],
        )


def apply_action(
    state: GameState,
    action: Action,
    shuffle: Shuffler | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(shuffle=shuffle) if shuffle else Reducer()
    return reducer.apply(state, action)
