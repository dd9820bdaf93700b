"""
Kelly Pool CLI - Command-line interface for the engine.

Usage:
    kellypool play [--seed N]             Score a table in the terminal
    kellypool serve [--host H] [--port P] Run the REST API
"""

import argparse
import sys
from typing import Callable, Iterable

from .config import Settings, configure_logging
from .engine_core.action import Action, ActionResult
from .session import SessionManager


HELP_TEXT = """Commands:
  add <name>      add a player (before the game starts)
  remove <name>   remove a player (before the game starts)
  start           deal the balls and start
  pocket <n>      ball n went down
  reset           new game, same players
  show            table state
  history         game log
  help            this text
  quit            leave"""


class Scorekeeper:
    """
    Terminal front end for one table.

    Every command goes through the session manager; this class only parses
    lines and prints what comes back.
    """

    def __init__(self, manager: SessionManager, out: Callable[[str], None] = print):
        self.manager = manager
        self.session = manager.create_session()
        self.out = out

    @property
    def state(self):
        return self.session.game_state

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the user quits."""
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return True

        command, arg = parts[0].lower(), (parts[1] if len(parts) > 1 else "")

        if command in ("quit", "exit"):
            return False
        elif command == "help":
            self.out(HELP_TEXT)
        elif command == "add":
            self._dispatch(Action.create_player(arg))
        elif command == "remove":
            self._remove(arg.strip())
        elif command == "start":
            self._dispatch(Action.start_game())
        elif command == "pocket":
            self._pocket(arg.strip())
        elif command == "reset":
            self._dispatch(Action.reset_game())
        elif command == "show":
            self.show()
        elif command == "history":
            self.history()
        else:
            self.out(f"Unknown command: {command} (try 'help')")

        return True

    def show(self):
        state = self.state
        if not state.players:
            self.out("No players yet")
        for index, player in enumerate(state.players):
            marker = ">" if state.in_progress and index == state.current_turn else " "
            status = "" if player.is_active else " (out)"
            balls = ", ".join(str(b) for b in player.balls) or "-"
            self.out(f"{marker} {player.name}{status}  balls: {balls}  score: {player.score}")
        if not state.game_started:
            self.out(f"Balls in rack: {self._rack_count()}")
        if state.winner:
            self.out(f"Winner: {state.winner.name}")

    def _rack_count(self) -> int:
        return self.session.reducer.available_balls_count(self.state)

    def history(self):
        for event in self.state.history:
            self.out(event.describe())

    def _remove(self, name: str):
        player = self.state.get_player_by_name(name)
        if player is None:
            self.out(f"No player named {name!r}")
            return
        self._dispatch(Action.remove_player(player.player_id))

    def _pocket(self, arg: str):
        try:
            ball_number = int(arg)
        except ValueError:
            self.out("Usage: pocket <ball number>")
            return
        if not 1 <= ball_number <= 15:
            self.out("Ball number must be between 1 and 15")
            return
        self._dispatch(Action.pocket_ball(ball_number))

    def _dispatch(self, action: Action) -> ActionResult:
        result = self.manager.dispatch(self.session.session_id, action)
        for notification in self.session.drain_notifications():
            self.out(f"[{notification.severity.value}] {notification.message}")
        return result


def run_repl(scorekeeper: Scorekeeper, lines: Iterable[str]):
    """Feed lines to the scorekeeper until they run out or the user quits."""
    for line in lines:
        if not scorekeeper.handle(line):
            break


def _stdin_lines(prompt: str = "kelly> "):
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Kelly Pool - scorekeeper for Kelly Pool billiards",
        prog="kellypool",
    )
    parser.add_argument("--log-level", help="Logging level (default from KELLYPOOL_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Score a table in the terminal")
    play_parser.add_argument("--seed", type=int, help="Shuffle seed for reproducible deals")

    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    settings = Settings.from_env()
    configure_logging(args.log_level or settings.log_level)

    if args.command == "play":
        cmd_play(args, settings)
    elif args.command == "serve":
        cmd_serve(args, settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(args, settings: Settings):
    """Interactive scoring session."""
    seed = args.seed if args.seed is not None else settings.seed
    scorekeeper = Scorekeeper(SessionManager(seed=seed))
    print("Kelly Pool scorekeeper. Type 'help' for commands.")
    run_repl(scorekeeper, _stdin_lines())


def cmd_serve(args, settings: Settings):
    """Run the API under uvicorn."""
    import uvicorn

    from .api import create_app

    uvicorn.run(create_app(settings=settings), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
