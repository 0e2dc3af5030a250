"""Interactive terminal front end.

Usage:
    python -m voxelclash [--config config.json] [--strategy blocking] [--seed 42] [--delay 0.5]
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from typing import Callable, List, Optional, TextIO

from voxelclash.common.typed_config import GameConfig, TypedConfigReader, load_config_file
from voxelclash.core.constants import Owner, TurnPhase, Winner
from voxelclash.core.errors import VoxelClashError
from voxelclash.core.game import TurnController
from voxelclash.core.grid import coords_to_index, is_valid_index
from voxelclash.core.scheduler import ManualScheduler
from voxelclash.core.state import Event, EventType, StateNotifier

logger = logging.getLogger("voxelclash")

SIDE_LABELS = {Owner.PLAYER: "You", Owner.COMPUTER: "Computer"}
RESULT_TEXT = {Winner.PLAYER: "You win!", Winner.COMPUTER: "Computer wins!", Winner.TIE: "It's a tie!"}

HELP_TEXT = """
Claim cells of the 3x3x3 grid. Groups of 3+ orthogonally adjacent cells score.

Commands:
  x,y,z      Claim the cell at coordinates (each 0-2)
  <index>    Claim a cell by index (0-26, index = x*9 + y*3 + z)
  board      Show the grid
  restart    Start a new game
  help       Show this help
  quit/exit  Leave
"""


def parse_cell(text: str) -> Optional[int]:
    """Parse ``x,y,z`` or a bare index; None when the text is not a valid cell."""
    text = text.strip()
    try:
        if "," in text:
            parts = [int(p) for p in text.split(",")]
            if len(parts) != 3:
                return None
            return coords_to_index(*parts)
        index = int(text)
    except (ValueError, VoxelClashError):
        return None
    return index if is_valid_index(index) else None


class EventPrinter:
    """Prints game events for a terminal user."""

    def __init__(self, out: TextIO) -> None:
        self.out = out

    def __call__(self, event: Event) -> None:
        payload = event.payload or {}
        if event.event_type is EventType.CELL_CLAIMED:
            print(f"{SIDE_LABELS[payload['side']]} claimed {payload['coords']} (cell {payload['index']})", file=self.out)
        elif event.event_type is EventType.SCORE_CHANGED:
            print(f"  {SIDE_LABELS[payload['side']]} score: {payload['score']}", file=self.out)
        elif event.event_type is EventType.COMBO_CELLS:
            print(f"  Combo! cells {sorted(payload['cells'])}", file=self.out)
        elif event.event_type is EventType.TURN_CHANGED:
            print("Your turn!" if payload["side"] is Owner.PLAYER else "Computer's turn...", file=self.out)
        elif event.event_type is EventType.GAME_OVER:
            scores = payload["scores"]
            print(
                f"Game Over! {RESULT_TEXT[payload['winner']]} "
                f"(you {scores[Owner.PLAYER]}, computer {scores[Owner.COMPUTER]})",
                file=self.out,
            )


class TerminalGame:
    def __init__(
        self,
        config: GameConfig,
        out: TextIO = sys.stdout,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.out = out
        self.sleep = sleep
        self.scheduler = ManualScheduler()
        self.notifier = StateNotifier(logger=lambda msg: logger.error(msg))
        self.notifier.subscribe_all(EventPrinter(out))
        self.game = TurnController(
            notifier=self.notifier,
            scheduler=self.scheduler,
            rng=random.Random(config.seed),
            config=config,
        )

    def show_board(self) -> None:
        print(self.game.grid.render_layers(), file=self.out)

    def advance(self) -> None:
        """Let the opponent move after its pacing delay."""
        delay = self.scheduler.next_delay
        if delay is None:
            return
        self.sleep(delay)
        self.scheduler.run_pending()
        if self.game.phase is TurnPhase.PLAYER_TURN:
            self.show_board()

    def handle(self, command: str) -> bool:
        """Process one input line. Returns False when the user quits."""
        command = command.strip().lower()
        if not command:
            return True
        if command in ("quit", "exit"):
            return False
        if command == "help":
            print(HELP_TEXT, file=self.out)
        elif command == "board":
            self.show_board()
        elif command == "restart":
            self.game.restart()
            self.show_board()
        else:
            index = parse_cell(command)
            if index is None:
                print(f"Unknown command or cell: {command!r}. Type 'help'.", file=self.out)
                return True
            result = self.game.submit_player_move(index)
            if not result.success:
                print(f"Move rejected: {result.message}", file=self.out)
                return True
            self.advance()
            if self.game.phase is TurnPhase.GAME_OVER:
                self.show_board()
                print("Type 'restart' to play again or 'quit' to leave.", file=self.out)
        return True

    def run(self, lines: Optional[List[str]] = None) -> None:
        print("=== VoxelClash 3x3x3 ===", file=self.out)
        print("Type 'help' for commands", file=self.out)
        self.game.start()
        self.show_board()
        source = iter(lines) if lines is not None else None
        while True:
            try:
                line = next(source) if source is not None else input("\n> ")
            except (EOFError, StopIteration):
                break
            except KeyboardInterrupt:
                print("\nUse 'quit' to exit", file=self.out)
                continue
            if not self.handle(line):
                print("Goodbye!", file=self.out)
                break


def build_config(args: argparse.Namespace) -> GameConfig:
    config_dict = load_config_file(args.config) if args.config else {}
    game_section = dict(config_dict.get("game") or {})
    for key in ("ai_strategy", "seed", "ai_move_delay"):
        value = getattr(args, key)
        if value is not None:
            game_section[key] = value
    return TypedConfigReader({**config_dict, "game": game_section}).get_game()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="voxelclash", description="Play VoxelClash in the terminal.")
    parser.add_argument("--config", help="JSON config file with a 'game' section")
    parser.add_argument("--strategy", dest="ai_strategy", help="Opponent strategy (blocking, random)")
    parser.add_argument("--seed", type=int, help="Seed for the opponent's random moves")
    parser.add_argument("--delay", dest="ai_move_delay", type=float, help="Opponent pacing delay in seconds")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        TerminalGame(config).run()
    except VoxelClashError as e:
        logger.debug("Startup failed", exc_info=True)
        print(f"Error: {e.user_message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
