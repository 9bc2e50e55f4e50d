"""
Console front end for Infinity TicTacToe.

Play in the terminal against a friend or the AI:
- type a cell number (0-8) to place a stone
- 'r' restarts, 'm <mode>' changes mode, 'q' quits

Each player keeps at most 3 stones; the stone shown in lower case is the
one that vanishes on that player's next move.
"""

import argparse
import logging
import random
import time
from typing import Optional, Tuple

from logic.config import GameConfig
from logic.game_state import GameSnapshot, format_board
from logic.move_validator import InvalidMove
from logic.session import GameSession, GameMode

MODE_NAMES = [mode.value for mode in GameMode]


def parse_command(text: str) -> Tuple[str, Optional[object]]:
    """
    Parse one line of player input.

    Returns:
        ("place", index), ("restart", None), ("mode", GameMode),
        ("quit", None) or ("unknown", text).
    """
    words = text.strip().lower().split()
    if not words:
        return ("unknown", text)

    command = words[0]
    if command.isdigit():
        return ("place", int(command))
    if command in ("q", "quit"):
        return ("quit", None)
    if command in ("r", "restart"):
        return ("restart", None)
    if command in ("m", "mode") and len(words) == 2 and words[1] in MODE_NAMES:
        return ("mode", GameMode(words[1]))

    return ("unknown", text)


def positive_int(text: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


class ConsoleGame:
    """
    Console driver for a GameSession.

    Game flow:
    1. Show the board
    2. Human types a cell (or the AI thinks for a moment and plays)
    3. Repeat until someone wins; then restart, change mode or quit
    """

    def __init__(self, session: GameSession, ai_delay: float = GameConfig.AI_MOVE_DELAY_S):
        self.session = session
        self.ai_delay = ai_delay
        self.is_running = False

    def start(self):
        """Start the game loop."""
        print("\n" + "=" * 40)
        print("   Infinity TicTacToe")
        print(f"   Mode: {self.session.mode.value}")
        print("=" * 40)

        self.is_running = True
        self._show(self.session.snapshot())

        while self.is_running:
            if self.session.is_ai_turn:
                self._ai_move()
                continue

            try:
                text = input("\n> ")
            except EOFError:
                break
            self.handle(text)

        print("Goodbye!")

    def handle(self, text: str):
        """Run one line of player input."""
        command, arg = parse_command(text)

        if command == "quit":
            self.is_running = False
        elif command == "restart":
            self._show(self.session.restart())
        elif command == "mode":
            self._show(self.session.change_mode(arg))
            print(f"Mode set to: {arg.value}")
        elif command == "place":
            if self.session.state.is_game_over:
                print("Game is over! Type 'r' to play again or 'q' to quit.")
                return
            try:
                self._show(self.session.apply_placement(arg))
            except InvalidMove as e:
                print(f"Invalid move: {e}")
        else:
            print(f"Unknown command: {text.strip()!r}. Modes: {', '.join(MODE_NAMES)}")

    def _ai_move(self):
        """Let the AI play, after a short pause."""
        print("\n>>> AI is thinking...")
        time.sleep(self.ai_delay)

        result = self.session.request_ai_move()
        if result is None:
            print("ERROR: AI could not find a move!")
            self.is_running = False
            return
        self._show(result)

    def _show(self, snapshot: GameSnapshot):
        if snapshot.evicted_index is not None:
            print(f"\nStone at {snapshot.evicted_index} vanished!")
        print(format_board(snapshot))
        if snapshot.is_game_over:
            print("Type 'r' to play again, 'm <mode>' to change mode or 'q' to quit.")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Infinity TicTacToe")
    parser.add_argument(
        "--mode",
        choices=MODE_NAMES,
        default=GameMode.PVE_HARD.value,
        help="pvp, or the AI level for player two (default: hard)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the AI's random choices"
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=GameConfig.AI_MOVE_DELAY_S,
        help="Seconds the AI waits before moving"
    )
    parser.add_argument(
        "--depth",
        type=positive_int,
        default=GameConfig.SEARCH_DEPTH,
        help="Search depth for the expert AI"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    session = GameSession(
        mode=GameMode(args.mode),
        rng=random.Random(args.seed),
        search_depth=args.depth
    )
    game = ConsoleGame(session, ai_delay=args.delay)

    try:
        game.start()
    except KeyboardInterrupt:
        print("\n\nGame interrupted by user.")


if __name__ == "__main__":
    main()
