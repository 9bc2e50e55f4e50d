"""
Game session for Infinity TicTacToe.

A session owns one game, the game mode and the AI. A driver (the console
in main.py, or any other front end) sends it commands and renders the
snapshots it returns.
"""

import logging
import random
import threading
from enum import Enum
from typing import Optional, Dict

from .player import Player
from .config import AIConfig, Strategy
from .game_state import GameState, GameSnapshot
from .move_validator import InvalidMove
from .ai_player import AIPlayer

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Who plays player two, and how strong the AI is."""
    PVP = "pvp"                # Two humans
    PVE_EASY = "easy"          # Random moves
    PVE_HARD = "hard"          # Heuristic rules
    PVE_EXPERT = "expert"      # Bounded minimax

    @property
    def strategy(self) -> Optional[Strategy]:
        """The AI strategy for this mode (None in PvP)."""
        return _MODE_STRATEGIES.get(self)

    @property
    def has_ai(self) -> bool:
        return self != GameMode.PVP


_MODE_STRATEGIES = {
    GameMode.PVE_EASY: Strategy.RANDOM,
    GameMode.PVE_HARD: Strategy.HEURISTIC,
    GameMode.PVE_EXPERT: Strategy.BOUNDED_SEARCH,
}


class GameSession:
    """
    One game at a time, one move at a time.

    Commands:
    - apply_placement(index): a human move
    - request_ai_move(): let the AI play for its side
    - restart(): new game, same mode
    - change_mode(mode): new game, new mode

    Only one command may be in flight. A second one arriving while the
    first is still running is rejected with InvalidMove.
    """

    # The AI always plays the second player
    AI_PLAYER = Player.TWO

    def __init__(
        self,
        mode: GameMode = GameMode.PVP,
        rng: Optional[random.Random] = None,
        search_depth: Optional[int] = None
    ):
        """
        Initialize the session.

        Args:
            mode: Game mode.
            rng: Random source for the AI.
            search_depth: Plies for the bounded search (expert mode).
        """
        self.mode = mode
        self.state = GameState()
        self.rng = rng or random.Random()
        self.search_depth = search_depth
        self.ai = self._create_ai()

        # Held while a move is being applied or computed
        self._move_lock = threading.Lock()

    def _create_ai(self) -> Optional[AIPlayer]:
        if not self.mode.has_ai:
            return None
        if self.search_depth is not None:
            config = AIConfig(strategy=self.mode.strategy, search_depth=self.search_depth)
        else:
            config = AIConfig(strategy=self.mode.strategy)
        return AIPlayer(config, rng=self.rng)

    @property
    def is_ai_turn(self) -> bool:
        """True when the driver should call request_ai_move() next."""
        return (
            self.mode.has_ai
            and not self.state.is_game_over
            and self.state.current_player == self.AI_PLAYER
        )

    def snapshot(self) -> GameSnapshot:
        return self.state.snapshot()

    def apply_placement(self, index: int) -> GameSnapshot:
        """
        Place a stone for the human whose turn it is.

        Raises:
            InvalidMove: Illegal cell, game over, AI's turn, or another
                move still in flight.
        """
        with self._claim_move():
            if self.is_ai_turn:
                raise InvalidMove("It's the AI's turn!")
            return self.state.place(index)

    def request_ai_move(self) -> Optional[GameSnapshot]:
        """
        Let the AI play its move.

        Returns:
            The new snapshot, or None if the AI found no move.

        Raises:
            InvalidMove: Not the AI's turn, or another move still in flight.
        """
        with self._claim_move():
            if not self.is_ai_turn:
                raise InvalidMove("It's not the AI's turn!")

            move = self.ai.select_move(
                self.state.board,
                self.state.queues,
                player=self.AI_PLAYER
            )
            if move is None:
                logger.warning("AI found no move")
                return None
            return self.state.place(move)

    def restart(self) -> GameSnapshot:
        """Start a new game in the current mode."""
        with self._claim_move():
            logger.info("Restarting game (%s)", self.mode.value)
            return self.state.reset()

    def change_mode(self, mode: GameMode) -> GameSnapshot:
        """Switch mode and start a new game."""
        with self._claim_move():
            logger.info("Changing mode: %s -> %s", self.mode.value, mode.value)
            self.mode = mode
            self.ai = self._create_ai()
            return self.state.reset()

    def oldest_stones(self) -> Dict[Player, int]:
        """For each player with a full hand, the stone that vanishes next."""
        oldest = {}
        for player in Player:
            index = self.state.oldest_stone(player)
            if index is not None:
                oldest[player] = index
        return oldest

    def stone_counts(self) -> Dict[Player, int]:
        """Stones each player has on the board."""
        return {player: self.state.stone_count(player) for player in Player}

    def _claim_move(self) -> "_MoveClaim":
        return _MoveClaim(self._move_lock)


class _MoveClaim:
    """Holds the session's move lock without waiting for it."""

    def __init__(self, lock: threading.Lock):
        self._lock = lock

    def __enter__(self):
        if not self._lock.acquire(blocking=False):
            raise InvalidMove("Another move is still in progress!")
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self._lock.release()
        return False
