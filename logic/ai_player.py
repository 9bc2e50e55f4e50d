"""
AI player for Infinity TicTacToe.
Chooses moves with one of three strategies: random, heuristic rules, or a
bounded minimax search.
"""

import logging
import random
from typing import Optional, Mapping, Sequence

import numpy as np

from .player import Player, EMPTY
from .config import GameConfig, AIConfig, Strategy
from .win_checker import WinChecker, BoardLike, as_board
from .search import BoundedSearch

logger = logging.getLogger(__name__)

Queues = Mapping[Player, Sequence[int]]


class AIPlayer:
    """
    Picks the next move from a board snapshot.

    The AI never touches the game state: it reads a copy of the board (and
    the stone queues, for the heuristic) and returns a cell index, or None
    when there is no empty cell.
    """

    def __init__(self, config: Optional[AIConfig] = None, rng: Optional[random.Random] = None):
        """
        Initialize the AI player.

        Args:
            config: Default strategy and search depth.
            rng: Random source. Pass a seeded one for reproducible games.
        """
        self.config = config or AIConfig()
        self.rng = rng or random.Random()
        self.win_checker = WinChecker()

    def select_move(
        self,
        board: BoardLike,
        queues: Optional[Queues] = None,
        strategy: Optional[Strategy] = None,
        player: Player = Player.TWO
    ) -> Optional[int]:
        """
        Get the next move for `player`.

        Args:
            board: Board snapshot (9 cell values).
            queues: Stones per player, oldest first. Only the heuristic
                uses them.
            strategy: Overrides the configured strategy.
            player: The side to move.

        Returns:
            Cell index (0-8), or None if no move is available.
        """
        board = as_board(board)
        strategy = strategy or self.config.strategy

        if strategy == Strategy.RANDOM:
            move = self.random_move(board)
        elif strategy == Strategy.HEURISTIC:
            move = self.heuristic_move(board, queues, player)
        elif strategy == Strategy.BOUNDED_SEARCH:
            move = self.search_move(board, player)
        else:
            raise ValueError(f"Unknown strategy: {strategy!r}")

        logger.debug("Player %d (%s) picks %s", player.value, strategy.value, move)
        return move

    def random_move(self, board: BoardLike) -> Optional[int]:
        """Get a random empty cell."""
        empty_cells = [int(i) for i in np.flatnonzero(np.asarray(board) == EMPTY)]
        if not empty_cells:
            return None
        return self.rng.choice(empty_cells)

    def search_move(self, board: BoardLike, player: Player) -> Optional[int]:
        """Get the best move from a depth-limited minimax search."""
        search = BoundedSearch(player, depth=self.config.search_depth)
        return search.best_move(board)

    def heuristic_move(
        self,
        board: BoardLike,
        queues: Optional[Queues],
        player: Player
    ) -> Optional[int]:
        """
        Get a move from the rule list. The first rule that applies wins:

        1. Win if possible
        2. Block the opponent's winning move
        3. Take the center
        4. Contest the lines of the opponent's stone that vanishes next
        5. Create a fork
        6. Block the opponent's fork
        7. Take a corner
        8. Take an edge
        9. Random
        """
        board = np.asarray(board)
        opponent = player.opposite()

        if not np.any(board == EMPTY):
            return None

        # 1. Check if we can win
        move = self.win_checker.find_completing_cell(board, player)
        if move is not None:
            return move

        # 2. Block opponent's winning move
        move = self.win_checker.find_completing_cell(board, opponent)
        if move is not None:
            return move

        # 3. Take center if available
        if board[GameConfig.CENTER] == EMPTY:
            return GameConfig.CENTER

        # 4. The opponent's oldest stone is about to go
        if queues is not None:
            move = self.find_strategic_move(board, queues.get(opponent, ()))
            if move is not None:
                return move

        # 5. Look for positions that create multiple threats
        move = self.find_fork_move(board, player)
        if move is not None:
            return move

        # 6. Block opponent's fork
        move = self.find_fork_move(board, opponent)
        if move is not None:
            return move

        # 7. Take any corner
        for corner in GameConfig.CORNERS:
            if board[corner] == EMPTY:
                return corner

        # 8. Take any edge
        for edge in GameConfig.EDGES:
            if board[edge] == EMPTY:
                return edge

        # Fallback
        return self.random_move(board)

    def find_strategic_move(self, board: np.ndarray, opponent_queue: Sequence[int]) -> Optional[int]:
        """
        Find an empty cell sharing a line with the opponent's oldest stone.

        Only applies when the opponent's hand is full, i.e. that stone
        disappears on their next placement.

        Args:
            board: The game board.
            opponent_queue: Opponent's stones, oldest first.

        Returns:
            First empty cell on a line through the oldest stone (line order,
            then cell order within the line), or None.
        """
        if len(opponent_queue) < GameConfig.MAX_STONES:
            return None

        oldest = opponent_queue[0]
        for line in self.win_checker.lines_through(oldest):
            for index in line:
                if index != oldest and board[index] == EMPTY:
                    return index
        return None

    def find_fork_move(self, board: np.ndarray, player: Player) -> Optional[int]:
        """
        Find a move that creates two winning opportunities.

        Args:
            board: The game board.
            player: Who would make the fork.

        Returns:
            First cell in board order after which at least 2 different
            empty cells would each win for `player`, or None.
        """
        for index in np.flatnonzero(board == EMPTY):
            test_board = board.copy()
            test_board[index] = player.value

            # Count how many winning moves this creates
            winning_moves = 0
            for follow_up in np.flatnonzero(test_board == EMPTY):
                test_board2 = test_board.copy()
                test_board2[follow_up] = player.value
                if self.win_checker.has_won(test_board2, player):
                    winning_moves += 1

            if winning_moves >= 2:
                return int(index)

        return None
