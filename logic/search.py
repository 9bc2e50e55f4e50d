"""
Bounded search for Infinity TicTacToe.
Minimax with alpha-beta pruning, cut off at a fixed depth and scored by a
static evaluator.

The search treats stones as permanent: it never applies the FIFO rule
inside its horizon. This keeps the tree small, at the cost of misjudging
lines that rely on a stone about to vanish.
"""

import logging
from typing import Optional

import numpy as np

from .player import Player, EMPTY
from .config import GameConfig
from .win_checker import WinChecker, BoardLike, as_board

logger = logging.getLogger(__name__)

# Static evaluation weights
LINE_COMPLETE = 100
LINE_TWO_OPEN = 10
LINE_ONE_OPEN = 1
CENTER_BONUS = 3
CORNER_BONUS = 2

WIN_SCORE = 10


class BoundedSearch:
    """
    Depth-limited minimax from the point of view of `player`.

    Scores:
    - depth limit or full board: `evaluate()`
    - `player` completes a line at depth d: WIN_SCORE - d (faster wins first)
    - the opponent completes a line at depth d: d - WIN_SCORE

    The depth limit is checked before the win checks, so a line completed on
    the last ply scores +-100 through the evaluator.
    """

    def __init__(self, player: Player, depth: int = GameConfig.SEARCH_DEPTH):
        """
        Args:
            player: The maximizing side.
            depth: Plies to explore below the current position.
        """
        self.player = player
        self.depth = depth
        self.win_checker = WinChecker()

        # Positions visited by the last search (for debugging)
        self.nodes_evaluated = 0

    def best_move(self, board: BoardLike) -> Optional[int]:
        """
        Get the best move for the current position.

        Args:
            board: Board snapshot (not modified).

        Returns:
            Cell index, or None if the board has no empty cell.
        """
        self.nodes_evaluated = 0
        board = as_board(board)

        valid_moves = np.flatnonzero(board == EMPTY)
        if valid_moves.size == 0:
            return None

        best_score = float('-inf')
        best_move = int(valid_moves[0])
        alpha = float('-inf')

        for index in valid_moves:
            new_board = board.copy()
            new_board[index] = self.player.value

            score = self._minimax(new_board, 1, False, alpha, float('inf'))

            # Strict comparison keeps the first cell on ties
            if score > best_score:
                best_score = score
                best_move = int(index)
            alpha = max(alpha, best_score)

        logger.debug(
            "Search evaluated %d positions. Best move: %d (score: %s)",
            self.nodes_evaluated, best_move, best_score
        )
        return best_move

    def _minimax(
        self,
        board: np.ndarray,
        depth: int,
        is_maximizing: bool,
        alpha: float = float('-inf'),
        beta: float = float('inf')
    ) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Position to score.
            depth: Plies already played below the root.
            is_maximizing: True if it's `self.player`'s turn.
            alpha: Alpha value for pruning.
            beta: Beta value for pruning.

        Returns:
            The score of the position.
        """
        self.nodes_evaluated += 1

        # Depth limit comes first: a line completed on the last ply is
        # scored by the evaluator
        if depth >= self.depth:
            return self.evaluate(board)

        # Check terminal states
        if self.win_checker.has_won(board, self.player):
            return WIN_SCORE - depth
        if self.win_checker.has_won(board, self.player.opposite()):
            return depth - WIN_SCORE

        valid_moves = np.flatnonzero(board == EMPTY)
        if valid_moves.size == 0:
            return self.evaluate(board)

        mover = self.player if is_maximizing else self.player.opposite()

        if is_maximizing:
            max_score = float('-inf')
            for index in valid_moves:
                new_board = board.copy()
                new_board[index] = mover.value
                score = self._minimax(new_board, depth + 1, False, alpha, beta)
                max_score = max(max_score, score)
                alpha = max(alpha, score)
                if beta <= alpha:
                    break  # Prune
            return max_score
        else:
            min_score = float('inf')
            for index in valid_moves:
                new_board = board.copy()
                new_board[index] = mover.value
                score = self._minimax(new_board, depth + 1, True, alpha, beta)
                min_score = min(min_score, score)
                beta = min(beta, score)
                if beta <= alpha:
                    break  # Prune
            return min_score

    def evaluate(self, board: BoardLike) -> int:
        """
        Static score of a position, positive when it favours `self.player`.

        Per line: complete +-100, two stones and an empty cell +-10, one
        stone and two empty cells +-1. Plus +-3 for the center and +-2 for
        each corner.
        """
        board = np.asarray(board)
        scan = self.win_checker.scan(board)
        empty = scan.empty

        score = 0
        for player, sign in ((self.player, 1), (self.player.opposite(), -1)):
            count = scan.count(player)
            line_score = (
                LINE_COMPLETE * np.count_nonzero(count == 3)
                + LINE_TWO_OPEN * np.count_nonzero((count == 2) & (empty == 1))
                + LINE_ONE_OPEN * np.count_nonzero((count == 1) & (empty == 2))
            )
            position_score = (
                CENTER_BONUS * int(board[GameConfig.CENTER] == player.value)
                + CORNER_BONUS * np.count_nonzero(board[list(GameConfig.CORNERS)] == player.value)
            )
            score += sign * int(line_score + position_score)

        return score
