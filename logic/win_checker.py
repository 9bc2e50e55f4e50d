"""
Win checker for Infinity TicTacToe.
Scans the 8 lines of the board. Shared by win detection, the heuristic AI
and the search evaluator.
"""

from typing import Optional, List, Tuple, Sequence, Union
from dataclasses import dataclass

import numpy as np

from .player import Player, EMPTY
from .config import GameConfig

BoardLike = Union[np.ndarray, Sequence[int]]

# All possible winning lines, in the fixed order used for tie-breaks
WINNING_LINES = np.array([
    # Rows
    [0, 1, 2],
    [3, 4, 5],
    [6, 7, 8],
    # Columns
    [0, 3, 6],
    [1, 4, 7],
    [2, 5, 8],
    # Diagonals
    [0, 4, 8],
    [2, 4, 6],
], dtype=np.intp)


def as_board(board: BoardLike) -> np.ndarray:
    """
    Copy a board snapshot into a fresh int8 array.

    Args:
        board: 9 cell values (0 = empty, 1/2 = player).

    Returns:
        A new numpy array the caller may mutate.
    """
    arr = np.array(board, dtype=np.int8)
    if arr.shape != (GameConfig.BOARD_CELLS,):
        raise ValueError(f"Board must have {GameConfig.BOARD_CELLS} cells, got shape {arr.shape}")
    return arr


@dataclass(frozen=True)
class LineScan:
    """Occupancy of every line: an (8, 3) matrix of cell values."""
    cells: np.ndarray

    def count(self, player: Player) -> np.ndarray:
        """Stones of `player` in each line."""
        return (self.cells == player.value).sum(axis=1)

    @property
    def empty(self) -> np.ndarray:
        """Empty cells in each line."""
        return (self.cells == EMPTY).sum(axis=1)


class WinChecker:
    """
    Checks for win conditions in TicTacToe.

    Win condition: 3 stones of the same player in a row
    (horizontally, vertically, or diagonally)
    """

    WINNING_LINES = WINNING_LINES

    def scan(self, board: BoardLike) -> LineScan:
        """Classify the occupancy of all 8 lines."""
        return LineScan(cells=np.asarray(board)[self.WINNING_LINES])

    def get_winning_line(self, board: BoardLike) -> Optional[Tuple[int, int, int]]:
        """
        Get the winning line if there is one.

        If several lines are complete, the first one in line order is
        reported.

        Args:
            board: The game board.

        Returns:
            The winning line as a tuple of 3 indices, or None.
        """
        cells = self.scan(board).cells
        complete = (
            (cells[:, 0] != EMPTY)
            & (cells[:, 0] == cells[:, 1])
            & (cells[:, 1] == cells[:, 2])
        )
        hits = np.flatnonzero(complete)
        if hits.size == 0:
            return None
        return tuple(int(i) for i in self.WINNING_LINES[hits[0]])

    def check_winner(self, board: BoardLike) -> Optional[Player]:
        """
        Check if there's a winner.

        Returns:
            The winning Player, or None if no winner yet.
        """
        line = self.get_winning_line(board)
        if line is None:
            return None
        return Player(int(np.asarray(board)[line[0]]))

    def has_won(self, board: BoardLike, player: Player) -> bool:
        """True if `player` owns a complete line."""
        return bool(np.any(self.scan(board).count(player) == 3))

    def find_completing_cell(self, board: BoardLike, player: Player) -> Optional[int]:
        """
        Find an empty cell that completes a line for `player`.

        Args:
            board: The game board.
            player: Who would place the stone.

        Returns:
            The empty cell of the first line holding 2 of the player's
            stones and 1 empty cell, or None.
        """
        board = np.asarray(board)
        scan = self.scan(board)
        hits = np.flatnonzero((scan.count(player) == 2) & (scan.empty == 1))
        if hits.size == 0:
            return None
        line = self.WINNING_LINES[hits[0]]
        return int(line[board[line] == EMPTY][0])

    def lines_through(self, index: int) -> List[Tuple[int, int, int]]:
        """All lines that contain `index`, in line order."""
        return [
            tuple(int(i) for i in line)
            for line in self.WINNING_LINES
            if index in line
        ]
