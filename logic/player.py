"""
Players and cell values for Infinity TicTacToe.
"""

from enum import Enum

# Value of an empty board cell
EMPTY = 0


class Player(Enum):
    """The two players in the game. Values are the board cell values."""
    ONE = 1
    TWO = 2

    def opposite(self) -> "Player":
        """Get the opposite player."""
        return Player.TWO if self == Player.ONE else Player.ONE

    @property
    def symbol(self) -> str:
        """Stone symbol used by the console board."""
        return "O" if self == Player.ONE else "X"
