"""
Game configuration for Infinity TicTacToe.
All the settings for the board, the FIFO rule and the AI opponent.
"""

from enum import Enum
from dataclasses import dataclass


class Strategy(Enum):
    """Move selection strategies."""
    RANDOM = "random"                  # Uniform random empty cell
    HEURISTIC = "heuristic"            # Win/block/center/fork/corner/edge
    BOUNDED_SEARCH = "bounded_search"  # Depth-limited minimax


class GameConfig:
    """
    Configuration class for game settings.
    Change these values to tune the game!
    """

    # ==================== BOARD SETTINGS ====================
    BOARD_SIZE = 3
    BOARD_CELLS = BOARD_SIZE * BOARD_SIZE  # 9 cells, row-major

    CENTER = 4
    CORNERS = (0, 2, 6, 8)
    EDGES = (1, 3, 5, 7)

    # ==================== INFINITY RULE ====================
    # Placing a stone beyond this removes the player's oldest one
    MAX_STONES = 3

    # ==================== AI SETTINGS ====================
    DEFAULT_STRATEGY = Strategy.HEURISTIC

    # Plies explored by the bounded search
    SEARCH_DEPTH = 4

    # Pause before the AI answers (console pacing only)
    AI_MOVE_DELAY_S = 0.5


@dataclass
class AIConfig:
    """Strategy and search depth for one AI player."""
    strategy: Strategy = GameConfig.DEFAULT_STRATEGY
    search_depth: int = GameConfig.SEARCH_DEPTH

    def __post_init__(self):
        if self.search_depth < 1:
            raise ValueError(f"search_depth must be >= 1, got {self.search_depth}")
