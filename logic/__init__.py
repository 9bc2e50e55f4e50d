"""
Logic module for Infinity TicTacToe.
Handles game state, rules, the AI opponent and game sessions.

Each player may hold at most 3 stones; the 4th removes the oldest one.
"""

__version__ = "1.0.0"

from .player import Player, EMPTY
from .config import GameConfig, AIConfig, Strategy
from .game_state import GameState, GameSnapshot, format_board
from .move_validator import MoveValidator, InvalidMove
from .win_checker import WinChecker
from .ai_player import AIPlayer
from .search import BoundedSearch
from .session import GameSession, GameMode
