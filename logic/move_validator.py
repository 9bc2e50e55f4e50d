"""
Move validator for Infinity TicTacToe.
Validates that moves follow the rules.
"""

from typing import Optional, TYPE_CHECKING
from dataclasses import dataclass

import numpy as np

from .player import EMPTY
from .config import GameConfig

if TYPE_CHECKING:
    from .game_state import GameState


class InvalidMove(ValueError):
    """A placement that the rules do not allow. The game state is unchanged."""


@dataclass
class ValidationResult:
    """Result of move validation."""
    is_valid: bool
    error_message: Optional[str] = None


class MoveValidator:
    """
    Validates Infinity TicTacToe moves.

    Rules:
    1. Game must not be over
    2. Index must be a cell of the board (0-8)
    3. Can only place on empty cells

    A full hand is never a problem: the oldest stone makes room.
    """

    def validate_move(self, game_state: "GameState", index: int) -> ValidationResult:
        """
        Validate a move.

        Args:
            game_state: Current game state.
            index: Cell to place a stone on (0-8).

        Returns:
            ValidationResult with is_valid and error_message.
        """
        # Check if game is over
        if game_state.is_game_over:
            return ValidationResult(
                is_valid=False,
                error_message="Game is already over!"
            )

        # bool is an int subclass but never a cell
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index!r}. Must be an integer."
            )

        # Check if index is in range
        if not 0 <= index < GameConfig.BOARD_CELLS:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid position {index}. Must be 0-{GameConfig.BOARD_CELLS - 1}."
            )

        # Check if cell is empty
        if game_state.board[index] != EMPTY:
            return ValidationResult(
                is_valid=False,
                error_message=f"Cell {index} is already occupied by player {int(game_state.board[index])}"
            )

        return ValidationResult(is_valid=True)

    def ensure_valid(self, game_state: "GameState", index: int):
        """Raise InvalidMove if `index` is not a legal placement."""
        result = self.validate_move(game_state, index)
        if not result.is_valid:
            raise InvalidMove(result.error_message)

