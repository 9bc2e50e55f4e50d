"""
Game state management for Infinity TicTacToe.
Tracks the board, current player, and each player's stone queue.

Each player may have at most 3 stones on the board. Placing a 4th
removes that player's oldest stone first (FIFO).
"""

import logging
from collections import deque
from typing import Optional, List, Tuple, Dict, Deque
from dataclasses import dataclass, field

import numpy as np

from .player import Player, EMPTY
from .config import GameConfig
from .move_validator import MoveValidator
from .win_checker import WinChecker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only view of the game after a transition.

    This is what the presentation layer consumes.
    """
    board: Tuple[int, ...]
    queues: Tuple[Tuple[Player, Tuple[int, ...]], ...]     # (player, stones) pairs
    current_player: Player
    is_game_over: bool = False
    winner: Optional[Player] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    evicted_index: Optional[int] = None     # Set when the move removed a stone
    no_move: bool = False                   # Game ended with no legal move

    def queue(self, player: Player) -> Tuple[int, ...]:
        """Stones of `player`, oldest first."""
        return dict(self.queues)[player]

    def oldest_stone(self, player: Player) -> Optional[int]:
        """The stone `player` loses on their next placement, if their hand is full."""
        queue = self.queue(player)
        if len(queue) >= GameConfig.MAX_STONES:
            return queue[0]
        return None


def _empty_queues() -> Dict[Player, Deque[int]]:
    return {player: deque() for player in Player}


@dataclass(eq=False)
class GameState:
    """
    The complete state of an Infinity TicTacToe game.

    Tracks:
    - The board (9 cells, row-major; 0 = empty, 1/2 = player)
    - Each player's stones in placement order (front = oldest)
    - Current player
    - Game status (ongoing, won, no legal move)

    `place` is the only way the state changes during a game.
    """

    board: np.ndarray = field(
        default_factory=lambda: np.zeros(GameConfig.BOARD_CELLS, dtype=np.int8)
    )

    queues: Dict[Player, Deque[int]] = field(default_factory=_empty_queues)

    # Player 1 always starts
    current_player: Player = Player.ONE

    # Game result
    winner: Optional[Player] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    no_move: bool = False
    is_game_over: bool = False

    validator: MoveValidator = field(default_factory=MoveValidator, repr=False)
    win_checker: WinChecker = field(default_factory=WinChecker, repr=False)

    def place(self, index: int) -> GameSnapshot:
        """
        Place a stone for the current player.

        Args:
            index: Cell index (0-8).

        Returns:
            Snapshot of the new state, with `evicted_index` set if the
            player's oldest stone was removed.

        Raises:
            InvalidMove: If the game is over, the index is out of range,
                or the cell is occupied. The state is left untouched.
        """
        self.validator.ensure_valid(self, index)
        index = int(index)

        player = self.current_player
        queue = self.queues[player]

        # Infinity rule: make room before placing
        evicted_index = None
        if len(queue) >= GameConfig.MAX_STONES:
            evicted_index = queue.popleft()
            self.board[evicted_index] = EMPTY
            logger.debug("Player %d loses stone at %d", player.value, evicted_index)

        self.board[index] = player.value
        queue.append(index)

        # Check the board as it stands now
        line = self.win_checker.get_winning_line(self.board)
        if line is not None:
            self.winner = Player(int(self.board[line[0]]))
            self.winning_line = line
            self.is_game_over = True
            logger.debug("Player %d wins with line %s", self.winner.value, line)
        else:
            self.current_player = player.opposite()
            if not self.get_empty_cells():
                # Should not happen: at most 6 stones fit on 9 cells
                self.no_move = True
                self.is_game_over = True
                logger.warning("No legal move left for player %d", self.current_player.value)

        self.check_invariants()
        return self.snapshot(evicted_index=evicted_index)

    def reset(self) -> GameSnapshot:
        """Start a fresh game in place."""
        self.board = np.zeros(GameConfig.BOARD_CELLS, dtype=np.int8)
        self.queues = _empty_queues()
        self.current_player = Player.ONE
        self.winner = None
        self.winning_line = None
        self.no_move = False
        self.is_game_over = False
        return self.snapshot()

    def snapshot(self, evicted_index: Optional[int] = None) -> GameSnapshot:
        """Create an immutable view of the current state."""
        return GameSnapshot(
            board=tuple(int(cell) for cell in self.board),
            queues=tuple((player, tuple(queue)) for player, queue in self.queues.items()),
            current_player=self.current_player,
            is_game_over=self.is_game_over,
            winner=self.winner,
            winning_line=self.winning_line,
            evicted_index=evicted_index,
            no_move=self.no_move,
        )

    def get_empty_cells(self) -> List[int]:
        """Get all empty cells on the board, in board order."""
        return [int(i) for i in np.flatnonzero(self.board == EMPTY)]

    def stone_count(self, player: Player) -> int:
        """How many stones `player` has on the board (0-3)."""
        return len(self.queues[player])

    def oldest_stone(self, player: Player) -> Optional[int]:
        """The stone `player` loses on their next placement, if their hand is full."""
        queue = self.queues[player]
        if len(queue) >= GameConfig.MAX_STONES:
            return queue[0]
        return None

    def check_invariants(self):
        """
        Assert that the board and the queues agree.

        A failure here is a bug in the state machine, not bad input.
        """
        seen = set()
        for player, queue in self.queues.items():
            assert len(queue) <= GameConfig.MAX_STONES, \
                f"player {player.value} holds {len(queue)} stones"
            for index in queue:
                assert index not in seen, f"cell {index} queued twice"
                assert self.board[index] == player.value, \
                    f"cell {index} is queued for player {player.value} but holds {self.board[index]}"
                seen.add(index)
        occupied = int(np.count_nonzero(self.board != EMPTY))
        assert occupied == len(seen), \
            f"{occupied} occupied cells but {len(seen)} queued stones"


def format_board(snapshot: GameSnapshot) -> str:
    """
    Render a snapshot as text.

    Player one is O, player two is X. A stone about to vanish (the oldest
    of a full hand) is shown in lower case.
    """
    oldest = {
        snapshot.oldest_stone(player): player
        for player in Player
        if snapshot.oldest_stone(player) is not None
    }

    rows = []
    for row in range(GameConfig.BOARD_SIZE):
        cells = []
        for col in range(GameConfig.BOARD_SIZE):
            index = row * GameConfig.BOARD_SIZE + col
            value = snapshot.board[index]
            if value == EMPTY:
                cells.append(str(index))
            else:
                symbol = Player(value).symbol
                cells.append(symbol.lower() if index in oldest else symbol)
        rows.append("  " + " | ".join(cells))
    lines = ["", rows[0], " ---+---+---", rows[1], " ---+---+---", rows[2]]

    if snapshot.is_game_over:
        if snapshot.winner is not None:
            lines.append(f"\nPlayer {snapshot.winner.value} ({snapshot.winner.symbol}) WINS!")
        else:
            lines.append("\nNo legal move left. Game over.")
    else:
        player = snapshot.current_player
        lines.append(f"\nCurrent turn: player {player.value} ({player.symbol})")
        for p in Player:
            lines.append(f"  Player {p.value} stones: {len(snapshot.queue(p))}/{GameConfig.MAX_STONES}")

    return "\n".join(lines)


# Quick test
if __name__ == "__main__":
    print("Testing GameState...")

    game = GameState()

    # Player 1 fills a hand, then the 4th stone removes the stone at 0
    for index in [0, 4, 1, 5, 3, 8, 6]:
        result = game.place(index)
        if result.evicted_index is not None:
            print(f"\nStone at {result.evicted_index} vanished")
        print(format_board(result))

    print("\nGame state test done!")
