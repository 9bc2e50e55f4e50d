"""Tests for the AI move selection strategies."""

import random
from collections import Counter

import numpy as np
import pytest

from logic.ai_player import AIPlayer
from logic.config import AIConfig, Strategy
from logic.player import Player

FULL_BOARD = [1, 2, 1, 1, 2, 2, 2, 1, 1]


def heuristic(board, queues=None, player=Player.TWO):
    ai = AIPlayer(rng=random.Random(0))
    return ai.select_move(board, queues, Strategy.HEURISTIC, player)


class TestRandom:

    def test_picks_an_empty_cell(self):
        ai = AIPlayer(AIConfig(strategy=Strategy.RANDOM), rng=random.Random(1))
        board = [1, 2, 0, 1, 0, 2, 0, 0, 0]
        for _ in range(50):
            assert board[ai.select_move(board)] == 0

    def test_same_seed_same_moves(self):
        board = [0] * 9
        first = AIPlayer(rng=random.Random(7))
        second = AIPlayer(rng=random.Random(7))
        moves = [first.select_move(board, strategy=Strategy.RANDOM) for _ in range(20)]
        again = [second.select_move(board, strategy=Strategy.RANDOM) for _ in range(20)]
        assert moves == again

    def test_uniform(self):
        ai = AIPlayer(rng=random.Random(3))
        board = [1, 2, 1, 0, 2, 0, 2, 1, 0]
        counts = Counter(ai.random_move(board) for _ in range(9000))
        assert set(counts) == {3, 5, 8}
        for count in counts.values():
            assert 2500 < count < 3500

    def test_no_move_on_full_board(self):
        ai = AIPlayer(rng=random.Random(0))
        assert ai.select_move(FULL_BOARD, strategy=Strategy.RANDOM) is None


class TestHeuristic:

    def test_takes_win_before_block(self):
        # Player 2 wins at 8; player 1 threatens 2; center is free
        board = [1, 1, 0, 0, 0, 0, 2, 2, 0]
        assert heuristic(board) == 8

    def test_takes_win_before_fork(self):
        # Player 2 wins at 8; 0 would also fork on 0-3-6 and 6-7-8
        board = [0, 0, 1, 0, 1, 0, 2, 2, 0]
        ai = AIPlayer()
        assert ai.find_fork_move(np.array(board, dtype=np.int8), Player.TWO) == 0
        assert heuristic(board) == 8

    def test_blocks_instead_of_center(self):
        board = [1, 1, 0, 0, 0, 0, 0, 0, 0]
        assert heuristic(board) == 2

    def test_takes_center(self):
        assert heuristic([0] * 9) == 4
        assert heuristic([1, 0, 0, 0, 0, 0, 0, 0, 0]) == 4

    def test_contests_lines_of_vanishing_stone(self):
        # Player 1 holds 0, 4, 5 with 4 the oldest; rows/diagonals are blocked
        board = [1, 0, 0, 2, 1, 1, 0, 0, 2]
        queues = {Player.ONE: [4, 0, 5], Player.TWO: [8, 3]}
        # Lines through 4: 3-4-5 is full, 1-4-7 has 1 free first
        assert heuristic(board, queues) == 1

        queues = {Player.ONE: [5, 0, 4], Player.TWO: [8, 3]}
        # Lines through 5: 3-4-5 is full, 2-5-8 has 2 free
        assert heuristic(board, queues) == 2

    def test_strategic_rule_needs_full_opponent_hand(self):
        ai = AIPlayer()
        board = np.array([1, 0, 0, 2, 1, 1, 0, 0, 2], dtype=np.int8)
        assert ai.find_strategic_move(board, [5, 0]) is None
        assert ai.find_strategic_move(board, [5, 0, 4]) == 2

    def test_creates_fork(self):
        # Player 2 at 0 and 4; 3 threatens both 0-3-6 and 3-4-5
        board = [2, 1, 0, 0, 2, 0, 0, 0, 1]
        assert heuristic(board) == 3

    def test_blocks_fork(self):
        # Without queue info, player 1's fork at 1 gets blocked
        board = [1, 0, 0, 2, 1, 1, 0, 0, 2]
        assert heuristic(board) == 1

    def test_fork_needs_two_distinct_cells(self):
        ai = AIPlayer()
        board = np.array([0, 0, 0, 0, 1, 0, 0, 0, 0], dtype=np.int8)
        assert ai.find_fork_move(board, Player.ONE) is None

    def test_takes_corner(self):
        board = [0, 0, 0, 0, 1, 0, 0, 0, 0]
        assert heuristic(board) == 0

    def test_no_move_on_full_board(self):
        assert heuristic(FULL_BOARD) is None

    def test_plays_for_player_one(self):
        board = [0, 2, 2, 1, 1, 0, 0, 0, 0]
        assert heuristic(board, player=Player.ONE) == 5


class TestSelectMove:

    def test_default_strategy_from_config(self):
        ai = AIPlayer(AIConfig(strategy=Strategy.HEURISTIC))
        assert ai.select_move([1, 1, 0, 0, 0, 0, 0, 0, 0]) == 2

    def test_bounded_search_takes_win(self):
        ai = AIPlayer(AIConfig(search_depth=1))
        board = [2, 2, 0, 1, 1, 0, 0, 0, 0]
        assert ai.select_move(board, strategy=Strategy.BOUNDED_SEARCH) == 2

    def test_board_not_modified(self):
        ai = AIPlayer(rng=random.Random(0))
        board = np.array([1, 1, 0, 0, 2, 0, 0, 0, 0], dtype=np.int8)
        before = board.copy()
        for strategy in Strategy:
            ai.select_move(board, strategy=strategy)
        assert np.array_equal(board, before)

    def test_unknown_strategy(self):
        ai = AIPlayer()
        with pytest.raises(ValueError):
            ai.select_move([0] * 9, strategy="bogus")
