"""Tests for the bounded minimax search."""

import numpy as np

from logic.player import Player
from logic.search import BoundedSearch

# Nodes in a full 4-ply tree from the empty board
FULL_TREE_4_PLY = 9 + 9 * 8 + 9 * 8 * 7 + 9 * 8 * 7 * 6


def test_evaluate_empty_board():
    assert BoundedSearch(Player.TWO).evaluate([0] * 9) == 0


def test_evaluate_center():
    board = [0, 0, 0, 0, 2, 0, 0, 0, 0]
    # 4 open lines through the center + center bonus
    assert BoundedSearch(Player.TWO).evaluate(board) == 7
    assert BoundedSearch(Player.ONE).evaluate(board) == -7


def test_evaluate_corner():
    board = [1, 0, 0, 0, 0, 0, 0, 0, 0]
    # 3 open lines through the corner + corner bonus
    assert BoundedSearch(Player.ONE).evaluate(board) == 5


def test_evaluate_two_in_line():
    board = [2, 2, 0, 0, 0, 0, 0, 0, 0]
    # Row: 10; column 0, column 1, diagonal: 1 each; corner: 2
    assert BoundedSearch(Player.TWO).evaluate(board) == 15


def test_evaluate_complete_line():
    board = [1, 1, 1, 0, 0, 0, 0, 0, 0]
    # Row 100, three columns, two diagonals, two corners
    assert BoundedSearch(Player.ONE).evaluate(board) == 100 + 3 + 2 + 4


def test_minimax_scores_wins_by_depth():
    board = np.array([2, 2, 2, 1, 1, 0, 0, 0, 0], dtype=np.int8)
    assert BoundedSearch(Player.TWO)._minimax(board, 1, False) == 9
    assert BoundedSearch(Player.ONE)._minimax(board, 3, True) == -7


def test_minimax_depth_limit_before_win_check():
    board = np.array([2, 2, 2, 1, 1, 0, 1, 0, 0], dtype=np.int8)
    search = BoundedSearch(Player.TWO, depth=4)
    # Row 100, row 3-4-5 -10, row 6-7-8 -1, column 2-5-8 +1,
    # center -3, corners +4 -2
    assert search._minimax(board, 4, False) == search.evaluate(board) == 89


def test_no_move_on_full_board():
    search = BoundedSearch(Player.TWO)
    assert search.best_move([1, 2, 1, 1, 2, 2, 2, 1, 1]) is None


def test_shallow_search_takes_win():
    # One ply: the winning child is the only one with a complete line
    search = BoundedSearch(Player.ONE, depth=1)
    assert search.best_move([1, 0, 0, 2, 1, 0, 2, 0, 0]) == 8


def test_blocks_immediate_loss():
    search = BoundedSearch(Player.TWO)
    assert search.best_move([1, 1, 0, 0, 2, 0, 0, 0, 0]) == 2


def test_last_cell():
    search = BoundedSearch(Player.TWO)
    assert search.best_move([1, 2, 1, 1, 2, 2, 2, 1, 0]) == 8


def test_pruning_skips_nodes():
    search = BoundedSearch(Player.ONE, depth=4)
    search.best_move([0] * 9)
    assert 0 < search.nodes_evaluated < FULL_TREE_4_PLY


def test_depth_limits_search():
    shallow = BoundedSearch(Player.ONE, depth=1)
    shallow.best_move([0] * 9)
    assert shallow.nodes_evaluated == 9


def test_board_not_modified():
    board = np.array([1, 0, 0, 0, 2, 0, 0, 0, 0], dtype=np.int8)
    BoundedSearch(Player.ONE).best_move(board)
    assert list(board) == [1, 0, 0, 0, 2, 0, 0, 0, 0]
