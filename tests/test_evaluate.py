import pytest

from tictactoe.board import Board, Player
from tictactoe.constants import DRAW_SCORE, WIN_SCORE
from tictactoe.evaluate import evaluate, line_score, score_position, terminal_score
from tictactoe.rules import is_terminal

from tests.helpers import reachable_positions

X, O = Player.X, Player.O


@pytest.mark.parametrize(
    "cells, expected",
    [
        ((X, X, X), 100),
        ((X, X, None), 10),
        ((X, None, None), 1),
        ((O, O, O), -100),
        ((O, None, O), -10),
        ((None, O, None), -1),
        ((X, O, None), 0),
        ((X, X, O), 0),
        ((None, None, None), 0),
    ],
)
def test_line_score(cells, expected):
    assert line_score(X, cells) == expected
    assert line_score(O, cells) == -expected


def test_empty_board_is_neutral():
    assert evaluate(X, Board.empty()) == 0


def test_center_occupant_gets_line_and_center_bonus():
    board = Board.parse("....X....")
    # Four single-mark lines through the center, plus the center bonus.
    assert evaluate(X, board) == 4 + 3
    assert evaluate(O, board) == -7


def test_corner_bonus_is_net_of_opponent_corners():
    # X corner, O center.
    assert evaluate(X, Board.parse("X...O....")) == -2
    # X owns two corners, O one corner.
    board = Board.parse("X.X...O..")
    # row0 +10, col2 +1, diag +1, row2 -1; column 0 and the anti-diagonal are mixed.
    assert evaluate(X, board) == 10 + 1 + 1 - 1 + (2 - 1) * 2


def test_two_in_a_row_threats():
    board = Board.parse("XX.OO....")
    # +10 -10 for the rows, -1 for O's anti-diagonal, -3 center, +2 corner.
    assert evaluate(X, board) == -2


def test_heuristic_is_antisymmetric_on_reachable_positions():
    checked = 0
    for board, _ in reachable_positions():
        if is_terminal(board):
            continue
        assert evaluate(X, board) == -evaluate(O, board)
        assert abs(evaluate(X, board)) < WIN_SCORE
        checked += 1
    assert checked > 4000


def test_terminal_scores_are_exact():
    won = Board.parse("XXXOO....")
    assert terminal_score(X, won) == WIN_SCORE
    assert terminal_score(O, won) == -WIN_SCORE
    drawn = Board.parse("XOXXOOOXX")
    assert terminal_score(X, drawn) == DRAW_SCORE
    assert terminal_score(O, drawn) == DRAW_SCORE
    assert terminal_score(X, Board.empty()) is None


def test_score_position_switches_between_exact_and_heuristic():
    assert score_position(O, Board.parse("XXXOO....")) == -WIN_SCORE
    board = Board.parse("X...O....")
    assert score_position(X, board) == evaluate(X, board)
