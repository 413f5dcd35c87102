from tictactoe.board import Board, Player, Position, legal_moves
from tictactoe.constants import BLOCK_PRIORITY, IMMEDIATE_WIN_PRIORITY
from tictactoe.ordering import (
    fork_bonus,
    move_priority,
    order_moves,
    order_moves_simple,
    positional_priority,
)

X, O = Player.X, Player.O

CENTER_FIRST = [
    Position(1, 1),
    Position(0, 0), Position(0, 2), Position(2, 0), Position(2, 2),
    Position(0, 1), Position(1, 0), Position(1, 2), Position(2, 1),
]


def test_win_then_block_then_heuristic():
    board = Board.parse("XX.OO....")
    ordered = order_moves(X, board, legal_moves(board))
    assert ordered[0] == Position(0, 2)
    assert ordered[1] == Position(1, 2)
    assert move_priority(X, board, Position(0, 2)) == IMMEDIATE_WIN_PRIORITY
    assert move_priority(X, board, Position(1, 2)) == BLOCK_PRIORITY


def test_block_comes_first_when_no_win_exists():
    board = Board.parse("OO..X...X")
    ordered = order_moves(X, board, legal_moves(board))
    assert ordered[0] == Position(0, 2)


def test_ordering_is_a_permutation():
    board = Board.parse("X.O.X...O")
    moves = legal_moves(board)
    for orderer in (order_moves, order_moves_simple):
        ordered = orderer(X, board, moves)
        assert sorted(ordered) == sorted(moves)
        assert len(ordered) == len(moves)


def test_empty_board_center_corners_edges_in_row_major_ties():
    moves = legal_moves(Board.empty())
    assert order_moves(X, Board.empty(), moves) == CENTER_FIRST
    assert order_moves_simple(X, Board.empty(), moves) == CENTER_FIRST


def test_ordering_is_deterministic():
    board = Board.parse("X...O....")
    moves = legal_moves(board)
    assert order_moves(X, board, moves) == order_moves(X, board, moves)


def test_positional_priority_classes():
    center = positional_priority(Position(1, 1))
    corner = positional_priority(Position(2, 0))
    edge = positional_priority(Position(1, 2))
    assert center > corner > edge


def test_fork_bonus_counts_promising_lines_through_the_move():
    # After X takes (0,0): row 0 holds an O, column 0 and the diagonal are open.
    assert fork_bonus(X, Board.parse("XO......."), Position(0, 0)) == 20
    # Only the diagonal stays open.
    assert fork_bonus(X, Board.parse("XO.O....."), Position(0, 0)) == 5
    assert fork_bonus(X, Board.parse("XO.OO...."), Position(0, 0)) == 0
