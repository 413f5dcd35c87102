from tictactoe.board import Board, Player, apply_move, legal_moves
from tictactoe.rules import is_terminal


def reachable_positions():
    """Every position reachable from the empty board with X moving first.

    Yields (board, player_to_move) pairs, terminal positions included.
    """
    seen = set()
    stack = [(Board.empty(), Player.X)]
    while stack:
        board, player = stack.pop()
        if board in seen:
            continue
        seen.add(board)
        yield board, player
        if is_terminal(board):
            continue
        for move in legal_moves(board):
            stack.append((apply_move(board, player, move), player.opponent))
