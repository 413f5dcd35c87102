"""
Move ordering for better alpha-beta pruning.

Alpha-beta prunes the most when the best move is searched first. Two
orderers are provided:

order_moves (root and decision function):
    Each candidate is placed in a priority class, cheapest check first:
        1. immediate win for the mover          IMMEDIATE_WIN_PRIORITY
        2. cell where the opponent would win    BLOCK_PRIORITY
        3. otherwise: evaluate(after move) + positional priority + fork bonus
    A move's later checks are skipped once its class is known.

order_moves_simple (inside the recursion):
    Positional priority plus the heuristic score after the move, with no
    win/block lookahead; the recursive search already covers those replies.

Both sorts are stable, so equal scores keep the generator's row-major
order and the result is deterministic.
"""

from typing import Sequence

from tictactoe.board import CENTER, CORNERS, LINES_THROUGH, Board, Player, Position, apply_move
from tictactoe.constants import (
    BLOCK_PRIORITY,
    CENTER_PRIORITY,
    CORNER_PRIORITY,
    EDGE_PRIORITY,
    FORK_BONUS_MULTIPLE,
    FORK_BONUS_SINGLE,
    IMMEDIATE_WIN_PRIORITY,
)
from tictactoe.evaluate import evaluate
from tictactoe.rules import wins_immediately


def positional_priority(pos: Position) -> int:
    """Fixed weight per cell class: center > corner > edge."""
    if pos == CENTER:
        return CENTER_PRIORITY
    if pos in CORNERS:
        return CORNER_PRIORITY
    return EDGE_PRIORITY


def fork_bonus(player: Player, board: Board, pos: Position) -> int:
    """
    Reward a move that keeps several lines through it promising.

    A line is promising when it holds only player's marks and empty cells.
    board is the position after player has moved to pos.
    """
    promising = 0
    for line in LINES_THROUGH[pos]:
        if all(board.rows[p.row][p.col] in (player, None) for p in line):
            promising += 1
    if promising >= 2:
        return FORK_BONUS_MULTIPLE
    if promising == 1:
        return FORK_BONUS_SINGLE
    return 0


def move_priority(player: Player, board: Board, pos: Position) -> int:
    """Composite ordering score of one candidate move."""
    if wins_immediately(player, board, pos):
        return IMMEDIATE_WIN_PRIORITY
    if wins_immediately(player.opponent, board, pos):
        return BLOCK_PRIORITY
    after = apply_move(board, player, pos)
    return evaluate(player, after) + positional_priority(pos) + fork_bonus(player, after, pos)


def order_moves(player: Player, board: Board, moves: Sequence[Position]) -> list[Position]:
    """
    Reorder candidate moves, most promising first.

    Args:
        player: The side to move.
        board:  The current position. Not modified.
        moves:  Candidate moves, normally in row-major order from legal_moves.

    Returns:
        The same moves sorted by move_priority, descending. Ties keep their
        input order.
    """
    return sorted(moves, key=lambda pos: move_priority(player, board, pos), reverse=True)


def order_moves_simple(player: Player, board: Board, moves: Sequence[Position]) -> list[Position]:
    """Cheap ordering for interior nodes: positional weight plus heuristic."""
    def _score(pos: Position) -> int:
        return positional_priority(pos) + evaluate(player, apply_move(board, player, pos))

    return sorted(moves, key=_score, reverse=True)
