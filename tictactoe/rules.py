"""
Win/draw detection.

GameResult is derived purely from the board and always recomputed; it is
never stored alongside a board.
"""

from dataclasses import dataclass

from tictactoe.board import LINES, LINES_THROUGH, Board, Player, Position


@dataclass(frozen=True)
class PlayerWon:
    player: Player


@dataclass(frozen=True)
class Draw:
    pass


@dataclass(frozen=True)
class Continues:
    pass


GameResult = PlayerWon | Draw | Continues

DRAW = Draw()
CONTINUES = Continues()


def winner(board: Board) -> Player | None:
    """First player found owning a complete line (rows, columns, diagonals)."""
    for line in LINES:
        a, b, c = board.line_cells(line)
        if a is not None and a is b and b is c:
            return a
    return None


def classify(board: Board) -> GameResult:
    """
    Classify a board as won, drawn, or still in progress.

    A draw requires both no winning line and no empty cell; a full board with
    a completed line is a win, not a draw.
    """
    player = winner(board)
    if player is not None:
        return PlayerWon(player)
    if board.empty_count() == 0:
        return DRAW
    return CONTINUES


def is_terminal(board: Board) -> bool:
    return not isinstance(classify(board), Continues)


def wins_immediately(player: Player, board: Board, pos: Position) -> bool:
    """
    True if placing player's mark on the empty cell pos completes a line.

    Only the lines through pos are inspected.
    """
    for line in LINES_THROUGH[pos]:
        if all(p == pos or board.rows[p.row][p.col] is player for p in line):
            return True
    return False


def is_active_line(cells) -> bool:
    """Live but undecided: marks from exactly one player plus an empty cell."""
    marks = {cell for cell in cells if cell is not None}
    return len(marks) == 1 and None in cells


def active_lines(board: Board) -> int:
    return sum(1 for line in LINES if is_active_line(board.line_cells(line)))
