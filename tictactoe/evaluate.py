"""
Static position evaluation: line potential plus positional bonuses.

The search needs a numeric score for positions where it stops before the
game ends. This module scores a board from one player's perspective by
summing a contribution from each of the 8 lines and adding small bonuses
for the center and corners.

Per-line contribution (positive when it favors the scoring player):
    three of one player          +/-100
    two of one player, one empty +/-10
    one of one player, two empty +/-1
    empty or mixed (blocked)      0

Observed values stay roughly within -50..+50. Terminal positions are never
scored here: terminal_score() returns exactly +/-WIN_SCORE or DRAW_SCORE,
and the search consults it before falling back to the heuristic.

The heuristic is antisymmetric: evaluate(p, board) == -evaluate(p.opponent,
board) for every board, which is what the negamax negation step relies on.
"""

from tictactoe.board import CENTER, CORNERS, LINES, Board, Player
from tictactoe.constants import (
    CENTER_BONUS,
    COMPLETE_LINE_SCORE,
    CORNER_BONUS,
    DRAW_SCORE,
    ONE_IN_LINE_SCORE,
    TWO_IN_LINE_SCORE,
    WIN_SCORE,
)
from tictactoe.rules import Draw, PlayerWon, classify

# Indexed by mark count when the rest of the line is empty.
_LINE_SCORES: tuple[int, ...] = (0, ONE_IN_LINE_SCORE, TWO_IN_LINE_SCORE, COMPLETE_LINE_SCORE)


def line_score(player: Player, cells) -> int:
    """Contribution of a single line for player."""
    mine = theirs = 0
    for cell in cells:
        if cell is player:
            mine += 1
        elif cell is not None:
            theirs += 1
    if mine and theirs:
        return 0
    if mine:
        return _LINE_SCORES[mine]
    return -_LINE_SCORES[theirs]


def evaluate(player: Player, board: Board) -> int:
    """
    Heuristic score of a non-terminal board from player's perspective.

    Args:
        player: The side whose advantage is measured.
        board:  The position to score. Not modified.

    Returns:
        Sum of the 8 line contributions, plus +/-CENTER_BONUS for the center
        owner, plus (player corners - opponent corners) * CORNER_BONUS.

    Example:
        >>> evaluate(Player.X, Board.parse("X...O...."))
        -2
    """
    score = 0
    for line in LINES:
        score += line_score(player, board.line_cells(line))

    center = board.cell(CENTER)
    if center is player:
        score += CENTER_BONUS
    elif center is not None:
        score -= CENTER_BONUS

    mine = theirs = 0
    for corner in CORNERS:
        owner = board.cell(corner)
        if owner is player:
            mine += 1
        elif owner is not None:
            theirs += 1
    score += (mine - theirs) * CORNER_BONUS
    return score


def terminal_score(player: Player, board: Board) -> int | None:
    """
    Exact score of a finished game from player's perspective.

    Returns:
        WIN_SCORE if player has won, -WIN_SCORE if the opponent has,
        DRAW_SCORE for a draw, or None while the game continues.
    """
    result = classify(board)
    if isinstance(result, PlayerWon):
        return WIN_SCORE if result.player is player else -WIN_SCORE
    if isinstance(result, Draw):
        return DRAW_SCORE
    return None


def score_position(player: Player, board: Board) -> int:
    """Terminal score when the game is over, heuristic score otherwise."""
    exact = terminal_score(player, board)
    if exact is not None:
        return exact
    return evaluate(player, board)
