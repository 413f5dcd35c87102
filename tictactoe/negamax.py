"""
Game-agnostic negamax search with alpha-beta pruning.

Negamax exploits the zero-sum property: a position's value to the side to
move is the negation of its value to the opponent. The recursion therefore
always maximizes, negating each child's score and swapping the window.

The engine knows nothing about tic-tac-toe. A GameRules bundle supplies the
five operations it needs, so the same function drives any two-player
zero-sum game whose state records the side to move (the tests run it on
Nim as well):

    evaluate(state)              score from the side-to-move's perspective
    generate_moves(state)        legal moves
    apply_move(state, move)      successor state; must not mutate state
    is_terminal(state)           game over?
    order_moves(state, moves)    reordered moves, best guess first

Scores are ExtendedScore values, so bounds may be the infinity sentinels
without any risk of overflow when negated.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

from tictactoe.score import NEGATIVE_INFINITY, ExtendedScore

S = TypeVar("S")
M = TypeVar("M")


@dataclass(frozen=True)
class GameRules(Generic[S, M]):
    """The five operations the search needs from a game."""

    evaluate: Callable[[S], int]
    generate_moves: Callable[[S], Sequence[M]]
    apply_move: Callable[[S, M], S]
    is_terminal: Callable[[S], bool]
    order_moves: Callable[[S, Sequence[M]], Sequence[M]]


def negamax(
    rules: GameRules[S, M],
    state: S,
    depth: int,
    alpha: ExtendedScore,
    beta: ExtendedScore,
) -> ExtendedScore:
    """
    Negamax value of state, searched depth plies deep inside [alpha, beta].

    Args:
        rules: Game operations.
        state: Position to search. Never mutated.
        depth: Remaining plies. At 0 the static evaluation is returned.
        alpha: Lower bound of the window (what the mover can already force).
        beta:  Upper bound of the window (what the opponent will allow).

    Returns:
        The best score found (fail-soft). If the true value lies inside the
        window it is returned exactly; otherwise the result is a bound on the
        same side of the window as the true value.

    A terminal state, a depth of 0, or a state with no moves is scored by
    rules.evaluate. A child is searched with the window (-beta, -alpha) and its
    score negated. Once alpha >= beta the remaining siblings are skipped: the
    opponent already has a better alternative elsewhere and will never allow
    this line.
    """
    if depth <= 0 or rules.is_terminal(state):
        return ExtendedScore.finite(rules.evaluate(state))

    moves = rules.generate_moves(state)
    if not moves:
        return ExtendedScore.finite(rules.evaluate(state))

    best = NEGATIVE_INFINITY
    for move in rules.order_moves(state, moves):
        child = rules.apply_move(state, move)
        score = -negamax(rules, child, depth - 1, -beta, -alpha)
        if score > best:
            best = score
        if best > alpha:
            alpha = best
        if alpha >= beta:
            break
    return best


def search_root(
    rules: GameRules[S, M],
    state: S,
    moves: Sequence[M],
    depth: int,
    alpha: ExtendedScore,
    beta: ExtendedScore,
) -> tuple[M | None, ExtendedScore]:
    """
    Pick the best of moves by searching each child depth - 1 plies.

    moves are searched in the order given (no further ordering at the root).
    The first move with the highest negated child score wins ties. alpha is
    raised as better moves are found, which only ever prunes moves that could
    not beat the current best.

    Returns:
        (best move, its score), or (None, NEGATIVE_INFINITY) if moves is empty.
    """
    best_move: M | None = None
    best = NEGATIVE_INFINITY
    for move in moves:
        child = rules.apply_move(state, move)
        score = -negamax(rules, child, depth - 1, -beta, -alpha)
        if score > best:
            best = score
            best_move = move
        if best > alpha:
            alpha = best
    return best_move, best
