"""
Search entry point: adaptive depth, iterative deepening, and the top-level
move decision for tic-tac-toe.

find_best_move() and find_best_move_with_metrics() are the public interface
used by the web layer and the benchmark tool. Both are pure: the same
(player, board) always yields the same move, nothing global is read or
written, and they are safe to call from several threads at once.

Decision flow:
    1. No legal moves -> None.
    2. Immediate win available -> first winning cell (row-major).
       Else immediate block needed -> first blocking cell.
    3. Choose a depth (choose_depth) and order moves (order_moves).
    4. At most DIRECT_SEARCH_MAX_MOVES moves left -> one direct search.
       Otherwise -> iterative deepening up to the chosen depth.

The engine cannot be interrupted. Callers that need a wall-clock budget run
it on a worker thread and abandon the result on timeout (see web/app.py).
"""

import logging
from dataclasses import asdict, dataclass
from math import perm
from typing import NamedTuple, Sequence

from tictactoe.board import Board, Player, Position, apply_move, legal_moves
from tictactoe.constants import (
    BASE_DEPTH_BY_MOVES,
    DEFAULT_BASE_DEPTH,
    DIRECT_SEARCH_MAX_MOVES,
    ENDGAME_DEPTH_BONUS,
    MAX_DEPTH,
    MIDDLEGAME_DEPTH_BONUS,
    MIDDLEGAME_MIN_MOVES,
    OPENING_DEPTH_BONUS,
    OPENING_MIN_MOVES,
    SEARCH_BOUND,
    TACTICAL_ACTIVE_LINES,
    TACTICAL_DEPTH_BONUS,
)
from tictactoe.evaluate import score_position
from tictactoe.negamax import GameRules, search_root
from tictactoe.ordering import order_moves, order_moves_simple
from tictactoe.rules import active_lines, is_terminal, wins_immediately
from tictactoe.score import ExtendedScore

_log = logging.getLogger(__name__)


class Node(NamedTuple):
    """A search state: the board plus the side to move."""

    board: Board
    player: Player


@dataclass
class SearchStats:
    """Counters filled in while a search runs."""

    node_count: int = 0
    moves_evaluated: int = 0


@dataclass(frozen=True)
class PerformanceMetrics:
    """
    Diagnostics for one decision. Purely observational.

    Attributes:
        search_depth:          Depth limit used (0 when no search ran).
        moves_evaluated:       Root candidates scored, summed over iterations.
        nodes_searched:        Positions generated by the search, root
                               children included.
        immediate_move:        True if a win/block short-circuit fired.
        iterative_deepening:   True if iterative deepening ran.
        pruning_effectiveness: Estimated share of the full-width tree that
                               was skipped, in [0, 1].
    """

    search_depth: int = 0
    moves_evaluated: int = 0
    nodes_searched: int = 0
    immediate_move: bool = False
    iterative_deepening: bool = False
    pruning_effectiveness: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Game rules bundle
# ---------------------------------------------------------------------------

def tictactoe_rules(stats: SearchStats | None = None) -> GameRules[Node, Position]:
    """
    Bind the tic-tac-toe operations to the generic engine.

    Interior nodes use the simple orderer. When stats is given, every child
    position generated is counted in stats.node_count.
    """
    def _apply(node: Node, move: Position) -> Node:
        if stats is not None:
            stats.node_count += 1
        return Node(apply_move(node.board, node.player, move), node.player.opponent)

    return GameRules(
        evaluate=lambda node: score_position(node.player, node.board),
        generate_moves=lambda node: legal_moves(node.board),
        apply_move=_apply,
        is_terminal=lambda node: is_terminal(node.board),
        order_moves=lambda node, moves: order_moves_simple(node.player, node.board, moves),
    )


def _root_window() -> tuple[ExtendedScore, ExtendedScore]:
    return ExtendedScore.finite(-SEARCH_BOUND), ExtendedScore.finite(SEARCH_BOUND)


# ---------------------------------------------------------------------------
# Depth selection
# ---------------------------------------------------------------------------

def choose_depth(available_moves: Sequence[Position], board: Board) -> int:
    """
    Search depth for a position, from its move count and tactical density.

    base:     1 move -> 1, 2 -> 3, 3 -> 5, 4 -> 6, 5 -> 7, 6 -> 6, 7+ -> 5
    phase:    7+ moves -> +1, 4-6 -> +2, 3 or fewer -> +3
    tactical: +1 when at least TACTICAL_ACTIVE_LINES lines are live and
              undecided (one player's marks plus an empty cell)

    The result is capped at MAX_DEPTH.
    """
    count = len(available_moves)
    base = BASE_DEPTH_BY_MOVES.get(count, DEFAULT_BASE_DEPTH)
    if count >= OPENING_MIN_MOVES:
        phase = OPENING_DEPTH_BONUS
    elif count >= MIDDLEGAME_MIN_MOVES:
        phase = MIDDLEGAME_DEPTH_BONUS
    else:
        phase = ENDGAME_DEPTH_BONUS
    tactical = TACTICAL_DEPTH_BONUS if active_lines(board) >= TACTICAL_ACTIVE_LINES else 0
    return min(MAX_DEPTH, base + phase + tactical)


# ---------------------------------------------------------------------------
# Root searches
# ---------------------------------------------------------------------------

def search_moves(
    player: Player,
    board: Board,
    moves: Sequence[Position],
    depth: int,
    stats: SearchStats | None = None,
) -> tuple[Position | None, ExtendedScore]:
    """
    Full-window search of moves at a fixed depth.

    Returns the first move with the highest score (ties go to the earliest
    move in the given order) together with that score.
    """
    if stats is not None:
        stats.moves_evaluated += len(moves)
    alpha, beta = _root_window()
    return search_root(tictactoe_rules(stats), Node(board, player), moves, depth, alpha, beta)


def iterative_deepen(
    player: Player,
    board: Board,
    initial_moves: Sequence[Position],
    max_depth: int,
    stats: SearchStats | None = None,
) -> Position | None:
    """
    Search at depth 1, 2, ..., max_depth, best-move-first.

    After each completed depth the move found best is moved to the front of
    the candidate list; the rest keep their relative order. The best move of
    the deepest iteration is returned, or None if no iteration found one.
    """
    moves = list(initial_moves)
    best_move: Position | None = None

    for depth in range(1, max_depth + 1):
        move, score = search_moves(player, board, moves, depth, stats)
        if move is None:
            continue
        best_move = move
        moves.remove(move)
        moves.insert(0, move)
        _log.debug(
            "iterative deepening: depth=%d best=%s score=%s nodes=%d",
            depth, move, score, stats.node_count if stats is not None else -1,
        )

    return best_move


# ---------------------------------------------------------------------------
# Top-level decision
# ---------------------------------------------------------------------------

def immediate_move(player: Player, board: Board, moves: Sequence[Position]) -> Position | None:
    """First winning move, else first move blocking an opponent win, else None."""
    for move in moves:
        if wins_immediately(player, board, move):
            return move
    for move in moves:
        if wins_immediately(player.opponent, board, move):
            return move
    return None


def _full_width_nodes(move_count: int, depth: int) -> int:
    """Positions generated by an unpruned search to depth, root children included."""
    return sum(perm(move_count, k) for k in range(1, min(depth, move_count) + 1))


def _pruning_estimate(move_count: int, nodes: int, iterations: Sequence[int]) -> float:
    full = sum(_full_width_nodes(move_count, d) for d in iterations)
    if full <= 0:
        return 0.0
    return max(0.0, min(1.0, 1.0 - nodes / full))


def find_best_move_with_metrics(
    player: Player,
    board: Board,
    depth: int | None = None,
) -> tuple[Position | None, PerformanceMetrics]:
    """
    Choose a move for player and report how the decision was made.

    Args:
        player: The side to move.
        board:  The current position. Must be non-terminal and balanced;
                only the balance is asserted.
        depth:  Optional depth override, clamped to [1, MAX_DEPTH]. When
                omitted, choose_depth() decides.

    Returns:
        (move, metrics). move is None only when the board has no empty cell.
    """
    assert board.is_balanced(), f"unbalanced board: {board}"

    moves = legal_moves(board)
    if not moves:
        return None, PerformanceMetrics()

    quick = immediate_move(player, board, moves)
    if quick is not None:
        _log.debug("immediate move for %s: %s", player, quick)
        return quick, PerformanceMetrics(moves_evaluated=len(moves), immediate_move=True)

    if depth is None:
        depth = choose_depth(moves, board)
    depth = max(1, min(MAX_DEPTH, depth))

    ordered = order_moves(player, board, moves)
    stats = SearchStats()

    if len(moves) <= DIRECT_SEARCH_MAX_MOVES:
        move, score = search_moves(player, board, ordered, depth, stats)
        iterations = [depth]
        deepened = False
        _log.debug("direct search: depth=%d best=%s score=%s", depth, move, score)
    else:
        move = iterative_deepen(player, board, ordered, depth, stats)
        iterations = list(range(1, depth + 1))
        deepened = True

    metrics = PerformanceMetrics(
        search_depth=depth,
        moves_evaluated=stats.moves_evaluated,
        nodes_searched=stats.node_count,
        immediate_move=False,
        iterative_deepening=deepened,
        pruning_effectiveness=_pruning_estimate(len(moves), stats.node_count, iterations),
    )
    return move, metrics


def find_best_move(player: Player, board: Board, depth: int | None = None) -> Position | None:
    """Best move for player on board, or None if no move is possible."""
    move, _ = find_best_move_with_metrics(player, board, depth)
    return move
