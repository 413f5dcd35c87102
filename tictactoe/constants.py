"""
Engine constants: score bounds, heuristic weights, ordering priorities,
and search-depth tables.

All numeric constants used throughout the engine are defined here so that
no other module introduces a magic number. The heuristic weights are tuned
for move-ordering quality only; game-theoretic correctness never depends
on their exact values, because terminal positions are always scored with
WIN_SCORE / DRAW_SCORE instead of the heuristic.
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------

BOARD_SIZE: int = 3
CELL_COUNT: int = BOARD_SIZE * BOARD_SIZE

# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------
# Terminal scores are reserved: the heuristic never reaches +/-WIN_SCORE on a
# non-terminal board, so a heuristic value and a decided game never collide.

WIN_SCORE: int = 1_000
DRAW_SCORE: int = 0

# Root search window. Wider than any evaluator output.
SEARCH_BOUND: int = 10_000

# ---------------------------------------------------------------------------
# Evaluator weights (per line and positional)
# ---------------------------------------------------------------------------

COMPLETE_LINE_SCORE: int = 100   # three in a line
TWO_IN_LINE_SCORE: int = 10      # two marks, third cell empty
ONE_IN_LINE_SCORE: int = 1       # one mark, two cells empty

CENTER_BONUS: int = 3
CORNER_BONUS: int = 2            # per corner, net of the opponent's corners

# ---------------------------------------------------------------------------
# Move ordering
# ---------------------------------------------------------------------------

IMMEDIATE_WIN_PRIORITY: int = 10_000
BLOCK_PRIORITY: int = 5_000

FORK_BONUS_MULTIPLE: int = 20    # move keeps two or more lines promising
FORK_BONUS_SINGLE: int = 5       # move keeps exactly one line promising

CENTER_PRIORITY: int = 3
CORNER_PRIORITY: int = 2
EDGE_PRIORITY: int = 1

# ---------------------------------------------------------------------------
# Search depth
# ---------------------------------------------------------------------------
# MAX_DEPTH equals the number of cells: a depth-9 search always reaches
# terminal positions, so it is exhaustive and exact.

MAX_DEPTH: int = CELL_COUNT

# Base depth keyed by the number of remaining moves. Seven or more remaining
# moves fall back to DEFAULT_BASE_DEPTH.
BASE_DEPTH_BY_MOVES: dict[int, int] = {
    1: 1,
    2: 3,
    3: 5,
    4: 6,
    5: 7,
    6: 6,
}
DEFAULT_BASE_DEPTH: int = 5

# Game-phase bonus, selected by remaining moves.
OPENING_MIN_MOVES: int = 7
MIDDLEGAME_MIN_MOVES: int = 4
OPENING_DEPTH_BONUS: int = 1
MIDDLEGAME_DEPTH_BONUS: int = 2
ENDGAME_DEPTH_BONUS: int = 3

# Tactical bonus: applied when at least this many lines are live and undecided.
TACTICAL_ACTIVE_LINES: int = 3
TACTICAL_DEPTH_BONUS: int = 1

# At or below this many legal moves the root runs one direct search instead
# of iterative deepening.
DIRECT_SEARCH_MAX_MOVES: int = 4

# ---------------------------------------------------------------------------
# Caller-side time management
# ---------------------------------------------------------------------------
# The engine has no cancellation. Callers run it on a worker thread and give
# up after this many seconds.

SEARCH_TIMEOUT_SECONDS: float = 10.0
MIN_TIME_LIMIT_SECONDS: float = 0.1
