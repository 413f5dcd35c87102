"""
FastAPI web application for the tic-tac-toe engine.

Exposes a REST endpoint (POST /api/move) that accepts a board and the side
to move, runs the engine, and returns the chosen move with the resulting
board, game result, and search metrics.

Architecture notes:
- Sync endpoint (not async): FastAPI runs sync handlers in a thread pool,
  which suits a CPU-bound blocking call like the engine search.
- Wall-clock budget: the engine has no cancellation, so each search runs on
  a daemon worker thread joined with the request's time limit. On expiry
  the result is abandoned and the client gets a recoverable SearchTimeout.
- Stateless per request: the client sends the full board each time; no
  server-side game state is kept between requests.
"""

import logging
import threading

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, field_validator

from tictactoe.board import Board, Player, Position, apply_move
from tictactoe.constants import MIN_TIME_LIMIT_SECONDS, SEARCH_TIMEOUT_SECONDS
from tictactoe.rules import Continues, Draw, PlayerWon, classify
from tictactoe.search import PerformanceMetrics, find_best_move_with_metrics

# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------

logging.basicConfig(level=logging.INFO)
_log = logging.getLogger(__name__)

app = FastAPI(title="Tic-Tac-Toe AI", version="1.0.0")


class SearchTimeout(Exception):
    """The search did not finish inside the caller's time budget."""


# ---------------------------------------------------------------------------
# Request / response models
# ---------------------------------------------------------------------------


class MoveRequest(BaseModel):
    """
    Client request to the engine.

    Fields:
        board:      9 row-major characters, "X"/"O" for marks and "." (or
                    "_", "-") for empty cells. Normalized to "." on input.
        player:     Side to move, "X" or "O".
        time_limit: Seconds the client is willing to wait (clamped to
                    [0.1, 10.0]).
    """

    board: str
    player: Player
    time_limit: float = SEARCH_TIMEOUT_SECONDS

    @field_validator("board")
    @classmethod
    def parse_board(cls, v: str) -> str:
        """Reject anything that is not a 3x3 board; normalize the rest."""
        return str(Board.parse(v))

    @field_validator("time_limit")
    @classmethod
    def clamp_time_limit(cls, v: float) -> float:
        """Clamp time_limit to a safe operating range."""
        return max(MIN_TIME_LIMIT_SECONDS, min(v, SEARCH_TIMEOUT_SECONDS))


class MetricsModel(BaseModel):
    search_depth: int
    moves_evaluated: int
    nodes_searched: int
    immediate_move: bool
    iterative_deepening: bool
    pruning_effectiveness: float


class MoveResponse(BaseModel):
    """
    Engine response after computing the best move.

    Fields:
        move:    (row, col) of the chosen cell.
        board:   Board after the move, same text format as the request.
        result:  "X" or "O" if that player has now won, "draw", or
                 "continues".
        metrics: Search diagnostics.
    """

    move: tuple[int, int]
    board: str
    result: str
    metrics: MetricsModel


class ErrorInfo(BaseModel):
    """Error body returned in the "detail" field of failed requests."""

    message: str
    error_type: str
    recoverable: bool = True


def _error(status_code: int, error_type: str, message: str, recoverable: bool = True) -> HTTPException:
    info = ErrorInfo(message=message, error_type=error_type, recoverable=recoverable)
    return HTTPException(status_code=status_code, detail=info.model_dump())


def _result_label(board: Board) -> str:
    result = classify(board)
    if isinstance(result, PlayerWon):
        return result.player.value
    if isinstance(result, Draw):
        return "draw"
    return "continues"


# ---------------------------------------------------------------------------
# Search with a wall-clock budget
# ---------------------------------------------------------------------------


def search_with_timeout(
    player: Player,
    board: Board,
    timeout: float,
) -> tuple[Position | None, PerformanceMetrics]:
    """
    Run find_best_move_with_metrics on a worker thread.

    Raises:
        SearchTimeout: If the search is still running after timeout seconds.
                       The worker is a daemon thread and is left to finish
                       on its own; its result is discarded.
        Exception:     Whatever the search itself raised.
    """
    outcome: dict = {}

    def _run() -> None:
        try:
            outcome["value"] = find_best_move_with_metrics(player, board)
        except Exception as exc:
            outcome["error"] = exc

    worker = threading.Thread(target=_run, name="tictactoe-search", daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        raise SearchTimeout(f"Search exceeded {timeout:.1f}s")
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.post("/api/move", response_model=MoveResponse)
def api_move(request: MoveRequest) -> MoveResponse:
    """
    Compute the engine's move for the given board.

    Raises:
        HTTPException 400: Unbalanced board or game already over.
        HTTPException 422: Malformed board or player (pydantic validation).
        HTTPException 500: Engine error or no move returned.
        HTTPException 504: Search exceeded the time budget.
    """
    board = Board.parse(request.board)

    if not board.is_balanced():
        raise _error(400, "InvalidBoard", "Mark counts differ by more than one")

    if not isinstance(classify(board), Continues):
        raise _error(400, "GameOver", f"Game is already over: {_result_label(board)}")

    try:
        move, metrics = search_with_timeout(request.player, board, request.time_limit)
    except SearchTimeout as exc:
        _log.warning("Search timed out for board=%s player=%s", board, request.player)
        raise _error(504, "SearchTimeout", str(exc)) from exc
    except Exception as exc:
        _log.exception("Engine search failed for board=%s", board)
        raise _error(500, "EngineError", f"Engine error: {exc}", recoverable=False) from exc

    if move is None:
        raise _error(500, "EngineError", "Engine returned no move", recoverable=False)

    after = apply_move(board, request.player, move)
    _log.info(
        "Move=%s player=%s depth=%d nodes=%d board=%s",
        tuple(move),
        request.player,
        metrics.search_depth,
        metrics.nodes_searched,
        board,
    )

    return MoveResponse(
        move=(move.row, move.col),
        board=str(after),
        result=_result_label(after),
        metrics=MetricsModel(**metrics.as_dict()),
    )


@app.get("/api/health")
def health() -> dict:
    """Liveness probe."""
    return {"status": "ok"}
