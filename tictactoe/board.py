"""
Board model and move generation.

A board is an immutable 3x3 grid of optional marks. Every move produces a
new Board value; nothing in the engine mutates a board in place, so sibling
branches in the search tree never alias each other and backtracking needs
no undo step.

Coordinates are (row, col) pairs with row 0 at the top. Cells are scanned
in row-major order wherever an order is observable (legal_moves, the line
table, text serialization).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple

from tictactoe.constants import BOARD_SIZE


class Player(Enum):
    """One of the two symmetric tokens."""

    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    def __str__(self) -> str:
        return self.value


class Position(NamedTuple):
    """A (row, col) coordinate. Validity is checked, never assumed."""

    row: int
    col: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE


Cell = Player | None
Rows = tuple[tuple[Cell, ...], ...]

# Characters accepted as an empty cell by Board.parse. "." is canonical.
_EMPTY_CHARS = frozenset("._- ")


# ---------------------------------------------------------------------------
# Line and cell-class tables
# ---------------------------------------------------------------------------

def _build_lines() -> tuple[tuple[Position, ...], ...]:
    rows = [tuple(Position(r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)]
    cols = [tuple(Position(r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)]
    main_diag = tuple(Position(i, i) for i in range(BOARD_SIZE))
    anti_diag = tuple(Position(i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE))
    return tuple(rows + cols + [main_diag, anti_diag])


# The 8 winning lines, in detection order: rows, columns, main diagonal,
# anti-diagonal.
LINES: tuple[tuple[Position, ...], ...] = _build_lines()

# For every cell, the lines passing through it (2 for edges, 3 for corners,
# 4 for the center).
LINES_THROUGH: dict[Position, tuple[tuple[Position, ...], ...]] = {
    Position(r, c): tuple(line for line in LINES if Position(r, c) in line)
    for r in range(BOARD_SIZE)
    for c in range(BOARD_SIZE)
}

CENTER: Position = Position(BOARD_SIZE // 2, BOARD_SIZE // 2)
CORNERS: tuple[Position, ...] = (
    Position(0, 0),
    Position(0, BOARD_SIZE - 1),
    Position(BOARD_SIZE - 1, 0),
    Position(BOARD_SIZE - 1, BOARD_SIZE - 1),
)


# ---------------------------------------------------------------------------
# Board
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Board:
    """
    Immutable 3x3 grid of optional marks.

    Attributes:
        rows: Exactly three rows of exactly three cells. Each cell holds a
              Player or None for an empty cell.

    Raises:
        ValueError: On construction, if the grid has the wrong shape or a
                    cell holds something other than a Player or None.
    """

    rows: Rows

    def __post_init__(self) -> None:
        if len(self.rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in self.rows):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        for row in self.rows:
            for cell in row:
                if cell is not None and not isinstance(cell, Player):
                    raise ValueError(f"Invalid cell value: {cell!r}")

    @classmethod
    def empty(cls) -> "Board":
        return cls(tuple((None,) * BOARD_SIZE for _ in range(BOARD_SIZE)))

    @classmethod
    def from_rows(cls, rows) -> "Board":
        """Build a board from any nested iterable of Player/None cells."""
        return cls(tuple(tuple(row) for row in rows))

    @classmethod
    def parse(cls, text: str) -> "Board":
        """
        Parse a board from 9 row-major characters.

        Whitespace between rows (newlines, slashes) is ignored, so "XX./OO./..."
        and "XX.OO...." describe the same board. "X" and "O" are marks
        (case-insensitive); ".", "_", "-" and a space inside a row are empty.

        Raises:
            ValueError: If the text does not describe exactly 9 cells.
        """
        cells: list[Cell] = []
        for ch in text.replace("/", "").replace("\n", ""):
            if ch.upper() == "X":
                cells.append(Player.X)
            elif ch.upper() == "O":
                cells.append(Player.O)
            elif ch in _EMPTY_CHARS:
                cells.append(None)
            else:
                raise ValueError(f"Invalid board character: {ch!r}")
        if len(cells) != BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"Board text must describe {BOARD_SIZE * BOARD_SIZE} cells, got {len(cells)}")
        return cls(tuple(
            tuple(cells[r * BOARD_SIZE:(r + 1) * BOARD_SIZE]) for r in range(BOARD_SIZE)
        ))

    def cell(self, pos: Position) -> Cell:
        if not pos.is_valid:
            raise ValueError(f"Position out of range: {pos}")
        return self.rows[pos.row][pos.col]

    def is_empty(self, pos: Position) -> bool:
        return self.cell(pos) is None

    def count(self, player: Player) -> int:
        return sum(1 for row in self.rows for cell in row if cell is player)

    def empty_count(self) -> int:
        return sum(1 for row in self.rows for cell in row if cell is None)

    def line_cells(self, line: tuple[Position, ...]) -> tuple[Cell, ...]:
        return tuple(self.rows[p.row][p.col] for p in line)

    def is_balanced(self) -> bool:
        """True if the two players' mark counts differ by at most one."""
        return abs(self.count(Player.X) - self.count(Player.O)) <= 1

    def __str__(self) -> str:
        return "".join("." if cell is None else cell.value for row in self.rows for cell in row)

    def pretty(self) -> str:
        """Three-line rendering for logs and the benchmark tool."""
        return "\n".join(
            " ".join("." if cell is None else cell.value for cell in row) for row in self.rows
        )


# ---------------------------------------------------------------------------
# Move application and generation
# ---------------------------------------------------------------------------

def apply_move(board: Board, player: Player, pos: Position) -> Board:
    """
    Return a new board with player's mark at pos.

    The caller guarantees pos came from legal_moves(board); occupancy is not
    re-checked here.

    Raises:
        ValueError: If pos is outside the grid.
    """
    if not pos.is_valid:
        raise ValueError(f"Position out of range: {pos}")
    row = board.rows[pos.row]
    new_row = row[:pos.col] + (player,) + row[pos.col + 1:]
    return Board(board.rows[:pos.row] + (new_row,) + board.rows[pos.row + 1:])


def iter_legal_moves(board: Board) -> Iterator[Position]:
    for r, row in enumerate(board.rows):
        for c, cell in enumerate(row):
            if cell is None:
                yield Position(r, c)


def legal_moves(board: Board) -> list[Position]:
    """Empty cells in row-major order."""
    return list(iter_legal_moves(board))
