from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from tictactoe.errors import OutOfRange
from tictactoe.models import CellState, GamePiece, Outcome

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# Rows, then columns, then diagonals. Evaluation stops at the first owned line.
WINNING_TRIPLES: list[tuple[int, int, int]] = [
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
]


class PlaceResult(StrEnum):
    ok = "ok"
    cell_occupied = "cell_occupied"


def check_index(index: int) -> int:
    # bool is an int subclass; True/False are never cell indices.
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < CELL_COUNT:
        raise OutOfRange(index)
    return index


@dataclass(frozen=True, slots=True)
class Cell:
    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE):
            raise OutOfRange((self.row, self.col))

    @property
    def index(self) -> int:
        return self.row * BOARD_SIZE + self.col

    @staticmethod
    def from_index(index: int) -> "Cell":
        check_index(index)
        return Cell(row=index // BOARD_SIZE, col=index % BOARD_SIZE)


class Board:
    """The 3x3 grid of cell states.

    Knows nothing about phases or turn order; legality of a move beyond
    "the cell is empty" is the controller's concern.
    """

    def __init__(self) -> None:
        self._cells: list[CellState] = [CellState.empty] * CELL_COUNT

    @property
    def cells(self) -> tuple[CellState, ...]:
        return tuple(self._cells)

    @property
    def move_count(self) -> int:
        return sum(1 for c in self._cells if c != CellState.empty)

    def cell_state(self, index: int) -> CellState:
        return self._cells[check_index(index)]

    def is_empty(self, index: int) -> bool:
        return self.cell_state(index) == CellState.empty

    def empty_indices(self) -> list[int]:
        return [i for i, c in enumerate(self._cells) if c == CellState.empty]

    def place_piece(self, index: int, piece: GamePiece) -> PlaceResult:
        if not self.is_empty(index):
            return PlaceResult.cell_occupied
        self._cells[index] = CellState.of(piece)
        return PlaceResult.ok

    def winning_line(self) -> tuple[int, int, int] | None:
        for a, b, c in WINNING_TRIPLES:
            first = self._cells[a]
            if first != CellState.empty and first == self._cells[b] == self._cells[c]:
                return (a, b, c)
        return None

    def evaluate_outcome(self) -> Outcome:
        line = self.winning_line()
        if line is not None:
            piece = self._cells[line[0]].piece
            assert piece is not None
            return Outcome.win(piece)
        if CellState.empty not in self._cells:
            return Outcome.draw()
        return Outcome.in_progress()

    def reset(self) -> None:
        self._cells = [CellState.empty] * CELL_COUNT

    def __repr__(self) -> str:
        marks = "".join("." if c == CellState.empty else c.value for c in self._cells)
        return f"Board({marks[0:3]}/{marks[3:6]}/{marks[6:9]})"
