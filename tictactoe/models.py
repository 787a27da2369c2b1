from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class GamePiece(StrEnum):
    X = "X"
    O = "O"

    def opposite(self) -> "GamePiece":
        return GamePiece.O if self == GamePiece.X else GamePiece.X


class CellState(StrEnum):
    empty = "empty"
    X = "X"
    O = "O"

    @classmethod
    def of(cls, piece: GamePiece) -> "CellState":
        return cls(piece.value)

    @property
    def piece(self) -> GamePiece | None:
        if self == CellState.empty:
            return None
        return GamePiece(self.value)


class GamePhase(StrEnum):
    intro = "intro"
    play = "play"
    celebration = "celebration"


class OutcomeStatus(StrEnum):
    in_progress = "in_progress"
    win = "win"
    draw = "draw"


class Outcome(BaseModel, frozen=True):
    """Result of evaluating the board. Always derived, never stored on the board."""

    status: OutcomeStatus
    winner: GamePiece | None = None

    @classmethod
    def in_progress(cls) -> "Outcome":
        return cls(status=OutcomeStatus.in_progress)

    @classmethod
    def win(cls, piece: GamePiece) -> "Outcome":
        return cls(status=OutcomeStatus.win, winner=piece)

    @classmethod
    def draw(cls) -> "Outcome":
        return cls(status=OutcomeStatus.draw)

    @property
    def is_over(self) -> bool:
        return self.status != OutcomeStatus.in_progress


class RGB(BaseModel, frozen=True):
    r: float = Field(..., ge=0.0, le=1.0)
    g: float = Field(..., ge=0.0, le=1.0)
    b: float = Field(..., ge=0.0, le=1.0)


class TurnState(BaseModel):
    """Mutable phase and turn fields owned by a single controller."""

    phase: GamePhase = GamePhase.intro
    current_piece: GamePiece = GamePiece.X
    next_piece: GamePiece = GamePiece.O
    winner: GamePiece | None = None


class GameSnapshot(BaseModel):
    """Observable game state handed to presentation code."""

    phase: GamePhase
    current_piece: GamePiece
    next_piece: GamePiece

    # Row-major, index = row * 3 + col.
    cells: list[CellState] = Field(..., min_length=9, max_length=9)

    outcome: Outcome = Field(default_factory=Outcome.in_progress)

    # Only set once the game reached celebration with a winner; a tie leaves it None.
    winner: GamePiece | None = None

    move_count: int = Field(0, ge=0, le=9)
