from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from tictactoe.board import check_index
from tictactoe.errors import InputNotAllowed
from tictactoe.models import GamePhase, TurnState

InputName = Literal["cell_clicked", "board_clicked", "cell_hovered"]


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Keep this tight so we can safely log it.
    """

    input: InputName
    index: int | None = None


class InputValidator(ABC):
    """A small, composable validation unit for an incoming input event."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, turn: TurnState) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class PhaseValidator(InputValidator):
    """Validates current game phase for a given input."""

    allowed_phases: frozenset[GamePhase]

    def validate(self, *, ctx: ValidationContext, turn: TurnState) -> None:
        if turn.phase not in self.allowed_phases:
            allowed = ",".join(sorted(p.value for p in self.allowed_phases))
            raise InputNotAllowed(f"Input '{ctx.input}' not allowed in phase '{turn.phase.value}' (allowed: {allowed})")


@dataclass(frozen=True, slots=True)
class CellIndexValidator(InputValidator):
    """Reject indices outside the board before they reach it.

    Inputs without an index (a generic board tap) pass unless `required` is set.
    """

    required: bool = True

    def validate(self, *, ctx: ValidationContext, turn: TurnState) -> None:
        if ctx.index is None:
            if self.required:
                raise InputNotAllowed(f"Input '{ctx.input}' requires a cell index")
            return
        check_index(ctx.index)


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[InputValidator, ...]

    def validate(self, *, ctx: ValidationContext, turn: TurnState) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, turn=turn)


# A cell click in intro starts the game like a board tap; in celebration only a
# board tap restarts.
DEFAULT_INPUT_PIPELINES: dict[str, ValidatorPipeline] = {
    "cell_clicked": ValidatorPipeline(
        validators=(
            CellIndexValidator(),
            PhaseValidator(allowed_phases=frozenset({GamePhase.intro, GamePhase.play})),
        )
    ),
    "board_clicked": ValidatorPipeline(
        validators=(
            CellIndexValidator(required=False),
            PhaseValidator(allowed_phases=frozenset({GamePhase.intro, GamePhase.celebration})),
        )
    ),
    "cell_hovered": ValidatorPipeline(
        validators=(
            CellIndexValidator(),
            PhaseValidator(allowed_phases=frozenset({GamePhase.play})),
        )
    ),
}


def pipeline_for_input(name: str) -> ValidatorPipeline:
    pipe = DEFAULT_INPUT_PIPELINES.get(name)
    if pipe is None:
        raise ValueError(f"Unknown input: {name}")
    return pipe
