from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import pytest

from tictactoe.config import GameSettings
from tictactoe.controller import GameController
from tictactoe.models import RGB, GamePiece


@dataclass
class RecordingPresenter:
    """Presenter double that records every request in order.

    `calls` holds (method, args) tuples; handles are strings like "X@0".
    """

    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    cleared: list[list[str]] = field(default_factory=list)

    def set_status_text(self, message: str) -> None:
        self.calls.append(("set_status_text", (message,)))

    def set_indicator_color(self, rgb: RGB) -> None:
        self.calls.append(("set_indicator_color", (rgb,)))

    def place_piece_visual(self, index: int, piece: GamePiece) -> str:
        self.calls.append(("place_piece_visual", (index, piece)))
        return f"{piece.value}@{index}"

    def clear_all_piece_visuals(self, handles: Sequence[str]) -> None:
        self.calls.append(("clear_all_piece_visuals", (list(handles),)))
        self.cleared.append(list(handles))

    def set_tile_hover_affordance(self, index: int, enabled: bool) -> None:
        self.calls.append(("set_tile_hover_affordance", (index, enabled)))

    def of(self, method: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]

    @property
    def last_status(self) -> str | None:
        statuses = self.of("set_status_text")
        return statuses[-1][0] if statuses else None


@pytest.fixture()
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture()
def controller(presenter: RecordingPresenter) -> GameController:
    """A started controller sitting in the intro phase."""

    gc = GameController(presenter=presenter, settings=GameSettings())
    gc.start()
    return gc


@pytest.fixture()
def playing(controller: GameController) -> GameController:
    """A controller that has left intro via a board tap."""

    controller.board_clicked()
    return controller


def play_moves(gc: GameController, indices: Sequence[int]) -> None:
    for idx in indices:
        gc.cell_clicked(idx)
