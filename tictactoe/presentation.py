from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from tictactoe.models import RGB, GamePiece

# Whatever the presentation layer returns for a materialized piece. The core only
# stores these and hands them back in `clear_all_piece_visuals`.
PieceHandle = Any


class StatusDisplay(Protocol):
    def set_status_text(self, message: str) -> None:  # pragma: no cover
        ...


class AmbientIndicator(Protocol):
    def set_indicator_color(self, rgb: RGB) -> None:  # pragma: no cover
        ...


class PieceVisuals(Protocol):
    def place_piece_visual(self, index: int, piece: GamePiece) -> PieceHandle:  # pragma: no cover
        ...

    def clear_all_piece_visuals(self, handles: Sequence[PieceHandle]) -> None:  # pragma: no cover
        ...


class TileHoverAffordance(Protocol):
    def set_tile_hover_affordance(self, index: int, enabled: bool) -> None:  # pragma: no cover
        ...


class Presenter(StatusDisplay, AmbientIndicator, PieceVisuals, TileHoverAffordance, Protocol):
    """Everything the controller asks of the presentation layer.

    Requests are fire-and-forget: the controller commits its own state first and
    never waits on a collaborator.
    """
