"""Terminal host: plays the game on stdin/stdout through the presenter interface."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

from tictactoe.board import Board, Cell
from tictactoe.config import GameSettings, load_settings
from tictactoe.controller import GameController
from tictactoe.errors import OutOfRange
from tictactoe.models import RGB, CellState, GamePiece

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: 0-8 or 'row col' = click cell, empty or 'b' = click board, 'h i'/'u i' = hover, 'q' = quit"


def board_to_text(board: Board) -> str:
    """Deterministic 3-line grid; empty cells show their index."""

    rows: list[str] = []
    for row in range(3):
        marks = []
        for col in range(3):
            idx = Cell(row=row, col=col).index
            state = board.cell_state(idx)
            marks.append(str(idx) if state == CellState.empty else state.value)
        rows.append(" " + " | ".join(marks))
    return "\n---+---+---\n".join(rows)


class ConsolePresenter:
    """Presenter that renders requests as text lines.

    Piece handles are sequential ints; clearing just forgets them.
    """

    def __init__(self, out: TextIO):
        self.out = out
        self.live_handles: set[int] = set()
        self.hovered: set[int] = set()
        self._next_handle = 0

    def _write(self, line: str) -> None:
        print(line, file=self.out)

    def set_status_text(self, message: str) -> None:
        self._write(f"[status] {message}")

    def set_indicator_color(self, rgb: RGB) -> None:
        self._write(f"[light] rgb({rgb.r:.2f}, {rgb.g:.2f}, {rgb.b:.2f})")

    def place_piece_visual(self, index: int, piece: GamePiece) -> int:
        self._next_handle += 1
        self.live_handles.add(self._next_handle)
        return self._next_handle

    def clear_all_piece_visuals(self, handles: Sequence[int]) -> None:
        for h in handles:
            self.live_handles.discard(h)
        self.hovered.clear()

    def set_tile_hover_affordance(self, index: int, enabled: bool) -> None:
        if enabled:
            self.hovered.add(index)
        else:
            self.hovered.discard(index)


def parse_command(line: str) -> tuple[str, int | None]:
    """Map one input line to (input name, index).

    Returns ("quit", None) for 'q', ("help", None) for '?'.
    """

    text = line.strip().lower()
    if text in {"", "b"}:
        return "board_clicked", None
    if text in {"q", "quit", "exit"}:
        return "quit", None
    if text in {"?", "help"}:
        return "help", None

    parts = text.split()
    if parts[0] in {"h", "u"} and len(parts) == 2:
        return ("hover_enter" if parts[0] == "h" else "hover_exit"), int(parts[1])
    if len(parts) == 2:
        return "cell_clicked", Cell(row=int(parts[0]), col=int(parts[1])).index
    if len(parts) == 1:
        return "cell_clicked", int(parts[0])
    raise ValueError(f"Unrecognized command: {line.strip()!r}")


def run(*, lines: Iterable[str], out: TextIO, settings: GameSettings | None = None) -> GameController:
    """Feed input lines to a fresh controller until input ends or 'q'."""

    presenter = ConsolePresenter(out)
    gc = GameController(presenter=presenter, settings=settings)
    gc.start()
    print(HELP_TEXT, file=out)

    for line in lines:
        try:
            name, index = parse_command(line)
        except (ValueError, OutOfRange) as e:
            print(f"[error] {e}", file=out)
            continue

        if name == "quit":
            break
        if name == "help":
            print(HELP_TEXT, file=out)
            continue

        if name == "board_clicked":
            gc.board_clicked()
        elif name == "cell_clicked":
            assert index is not None
            gc.cell_clicked(index)
        else:
            assert index is not None
            gc.cell_hovered(index, entered=(name == "hover_enter"))
            continue

        print(board_to_text(gc.board), file=out)

    return gc


def main(argv: Sequence[str] | None = None) -> None:
    """Command line entry point."""

    parser = argparse.ArgumentParser(description="Two-player tic-tac-toe in the terminal")
    parser.add_argument("--log-level", default=None, help="logging level (default $TICTACTOE_LOG_LEVEL or WARNING)")
    parser.add_argument("--intro-text", default=None, help="override the intro prompt")
    args = parser.parse_args(argv)

    # pydantic's ValidationError is a ValueError too.
    try:
        settings = load_settings()
    except ValueError as e:
        parser.error(f"invalid TICTACTOE_* environment setting: {e}")

    level = (args.log_level or settings.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        parser.error(f"unknown log level: {level!r}")
    logging.basicConfig(level=level)

    if args.intro_text:
        settings = settings.model_copy(update={"intro_text": args.intro_text})

    logger.debug("Starting console host with settings %s", settings.model_dump())
    run(lines=sys.stdin, out=sys.stdout, settings=settings)


if __name__ == "__main__":
    main()
