from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from tictactoe.board import Board, Cell, PlaceResult
from tictactoe.config import GameSettings
from tictactoe.core.events import EventType, GameEvent
from tictactoe.errors import InputNotAllowed, OutOfRange
from tictactoe.fsm import AppliedInput, GameFSM
from tictactoe.models import GamePhase, GamePiece, GameSnapshot, TurnState
from tictactoe.presentation import PieceHandle, Presenter
from tictactoe.turn_processing.validators import ValidationContext, pipeline_for_input

logger = logging.getLogger(__name__)

EventCallback = Callable[[GameEvent], None]


class GameController:
    """Drives one game session from input events.

    Owns the board, the turn fields and the phase FSM. Every input runs to
    completion: validate, transition, mutate, then hand declarative requests to
    the presenter. Inputs the current phase does not accept are ignored and
    recorded as INPUT_IGNORED events.

    Call `start()` once the presenter is ready; it enters the intro phase.
    """

    def __init__(self, presenter: Presenter, settings: GameSettings | None = None):
        self.presenter = presenter
        self.settings = settings or GameSettings()
        self.board = Board()
        self.turn = TurnState()
        self.history: list[GameEvent] = []
        self.game_number = 0
        self._fsm = GameFSM(self.turn)
        self._piece_handles: list[PieceHandle] = []
        self._callbacks: list[EventCallback] = []

    # ============================================================
    #  Observable state
    # ============================================================

    @property
    def phase(self) -> GamePhase:
        return self.turn.phase

    @property
    def current_piece(self) -> GamePiece:
        return self.turn.current_piece

    @property
    def next_piece(self) -> GamePiece:
        return self.turn.next_piece

    @property
    def winner(self) -> GamePiece | None:
        return self.turn.winner

    @property
    def piece_handles(self) -> tuple[PieceHandle, ...]:
        return tuple(self._piece_handles)

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            phase=self.turn.phase,
            current_piece=self.turn.current_piece,
            next_piece=self.turn.next_piece,
            cells=list(self.board.cells),
            outcome=self.board.evaluate_outcome(),
            winner=self.turn.winner,
            move_count=self.board.move_count,
        )

    def on_event(self, callback: EventCallback) -> None:
        self._callbacks.append(callback)

    def _emit(self, type: EventType, payload: dict[str, Any]) -> None:
        event = GameEvent.now(type=type, game_number=self.game_number, payload=payload)
        self.history.append(event)
        for cb in self._callbacks:
            cb(event)

    # ============================================================
    #  Inputs
    # ============================================================

    def start(self) -> AppliedInput:
        """Enter the intro phase for the first game of the session."""

        return self.restart()

    def restart(self) -> AppliedInput:
        """Discard board and turn state and re-enter intro from any phase."""

        self._fsm.restart()
        self._fsm.sync_phase_to_model()
        self._enter_intro()
        return AppliedInput(state_changed=True, phase=self.turn.phase)

    def cell_clicked(self, index: int) -> AppliedInput:
        ctx = ValidationContext(input="cell_clicked", index=index)
        if not self._accepts(ctx):
            return self._unchanged()

        if self.turn.phase == GamePhase.intro:
            self._begin_play(clicked_index=index)
            return AppliedInput(state_changed=True, phase=self.turn.phase)

        return self._play_move(index)

    def board_clicked(self) -> AppliedInput:
        ctx = ValidationContext(input="board_clicked")
        if not self._accepts(ctx):
            return self._unchanged()

        if self.turn.phase == GamePhase.intro:
            self._begin_play(clicked_index=None)
        else:
            self.restart()
        return AppliedInput(state_changed=True, phase=self.turn.phase)

    def cell_hovered(self, index: int, entered: bool) -> AppliedInput:
        """Toggle the hover affordance of an empty cell during play. Never changes state."""

        ctx = ValidationContext(input="cell_hovered", index=index)
        if self._accepts(ctx) and self.board.is_empty(index):
            self.presenter.set_tile_hover_affordance(index, entered)
        return self._unchanged()

    def _accepts(self, ctx: ValidationContext) -> bool:
        try:
            pipeline_for_input(ctx.input).validate(ctx=ctx, turn=self.turn)
        except OutOfRange as e:
            logger.warning("Ignoring %s: %s", ctx.input, e)
            self._emit("INPUT_IGNORED", {"input": ctx.input, "index": ctx.index, "reason": "out_of_range"})
            return False
        except InputNotAllowed as e:
            logger.debug("Ignoring %s: %s", ctx.input, e)
            self._emit("INPUT_IGNORED", {"input": ctx.input, "index": ctx.index, "reason": "not_allowed"})
            return False
        return True

    def _unchanged(self) -> AppliedInput:
        return AppliedInput(state_changed=False, phase=self.turn.phase)

    # ============================================================
    #  Phase entry
    # ============================================================

    def _enter_intro(self) -> None:
        logger.info("Entering phase intro")
        self.game_number += 1
        self.turn.current_piece = GamePiece.X
        self.turn.next_piece = GamePiece.O
        self.turn.winner = None
        self.board.reset()
        # History covers the current game only.
        self.history = []

        handles, self._piece_handles = self._piece_handles, []

        self.presenter.clear_all_piece_visuals(handles)
        self.presenter.set_indicator_color(self.settings.neutral_color)
        self.presenter.set_status_text(self.settings.intro_text)
        self._emit("PHASE_CHANGED", {"phase": GamePhase.intro.value})

    def _begin_play(self, *, clicked_index: int | None) -> None:
        self._fsm.begin_play()
        self._fsm.sync_phase_to_model()
        logger.info("Entering phase play")

        self.presenter.set_status_text(f"First Piece: {self.turn.current_piece}")
        if clicked_index is not None:
            self.presenter.set_tile_hover_affordance(clicked_index, True)
        self._emit("PHASE_CHANGED", {"phase": GamePhase.play.value})

    def _celebrate(self, winner: GamePiece | None) -> None:
        self._fsm.celebrate()
        self._fsm.sync_phase_to_model()
        self.turn.winner = winner

        message = f"Winner: {winner}" if winner is not None else "Tie"
        logger.info("Entering phase celebration (%s)", message)

        self.presenter.set_indicator_color(self.settings.celebration_color)
        self.presenter.set_status_text(message)
        self._emit(
            "PHASE_CHANGED",
            {"phase": GamePhase.celebration.value, "winner": winner.value if winner is not None else None},
        )

    # ============================================================
    #  Moves
    # ============================================================

    def _play_move(self, index: int) -> AppliedInput:
        piece = self.turn.current_piece
        if self.board.place_piece(index, piece) == PlaceResult.cell_occupied:
            logger.debug("Ignoring cell_clicked: cell %d is occupied", index)
            self._emit("INPUT_IGNORED", {"input": "cell_clicked", "index": index, "reason": "cell_occupied"})
            return self._unchanged()

        cell = Cell.from_index(index)
        logger.info("Putting %s on (%d, %d)", piece, cell.row, cell.col)

        self.turn.current_piece = piece.opposite()
        self.turn.next_piece = piece
        outcome = self.board.evaluate_outcome()

        self._piece_handles.append(self.presenter.place_piece_visual(index, piece))
        self.presenter.set_tile_hover_affordance(index, False)
        self.presenter.set_status_text(f"Next Piece: {self.turn.current_piece}")
        self._emit("PIECE_PLACED", {"index": index, "row": cell.row, "col": cell.col, "piece": piece.value})

        if outcome.is_over:
            self._celebrate(outcome.winner)

        return AppliedInput(state_changed=True, phase=self.turn.phase)
