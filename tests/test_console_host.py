from __future__ import annotations

import io

import pytest

from tictactoe.board import Board
from tictactoe.config import GameSettings
from tictactoe.console import ConsolePresenter, board_to_text, main, parse_command, run
from tictactoe.errors import OutOfRange
from tictactoe.models import GamePhase, GamePiece


def test_board_to_text_shows_indices_for_empty_cells() -> None:
    board = Board()
    board.place_piece(4, GamePiece.X)
    assert board_to_text(board) == " 0 | 1 | 2\n---+---+---\n 3 | X | 5\n---+---+---\n 6 | 7 | 8"


@pytest.mark.parametrize(
    "line,expected",
    [
        ("", ("board_clicked", None)),
        ("b\n", ("board_clicked", None)),
        ("4", ("cell_clicked", 4)),
        ("2 1", ("cell_clicked", 7)),
        ("h 3", ("hover_enter", 3)),
        ("u 3", ("hover_exit", 3)),
        ("Q", ("quit", None)),
        ("?", ("help", None)),
    ],
)
def test_parse_command(line: str, expected: tuple[str, int | None]) -> None:
    assert parse_command(line) == expected


def test_parse_command_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_command("hello world again")
    with pytest.raises(OutOfRange):
        parse_command("3 0")


def test_console_presenter_tracks_handles() -> None:
    p = ConsolePresenter(io.StringIO())
    h1 = p.place_piece_visual(0, GamePiece.X)
    h2 = p.place_piece_visual(1, GamePiece.O)
    assert p.live_handles == {h1, h2}

    p.clear_all_piece_visuals([h1, h2])
    assert p.live_handles == set()


def test_run_plays_a_full_game() -> None:
    out = io.StringIO()
    lines = ["", "0", "4", "0", "1", "5", "2", "q", "4"]

    gc = run(lines=lines, out=out, settings=GameSettings(intro_text="Welcome"))

    text = out.getvalue()
    assert "[status] Welcome" in text
    assert "[status] First Piece: X" in text
    assert "[status] Winner: X" in text
    assert gc.phase == GamePhase.celebration
    # 'q' stops before the trailing click is read.
    assert gc.board.move_count == 5


def test_run_reports_bad_input_and_continues() -> None:
    out = io.StringIO()
    gc = run(lines=["nonsense here now", "", "9", "8"], out=out)

    assert "[error]" in out.getvalue()
    assert gc.board.cell_state(8).value == "X"


def test_main_uses_env_settings(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("TICTACTOE_INTRO_TEXT", "From env")
    monkeypatch.setattr("sys.stdin", io.StringIO("\nq\n"))

    main(["--log-level", "error"])

    captured = capsys.readouterr().out
    assert "[status] From env" in captured
    assert "[status] First Piece: X" in captured


def test_main_intro_text_flag_overrides_env(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("TICTACTOE_INTRO_TEXT", "From env")
    monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))

    main(["--intro-text", "From flag"])

    captured = capsys.readouterr().out
    assert "[status] From flag" in captured
    assert "From env" not in captured


def test_main_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))

    with pytest.raises(SystemExit) as e:
        main(["--log-level", "verbose"])

    assert e.value.code == 2
    assert "unknown log level: 'VERBOSE'" in capsys.readouterr().err


def test_main_rejects_bad_env_color(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("TICTACTOE_NEUTRAL_COLOR", "a,b,c")
    monkeypatch.setattr("sys.stdin", io.StringIO("q\n"))

    with pytest.raises(SystemExit) as e:
        main([])

    assert e.value.code == 2
    assert "invalid TICTACTOE_* environment setting" in capsys.readouterr().err
