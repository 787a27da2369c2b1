from __future__ import annotations

import os

from pydantic import BaseModel, Field

from tictactoe.models import RGB

DEFAULT_INTRO_TEXT = "Tic Tac Toe!\nClick to play"
DEFAULT_NEUTRAL_COLOR = RGB(r=1.0, g=0.6, b=0.3)
DEFAULT_CELEBRATION_COLOR = RGB(r=0.3, g=1.0, b=0.3)


class GameSettings(BaseModel, frozen=True):
    intro_text: str = Field(DEFAULT_INTRO_TEXT, min_length=1)
    neutral_color: RGB = DEFAULT_NEUTRAL_COLOR
    celebration_color: RGB = DEFAULT_CELEBRATION_COLOR
    log_level: str = "WARNING"


def parse_rgb(raw: str) -> RGB:
    """Parse "r,g,b" with channels in [0, 1]."""

    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 3:
        raise ValueError(f"Expected 'r,g,b', got {raw!r}")
    r, g, b = (float(p) for p in parts)
    return RGB(r=r, g=g, b=b)


def get_intro_text() -> str:
    # Env vars can't carry a literal newline comfortably; accept "\n".
    return os.environ.get("TICTACTOE_INTRO_TEXT", DEFAULT_INTRO_TEXT).replace("\\n", "\n")


def get_neutral_color() -> RGB:
    raw = os.environ.get("TICTACTOE_NEUTRAL_COLOR")
    return parse_rgb(raw) if raw else DEFAULT_NEUTRAL_COLOR


def get_celebration_color() -> RGB:
    raw = os.environ.get("TICTACTOE_CELEBRATION_COLOR")
    return parse_rgb(raw) if raw else DEFAULT_CELEBRATION_COLOR


def get_log_level() -> str:
    return os.environ.get("TICTACTOE_LOG_LEVEL", "WARNING").upper()


def load_settings() -> GameSettings:
    return GameSettings(
        intro_text=get_intro_text(),
        neutral_color=get_neutral_color(),
        celebration_color=get_celebration_color(),
        log_level=get_log_level(),
    )
