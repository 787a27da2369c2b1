from __future__ import annotations


class GameError(ValueError):
    """Base class for errors raised by the game core."""


class OutOfRange(GameError, IndexError):
    """A cell index outside [0, 8] reached the board."""

    def __init__(self, index: object) -> None:
        self.index = index
        super().__init__(f"Cell index out of range: {index!r} (expected 0..8)")


class InputNotAllowed(GameError):
    """An input event arrived in a phase that does not accept it."""
