from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal

EventType = Literal[
    "PHASE_CHANGED",
    "PIECE_PLACED",
    "INPUT_IGNORED",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    type: EventType
    game_number: int
    payload: dict[str, Any]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, game_number: int, payload: dict[str, Any]) -> "GameEvent":
        return GameEvent(type=type, game_number=game_number, payload=payload, ts=datetime.now(timezone.utc))
