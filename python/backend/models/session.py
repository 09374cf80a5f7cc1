"""Player, puzzle and session records kept by the store."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import StrEnum

from backend.models.board import Cell

SKILL_MIN = 0.5
SKILL_MAX = 10.0
DEFAULT_SKILL = 1.0


class SessionStatus(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class DifficultyTier:
    """Grid size and difficulty rating derived from a skill score."""

    size: int
    difficulty: int


@dataclass
class PlayerProfile:
    player_id: str
    skill: float = DEFAULT_SKILL

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class StoredPuzzle:
    puzzle_id: int
    size: int
    difficulty: int
    cells: list[Cell]

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "size": self.size,
            "difficulty": self.difficulty,
            "cells": list(self.cells),
        }


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass
class SessionRecord:
    """One puzzle attempt.

    Created ``active`` when a puzzle is handed out and closed exactly once,
    as ``completed`` or ``abandoned``.
    """

    session_id: str
    player_id: str
    puzzle_id: int
    size: int
    difficulty: int
    status: SessionStatus = SessionStatus.ACTIVE
    moves: int = 0
    time_seconds: float = 0.0
    hints_used: int = 0
    started_at: str = field(default_factory=_now)
    completed_at: str | None = None

    @property
    def is_closed(self) -> bool:
        return self.status is not SessionStatus.ACTIVE

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SessionRecord:
        return cls(**{**data, "status": SessionStatus(data["status"])})
