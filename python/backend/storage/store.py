"""Persistence for players, stored puzzles and session history."""

from __future__ import annotations

import copy
import json
import random
import threading
import uuid
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from backend.errors import (
    PlayerNotFoundError,
    PuzzleNotFoundError,
    SessionClosedError,
    SessionNotFoundError,
    StoreError,
)
from backend.models.board import Cell
from backend.models.session import (
    DEFAULT_SKILL,
    PlayerProfile,
    SessionRecord,
    SessionStatus,
    StoredPuzzle,
)
from backend.utils.logger import get_logger

logger = get_logger(__name__)


class PuzzleStore(Protocol):
    """What the game service needs from a backing store."""

    def transaction(self) -> AbstractContextManager: ...

    # players
    def get_player(self, player_id: str) -> PlayerProfile: ...
    def ensure_player(self, player_id: str, skill: float = DEFAULT_SKILL) -> PlayerProfile: ...
    def set_skill(self, player_id: str, skill: float) -> None: ...

    # puzzles
    def add_puzzle(self, size: int, difficulty: int, cells: list[Cell]) -> StoredPuzzle: ...
    def replace_puzzle(self, puzzle_id: int, size: int, cells: list[Cell]) -> StoredPuzzle: ...
    def find_puzzle(
        self, size: int, difficulty: int, rng: random.Random | None = None
    ) -> StoredPuzzle | None: ...
    def find_any_puzzle(
        self, size: int, rng: random.Random | None = None
    ) -> StoredPuzzle | None: ...
    def count_puzzles(self) -> int: ...

    # sessions
    def create_session(self, player_id: str, puzzle: StoredPuzzle) -> SessionRecord: ...
    def get_session(self, session_id: str) -> SessionRecord: ...
    def complete_session(
        self, session_id: str, status: SessionStatus, moves: int, time_seconds: float
    ) -> SessionRecord: ...
    def record_hint(self, session_id: str) -> SessionRecord: ...
    def sessions_for(self, player_id: str) -> list[SessionRecord]: ...


def _puzzle(data: dict) -> StoredPuzzle:
    return StoredPuzzle(**{**data, "cells": list(data["cells"])})


class JsonStore:
    """Keeps every record in one JSON document.

    With ``filepath=None`` the store lives in memory only.  All access goes
    through :meth:`transaction`, which serialises callers with a re-entrant
    lock.  When the outermost block exits cleanly after a write the document
    is saved; when it raises, the state from before the block is restored.
    """

    def __init__(self, filepath: Path | None = None) -> None:
        self.filepath = filepath
        self._lock = threading.RLock()
        self._depth = 0
        self._snapshot: tuple | None = None
        self._players: dict[str, dict] = {}
        self._puzzles: list[dict] = []
        self._sessions: dict[str, dict] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if self.filepath is None or not self.filepath.exists():
            return
        try:
            data = json.loads(self.filepath.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read store {self.filepath}: {exc}") from exc
        self._players = data.get("players", {})
        self._puzzles = data.get("puzzles", [])
        self._sessions = data.get("sessions", {})
        logger.debug(
            "loaded %d players, %d puzzles, %d sessions from %s",
            len(self._players), len(self._puzzles), len(self._sessions), self.filepath,
        )

    def save(self) -> None:
        if self.filepath is None:
            return
        data = {
            "players": self._players,
            "puzzles": self._puzzles,
            "sessions": self._sessions,
        }
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.filepath.with_suffix(self.filepath.suffix + ".tmp")
            tmp.write_text(json.dumps(data, indent=2) + "\n")
            tmp.replace(self.filepath)
        except OSError as exc:
            raise StoreError(f"Cannot write store {self.filepath}: {exc}") from exc
        logger.debug("saved store to %s", self.filepath)

    def _touch(self) -> None:
        """Mark the open transaction as writing; keep the state for rollback."""
        if self._snapshot is None:
            self._snapshot = copy.deepcopy((self._players, self._puzzles, self._sessions))

    @contextmanager
    def transaction(self) -> Iterator[JsonStore]:
        with self._lock:
            self._depth += 1
            try:
                yield self
            except BaseException:
                if self._depth == 1 and self._snapshot is not None:
                    self._players, self._puzzles, self._sessions = self._snapshot
                    self._snapshot = None
                raise
            else:
                if self._depth == 1 and self._snapshot is not None:
                    snapshot, self._snapshot = self._snapshot, None
                    try:
                        self.save()
                    except StoreError:
                        # memory must not run ahead of the file
                        self._players, self._puzzles, self._sessions = snapshot
                        raise
            finally:
                self._depth -= 1

    # -- players --------------------------------------------------------------

    def get_player(self, player_id: str) -> PlayerProfile:
        with self.transaction():
            data = self._players.get(player_id)
            if data is None:
                raise PlayerNotFoundError(f"Unknown player {player_id!r}.")
            return PlayerProfile(**data)

    def ensure_player(self, player_id: str, skill: float = DEFAULT_SKILL) -> PlayerProfile:
        with self.transaction():
            if player_id not in self._players:
                self._touch()
                self._players[player_id] = PlayerProfile(player_id, skill).to_dict()
                logger.info("registered player %s with skill %.2f", player_id, skill)
            return PlayerProfile(**self._players[player_id])

    def set_skill(self, player_id: str, skill: float) -> None:
        with self.transaction():
            if player_id not in self._players:
                raise PlayerNotFoundError(f"Unknown player {player_id!r}.")
            self._touch()
            self._players[player_id]["skill"] = skill

    # -- puzzles --------------------------------------------------------------

    def add_puzzle(self, size: int, difficulty: int, cells: list[Cell]) -> StoredPuzzle:
        with self.transaction():
            self._touch()
            puzzle = StoredPuzzle(
                puzzle_id=len(self._puzzles) + 1,
                size=size,
                difficulty=difficulty,
                cells=list(cells),
            )
            self._puzzles.append(puzzle.to_dict())
            return puzzle

    def replace_puzzle(self, puzzle_id: int, size: int, cells: list[Cell]) -> StoredPuzzle:
        """Swap the board of a stored puzzle, keeping its id and difficulty."""
        with self.transaction():
            for data in self._puzzles:
                if data["puzzle_id"] == puzzle_id:
                    self._touch()
                    data["size"] = size
                    data["cells"] = list(cells)
                    return _puzzle(data)
            raise PuzzleNotFoundError(f"Unknown puzzle {puzzle_id}.")

    def get_puzzle(self, puzzle_id: int) -> StoredPuzzle:
        with self.transaction():
            for data in self._puzzles:
                if data["puzzle_id"] == puzzle_id:
                    return _puzzle(data)
            raise PuzzleNotFoundError(f"Unknown puzzle {puzzle_id}.")

    @staticmethod
    def _pick(matches: list[dict], rng: random.Random | None) -> StoredPuzzle | None:
        if not matches:
            return None
        return _puzzle((rng or random).choice(matches))

    def find_puzzle(
        self, size: int, difficulty: int, rng: random.Random | None = None
    ) -> StoredPuzzle | None:
        """Random stored puzzle with exactly this size and difficulty."""
        with self.transaction():
            matches = [
                p for p in self._puzzles
                if p["size"] == size and p["difficulty"] == difficulty
            ]
            return self._pick(matches, rng)

    def find_any_puzzle(
        self, size: int, rng: random.Random | None = None
    ) -> StoredPuzzle | None:
        """Random stored puzzle of this size, whatever its difficulty."""
        with self.transaction():
            return self._pick([p for p in self._puzzles if p["size"] == size], rng)

    def count_puzzles(self) -> int:
        with self.transaction():
            return len(self._puzzles)

    # -- sessions -------------------------------------------------------------

    def create_session(self, player_id: str, puzzle: StoredPuzzle) -> SessionRecord:
        with self.transaction():
            self._touch()
            record = SessionRecord(
                session_id=str(uuid.uuid4()),
                player_id=player_id,
                puzzle_id=puzzle.puzzle_id,
                size=puzzle.size,
                difficulty=puzzle.difficulty,
            )
            self._sessions[record.session_id] = record.to_dict()
            return record

    def get_session(self, session_id: str) -> SessionRecord:
        with self.transaction():
            data = self._sessions.get(session_id)
            if data is None:
                raise SessionNotFoundError(f"Unknown session {session_id!r}.")
            return SessionRecord.from_dict(data)

    def _open_session(self, session_id: str) -> SessionRecord:
        record = self.get_session(session_id)
        if record.is_closed:
            raise SessionClosedError(
                f"Session {session_id} is already {record.status.value}."
            )
        return record

    def complete_session(
        self, session_id: str, status: SessionStatus, moves: int, time_seconds: float
    ) -> SessionRecord:
        """Close an active session; closed sessions never change again."""
        if status is SessionStatus.ACTIVE:
            raise ValueError("A session can only be closed as completed or abandoned.")
        with self.transaction():
            record = self._open_session(session_id)
            self._touch()
            record.status = status
            record.moves = moves
            record.time_seconds = time_seconds
            record.completed_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
            self._sessions[session_id] = record.to_dict()
            return record

    def record_hint(self, session_id: str) -> SessionRecord:
        with self.transaction():
            record = self._open_session(session_id)
            self._touch()
            record.hints_used += 1
            self._sessions[session_id] = record.to_dict()
            return record

    def sessions_for(self, player_id: str) -> list[SessionRecord]:
        """Sessions of *player_id* in the order they were created."""
        with self.transaction():
            return [
                SessionRecord.from_dict(d)
                for d in self._sessions.values()
                if d["player_id"] == player_id
            ]
