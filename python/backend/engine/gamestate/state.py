"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.models.board import Board
from backend.models.session import SessionStatus


class GameState:
    """Holds the current board, move counter, hint counter and elapsed time."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.moves: int = 0
        self.hints_used: int = 0
        self.status: SessionStatus = SessionStatus.ACTIVE
        self._start_time: float = time.monotonic()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.monotonic() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.monotonic() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running and self.status is SessionStatus.ACTIVE:
            self._start_time = time.monotonic()
            self._running = True

    # -- counters -------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    def record_hint(self) -> None:
        self.hints_used += 1

    # -- lifecycle ------------------------------------------------------------

    def finish(self, status: SessionStatus) -> None:
        """Stop the clock and freeze the status."""
        self.pause()
        self.status = status

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()
