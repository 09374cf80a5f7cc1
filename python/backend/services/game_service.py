"""Adaptive game flow: hand out puzzles, score sessions, answer hints.

The service owns no global state; every instance works against the store
it is given, so tests and the API each wire up their own.
"""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamesolver import HintAdvisor, Solver
from backend.engine.gameskill import DifficultyMapper, SkillAdjuster, SkillAdjustment
from backend.errors import InvalidBoardError
from backend.models.board import Board, Cell
from backend.models.session import (
    DEFAULT_SKILL,
    DifficultyTier,
    SessionRecord,
    SessionStatus,
    StoredPuzzle,
)
from backend.storage.store import PuzzleStore
from backend.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PuzzleAssignment:
    """A puzzle handed to a player at session start."""

    session_id: str
    player_id: str
    puzzle_id: int
    size: int
    difficulty: int
    cells: list[Cell]
    requested: DifficultyTier
    skill: float

    @property
    def fallback(self) -> bool:
        """True when the player did not get the tier their skill asked for."""
        return (self.size, self.difficulty) != (
            self.requested.size,
            self.requested.difficulty,
        )

    def board(self) -> Board:
        return Board.from_flat(self.size, self.cells)


@dataclass(frozen=True)
class SessionOutcome:
    session: SessionRecord
    skill: SkillAdjustment


@dataclass(frozen=True)
class BoardCheck:
    solvable: bool
    solved: bool


@dataclass(frozen=True)
class PlayerStats:
    """Play-behaviour aggregates over a player's session history.

    Averages cover completed sessions only; ``favorite_size`` is the grid
    size completed most often (earliest wins a tie), or None before the
    first completion.
    """

    total_puzzles: int
    completed_count: int
    completion_rate: float
    average_time: float
    average_moves: float
    favorite_size: int | None
    hint_usage_count: int

    @classmethod
    def from_sessions(cls, sessions: Sequence[SessionRecord]) -> PlayerStats:
        done = [s for s in sessions if s.status is SessionStatus.COMPLETED]
        total = len(sessions)
        favorite = None
        if done:
            favorite = Counter(s.size for s in done).most_common(1)[0][0]
        return cls(
            total_puzzles=total,
            completed_count=len(done),
            completion_rate=len(done) / total * 100 if total else 0.0,
            average_time=sum(s.time_seconds for s in done) / len(done) if done else 0.0,
            average_moves=sum(s.moves for s in done) / len(done) if done else 0.0,
            favorite_size=favorite,
            hint_usage_count=sum(s.hints_used for s in sessions),
        )


@dataclass(frozen=True)
class PlayerSummary:
    player_id: str
    skill: float
    tier: DifficultyTier
    sessions: list[SessionRecord] = field(default_factory=list)

    @property
    def completed(self) -> list[SessionRecord]:
        return [s for s in self.sessions if s.status is SessionStatus.COMPLETED]

    @property
    def stats(self) -> PlayerStats:
        return PlayerStats.from_sessions(self.sessions)


class GameService:
    """Runs the adaptive loop against an explicit store."""

    def __init__(
        self,
        store: PuzzleStore,
        *,
        default_skill: float = DEFAULT_SKILL,
        fallback_size: int = 4,
        fallback_difficulty: int = 2,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.default_skill = default_skill
        self.fallback_size = fallback_size
        self.fallback_difficulty = fallback_difficulty
        self.rng = rng or random.Random()

    # -- session start --------------------------------------------------------

    def _select_puzzle(self, tier: DifficultyTier) -> StoredPuzzle:
        puzzle = self.store.find_puzzle(tier.size, tier.difficulty, self.rng)
        if puzzle is not None:
            return puzzle

        logger.info(
            "no stored %dx%d puzzle at difficulty %d, falling back to %dx%d",
            tier.size, tier.size, tier.difficulty,
            self.fallback_size, self.fallback_size,
        )
        puzzle = self.store.find_any_puzzle(self.fallback_size, self.rng)
        if puzzle is not None:
            return puzzle

        board = GameGenerator.generate(self.fallback_size, self.rng)
        logger.info("store has no %dx%d puzzle, generated one", board.size, board.size)
        return self.store.add_puzzle(board.size, self.fallback_difficulty, board.cells)

    def _usable(self, puzzle: StoredPuzzle) -> StoredPuzzle:
        """Return *puzzle*, or the same record with a fresh board if it is broken."""
        try:
            if Solver.is_solvable(Board.from_flat(puzzle.size, puzzle.cells)):
                return puzzle
        except InvalidBoardError as exc:
            logger.warning("stored puzzle %d is malformed: %s", puzzle.puzzle_id, exc)
        else:
            logger.warning("stored puzzle %d is unsolvable", puzzle.puzzle_id)

        size = puzzle.size
        if not isinstance(size, int) or size < 2:
            size = self.fallback_size
        board = GameGenerator.generate(size, self.rng)
        return self.store.replace_puzzle(puzzle.puzzle_id, size, board.cells)

    def start_session(self, player_id: str) -> PuzzleAssignment:
        """Pick a puzzle matching the player's skill and open a session."""
        with self.store.transaction():
            player = self.store.ensure_player(player_id, self.default_skill)
            tier = DifficultyMapper.map_skill(player.skill)
            puzzle = self._usable(self._select_puzzle(tier))
            record = self.store.create_session(player_id, puzzle)

        logger.info(
            "session %s: player %s (skill %.2f) got %dx%d difficulty %d",
            record.session_id, player_id, player.skill,
            puzzle.size, puzzle.size, puzzle.difficulty,
        )
        return PuzzleAssignment(
            session_id=record.session_id,
            player_id=player_id,
            puzzle_id=puzzle.puzzle_id,
            size=puzzle.size,
            difficulty=puzzle.difficulty,
            cells=list(puzzle.cells),
            requested=tier,
            skill=player.skill,
        )

    # -- session end ----------------------------------------------------------

    def finish_session(
        self,
        session_id: str,
        moves: int,
        time_seconds: float,
        status: SessionStatus | str = SessionStatus.COMPLETED,
    ) -> SessionOutcome:
        """Close a session and fold its result into the player's skill.

        The skill read, the adjustment and the write happen in one store
        transaction so concurrent sessions of one player cannot lose updates.
        """
        status = SessionStatus(status)
        if moves < 0:
            raise ValueError("moves must not be negative")
        with self.store.transaction():
            record = self.store.complete_session(session_id, status, moves, time_seconds)
            player = self.store.get_player(record.player_id)
            adjustment = SkillAdjuster.adjust(
                player.skill, status, moves, time_seconds, record.size, record.difficulty
            )
            self.store.set_skill(record.player_id, adjustment.new_skill)

        logger.info(
            "session %s %s in %d moves / %.1fs: skill %.3f -> %.3f",
            session_id, status.value, moves, time_seconds,
            adjustment.old_skill, adjustment.new_skill,
        )
        return SessionOutcome(session=record, skill=adjustment)

    # -- live board -----------------------------------------------------------

    def hint(
        self, cells: Sequence[Cell], size: int, session_id: str | None = None
    ) -> int | None:
        """Suggest the next tile for a board snapshot.

        The board is validated first; a given session is charged one hint
        and must be playing a board of the same size.
        """
        board = Board.from_flat(size, cells)
        if session_id is not None:
            with self.store.transaction():
                record = self.store.get_session(session_id)
                if record.size != size:
                    raise InvalidBoardError(
                        f"Session {session_id} plays a {record.size}×{record.size} board, "
                        f"got size {size}."
                    )
                self.store.record_hint(session_id)
        return HintAdvisor.suggest(board)

    def check(self, cells: Sequence[Cell], size: int) -> BoardCheck:
        board = Board.from_flat(size, cells)
        return BoardCheck(solvable=Solver.is_solvable(board), solved=board.is_solved())

    # -- players --------------------------------------------------------------

    def profile(self, player_id: str) -> PlayerSummary:
        with self.store.transaction():
            player = self.store.get_player(player_id)
            sessions = self.store.sessions_for(player_id)
        return PlayerSummary(
            player_id=player.player_id,
            skill=player.skill,
            tier=DifficultyMapper.map_skill(player.skill),
            sessions=sessions,
        )
