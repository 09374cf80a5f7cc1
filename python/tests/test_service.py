"""Game service: puzzle selection, skill updates, hints and checks."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamesolver import Solver
from backend.errors import (
    InvalidBoardError,
    PlayerNotFoundError,
    SessionClosedError,
    SessionNotFoundError,
)
from backend.models.board import Board
from backend.models.session import SessionStatus
from backend.services import GameService, PlayerStats
from backend.storage import JsonStore, seed_puzzles

EXAMPLE = [1, 2, 3, 4, 5, 6, 7, None, 8]


def _stock(store: JsonStore, size: int, difficulty: int, count: int = 1) -> None:
    rand = random.Random(size * 100 + difficulty)
    for _ in range(count):
        store.add_puzzle(size, difficulty, GameGenerator.generate(size, rand).cells)


# -- start ----------------------------------------------------------------------


def test_new_player_gets_entry_tier(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    assignment = service.start_session("alice")

    assert (assignment.size, assignment.difficulty) == (4, 2)
    assert not assignment.fallback
    assert assignment.skill == 1.0
    assert store.get_player("alice").skill == 1.0
    assert store.get_session(assignment.session_id).status is SessionStatus.ACTIVE


def test_skill_selects_matching_tier(service: GameService, store: JsonStore) -> None:
    seed_puzzles(store, per_size=1, rng=random.Random(3))
    _stock(store, 8, 6)
    store.ensure_player("bob", 6.0)

    assignment = service.start_session("bob")
    assert (assignment.size, assignment.difficulty) == (8, 6)
    assert not assignment.fallback


def test_falls_back_to_any_size_four(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 3)
    store.ensure_player("carol", 3.0)

    assignment = service.start_session("carol")
    assert assignment.size == 4
    assert assignment.difficulty == 3
    assert (assignment.requested.size, assignment.requested.difficulty) == (6, 4)
    assert assignment.fallback


def test_empty_store_generates_fallback(service: GameService, store: JsonStore) -> None:
    store.ensure_player("dave", 9.0)
    assignment = service.start_session("dave")

    assert (assignment.size, assignment.difficulty) == (4, 2)
    assert assignment.fallback
    assert store.count_puzzles() == 1
    board = assignment.board()
    assert Solver.is_solvable(board)
    assert not board.is_solved()


def test_unsolvable_stored_puzzle_is_replaced_in_place(
    service: GameService, store: JsonStore
) -> None:
    store.add_puzzle(3, 1, [2, 1, 3, 4, 5, 6, 7, 8, None])
    service.fallback_size = 3

    first = service.start_session("erin")
    second = service.start_session("erin")
    assert first.puzzle_id == second.puzzle_id == 1
    assert first.cells == second.cells
    assert Solver.is_solvable(first.board())
    assert store.count_puzzles() == 1


def test_malformed_stored_puzzle_is_replaced(service: GameService, store: JsonStore) -> None:
    store.add_puzzle(4, 2, [1, 1, 2, None])

    assignment = service.start_session("frank")
    assert assignment.puzzle_id == 1
    assert assignment.size == 4
    assert Solver.is_solvable(assignment.board())
    assert store.count_puzzles() == 1


# -- finish ---------------------------------------------------------------------


def test_completed_session_raises_skill(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    assignment = service.start_session("alice")

    outcome = service.finish_session(assignment.session_id, 80, 120)
    assert outcome.skill.new_skill == pytest.approx(1.048)
    assert outcome.session.status is SessionStatus.COMPLETED
    assert store.get_player("alice").skill == pytest.approx(1.048)


def test_abandoned_session_keeps_skill(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    assignment = service.start_session("alice")

    outcome = service.finish_session(assignment.session_id, 10, 30, "abandoned")
    assert outcome.skill.adjustment == 0
    assert outcome.session.status is SessionStatus.ABANDONED
    assert store.get_player("alice").skill == 1.0


def test_session_closes_once(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    assignment = service.start_session("alice")
    service.finish_session(assignment.session_id, 80, 120)

    with pytest.raises(SessionClosedError):
        service.finish_session(assignment.session_id, 50, 60)
    assert store.get_player("alice").skill == pytest.approx(1.048)


def test_finish_rejects_bad_input(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    assignment = service.start_session("alice")

    with pytest.raises(ValueError):
        service.finish_session(assignment.session_id, -1, 10)
    with pytest.raises(ValueError):
        service.finish_session(assignment.session_id, 10, 10, "paused")
    with pytest.raises(SessionNotFoundError):
        service.finish_session("missing", 10, 10)
    assert store.get_session(assignment.session_id).status is SessionStatus.ACTIVE


def test_skill_stays_in_range_over_many_sessions(service: GameService) -> None:
    for _ in range(40):
        assignment = service.start_session("zoe")
        outcome = service.finish_session(assignment.session_id, 1, 0)
        assert 0.5 <= outcome.skill.new_skill <= 10.0
    assert service.profile("zoe").skill == 10.0


# -- hints and checks -----------------------------------------------------------


def test_hint_for_snapshot(service: GameService) -> None:
    assert service.hint(EXAMPLE, 3) == 8


def test_hint_is_charged_to_session(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    assignment = service.start_session("alice")
    service.hint(assignment.cells, 4, assignment.session_id)
    service.hint(assignment.cells, 4, assignment.session_id)
    assert store.get_session(assignment.session_id).hints_used == 2


def test_hint_rejects_invalid_board(service: GameService) -> None:
    with pytest.raises(InvalidBoardError):
        service.hint([1, 2, 3, None], 3)
    with pytest.raises(InvalidBoardError):
        service.hint([1, 1, 2, None], 2)


def test_check(service: GameService) -> None:
    assert service.check(EXAMPLE, 3).solvable
    assert not service.check(EXAMPLE, 3).solved
    assert service.check(Board.solved(4).cells, 4).solved
    swapped = list(range(1, 14)) + [15, 14, None]
    assert not service.check(swapped, 4).solvable


# -- profile --------------------------------------------------------------------


def test_profile(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    first = service.start_session("alice")
    service.finish_session(first.session_id, 80, 120)
    second = service.start_session("alice")

    summary = service.profile("alice")
    assert [s.session_id for s in summary.sessions] == [first.session_id, second.session_id]
    assert len(summary.completed) == 1
    assert (summary.tier.size, summary.tier.difficulty) == (4, 2)


def test_profile_unknown_player(service: GameService) -> None:
    with pytest.raises(PlayerNotFoundError):
        service.profile("nobody")


def test_hint_rejects_size_other_than_session(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    assignment = service.start_session("alice")

    with pytest.raises(InvalidBoardError):
        service.hint(EXAMPLE, 3, assignment.session_id)
    assert store.get_session(assignment.session_id).hints_used == 0


def test_profile_stats(service: GameService, store: JsonStore) -> None:
    _stock(store, 4, 2)
    first = service.start_session("alice")
    service.hint(first.cells, 4, first.session_id)
    service.finish_session(first.session_id, 80, 120)
    second = service.start_session("alice")
    service.hint(second.cells, 4, second.session_id)
    service.hint(second.cells, 4, second.session_id)
    service.finish_session(second.session_id, 40, 60)
    third = service.start_session("alice")
    service.finish_session(third.session_id, 5, 10, "abandoned")

    stats = service.profile("alice").stats
    assert stats.total_puzzles == 3
    assert stats.completed_count == 2
    assert stats.completion_rate == pytest.approx(200 / 3)
    assert stats.average_time == pytest.approx(90.0)
    assert stats.average_moves == pytest.approx(60.0)
    assert stats.favorite_size == 4
    assert stats.hint_usage_count == 3


def test_stats_before_any_completion() -> None:
    stats = PlayerStats.from_sessions([])
    assert stats.total_puzzles == 0
    assert stats.completion_rate == 0.0
    assert stats.average_moves == 0.0
    assert stats.favorite_size is None
