"""Gameplay — moves, counters, and session status on the client side."""

from __future__ import annotations

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.models.board import Board, Direction
from backend.models.session import SessionStatus


def _one_move_left() -> GamePlay:
    # Tile 8 sits right of the blank; sliding it left solves the board.
    return GamePlay(Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, None, 8]))


def test_move_into_blank_counts() -> None:
    game = _one_move_left()
    assert game.move(Direction.DOWN)
    assert game.state.moves == 1
    assert game.board.blank_pos == (1, 1)


def test_move_off_edge_is_rejected() -> None:
    game = _one_move_left()
    # Nothing sits below the bottom row, so nothing can slide up.
    assert not game.move(Direction.UP)
    assert game.state.moves == 0


@pytest.mark.parametrize(
    ("direction", "blank_after"),
    [
        (Direction.DOWN, (1, 1)),
        (Direction.LEFT, (2, 2)),
        (Direction.RIGHT, (2, 0)),
    ],
)
def test_direction_semantics(direction: Direction, blank_after: tuple[int, int]) -> None:
    game = _one_move_left()
    assert game.move(direction)
    assert game.board.blank_pos == blank_after


def test_winning_move_completes_session() -> None:
    game = _one_move_left()
    assert game.move(Direction.LEFT)
    assert game.is_won
    assert game.state.status is SessionStatus.COMPLETED


def test_no_moves_after_completion() -> None:
    game = _one_move_left()
    game.move(Direction.LEFT)
    assert not game.move(Direction.RIGHT)
    assert game.state.moves == 1


def test_move_tile_requires_adjacency() -> None:
    game = _one_move_left()
    assert not game.move_tile(0)
    assert not game.move_tile(99)
    assert game.move_tile(4)
    assert game.state.moves == 1


def test_abandon_freezes_clock_and_status() -> None:
    game = _one_move_left()
    game.abandon()
    assert game.state.status is SessionStatus.ABANDONED
    frozen = game.state.elapsed_time
    assert game.state.elapsed_time == frozen
    assert not game.move(Direction.LEFT)


def test_pause_and_resume() -> None:
    game = _one_move_left()
    game.state.pause()
    paused = game.state.elapsed_time
    assert game.state.elapsed_time == paused
    game.state.resume()
    assert game.state.elapsed_time >= paused


def test_generated_game_starts_unsolved() -> None:
    game = GamePlay(GameGenerator.generate(4))
    assert game.size == 4
    assert not game.is_won
    assert game.state.status is SessionStatus.ACTIVE


def test_hints_are_counted_on_state() -> None:
    game = _one_move_left()
    game.state.record_hint()
    game.state.record_hint()
    assert game.state.hints_used == 2
