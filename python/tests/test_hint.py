"""Hint heuristic — one-step Manhattan improvement with a legal fallback."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import HintAdvisor
from backend.models.board import Board, Direction

EXAMPLE = [1, 2, 3, 4, 5, 6, 7, None, 8]


def test_example_board_suggests_eight() -> None:
    board = Board.from_flat(3, EXAMPLE)
    assert HintAdvisor.suggest(board) == 8


def test_example_candidates() -> None:
    board = Board.from_flat(3, EXAMPLE)
    found = {c.tile: c.improvement for c in HintAdvisor.candidates(board)}
    assert found == {5: -1, 7: -1, 8: 1}
    assert [c.index for c in HintAdvisor.candidates(board)] == [4, 6, 8]


def test_ties_go_to_enumeration_order() -> None:
    # Tile 8 above the blank and tile 5 below it both gain one step.
    board = Board.from_flat(3, [1, 8, 3, 4, None, 6, 7, 5, 2])
    gains = {c.tile: c.improvement for c in HintAdvisor.candidates(board)}
    assert gains[8] == gains[5] == 1
    assert HintAdvisor.suggest(board) == 8


def test_falls_back_to_first_neighbour() -> None:
    # On the goal board every move makes things worse; "up" comes first.
    assert HintAdvisor.suggest(Board.solved(3)) == 6
    assert HintAdvisor.suggest(Board.solved(4)) == 12


def test_two_by_two_always_has_a_suggestion() -> None:
    board = Board.from_flat(2, [None, 3, 2, 1])
    assert HintAdvisor.suggest(board) in (3, 2)


@pytest.mark.parametrize("seed", range(10))
def test_suggestion_is_adjacent_and_idempotent(seed: int) -> None:
    board = GameGenerator.generate(4, random.Random(seed))
    tile = HintAdvisor.suggest(board)
    assert tile is not None
    assert board.can_slide(board.index_of(tile))
    assert HintAdvisor.suggest(board) == tile
    assert HintAdvisor.suggest(board.copy()) == tile


def test_suggest_does_not_mutate_board() -> None:
    board = Board.from_flat(3, EXAMPLE)
    before = board.cells[:]
    HintAdvisor.suggest(board)
    assert board.cells == before


# -- directions ---------------------------------------------------------------


def test_direction_for_matches_gameplay_moves() -> None:
    board = Board.from_flat(3, EXAMPLE)
    assert HintAdvisor.direction_for(board, 8) is Direction.LEFT
    assert HintAdvisor.direction_for(board, 7) is Direction.RIGHT
    assert HintAdvisor.direction_for(board, 5) is Direction.DOWN
    assert HintAdvisor.direction_for(board, 1) is None

    game = GamePlay(board)
    assert game.move(HintAdvisor.direction_for(game.board, 8))
    assert game.is_won


def test_following_hints_reaches_goal_from_one_move_away() -> None:
    game = GamePlay(Board.from_flat(4, list(range(1, 12)) + [None, 13, 14, 15, 12]))
    tile = HintAdvisor.suggest(game.board)
    assert tile == 12
    assert game.move(HintAdvisor.direction_for(game.board, tile))
    assert game.is_won
