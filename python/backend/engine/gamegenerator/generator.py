"""Generates solvable sliding puzzle boards."""

from __future__ import annotations

import random

from backend.engine.gamesolver import Solver
from backend.models.board import Board, Cell, solved_board
from backend.utils.logger import get_logger

logger = get_logger(__name__)


class GameGenerator:
    """Creates solvable puzzles by shuffling the solved state."""

    @staticmethod
    def shuffle(cells: list[Cell], rng: random.Random | None = None) -> None:
        """Fisher–Yates shuffle of *cells* in-place."""
        rand = rng or random
        for i in range(len(cells) - 1, 0, -1):
            j = rand.randrange(i + 1)
            cells[i], cells[j] = cells[j], cells[i]

    @staticmethod
    def generate(size: int, rng: random.Random | None = None) -> Board:
        """Return a random *solvable*, not yet solved board of the given size.

        Half of all permutations are solvable, so the loop needs about two
        shuffles on average.
        """
        attempts = 0
        while True:
            attempts += 1
            cells = solved_board(size)
            GameGenerator.shuffle(cells, rng)
            board = Board(size=size, cells=cells)
            if board.is_solved() or not Solver.is_solvable(board):
                continue
            logger.debug("generated %dx%d board in %d attempt(s)", size, size, attempts)
            return board
