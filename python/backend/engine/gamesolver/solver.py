"""Solvability oracle for sliding puzzle boards."""

from __future__ import annotations

from backend.models.board import EMPTY, Board


class Solver:
    """Stateless parity checks — all methods are static."""

    @staticmethod
    def inversions(board: Board) -> int:
        """Count pairs i < j of tiles (blank excluded) with ``tile[i] > tile[j]``."""
        flat = [v for v in board.cells if v is not EMPTY]
        count = 0
        for i in range(len(flat)):
            for j in range(i + 1, len(flat)):
                if flat[i] > flat[j]:
                    count += 1
        return count

    @staticmethod
    def blank_row_from_bottom(board: Board) -> int:
        """1-indexed row of the blank, counted from the bottom row."""
        return board.size - board.blank_index // board.size

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state.

        Odd widths: the inversion count must be even.  Even widths: the
        inversion count and the blank's row from the bottom must have
        opposite parity, which is what the solved board (0 inversions,
        blank on row 1) has.
        """
        inversions = Solver.inversions(board)
        if board.size % 2 == 1:
            return inversions % 2 == 0
        return (inversions + Solver.blank_row_from_bottom(board)) % 2 == 1
