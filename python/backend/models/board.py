"""Board model for the sliding puzzle game.

A board is a flat, row-major sequence of ``size * size`` cells.  Every cell
holds a tile label in ``1 .. size*size - 1`` except exactly one, which holds
the :data:`EMPTY` sentinel (``None``, serialised as ``null``).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum

from backend.errors import InvalidBoardError

EMPTY = None

Cell = int | None


class Direction(StrEnum):
    """Direction a *tile* slides into the empty cell."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# -- pure helpers -------------------------------------------------------------


def solved_board(size: int) -> list[Cell]:
    """Return the goal sequence ``[1, 2, ..., size*size - 1, EMPTY]``."""
    if size < 2:
        raise InvalidBoardError(f"Board size must be at least 2, got {size}.")
    return list(range(1, size * size)) + [EMPTY]


def is_solved(cells: Sequence[Cell], size: int) -> bool:
    """True iff *cells* equals the goal sequence element-wise."""
    return list(cells) == solved_board(size)


def empty_index(cells: Sequence[Cell]) -> int:
    """Return the position of the single empty cell."""
    found = [i for i, v in enumerate(cells) if v is EMPTY]
    if len(found) != 1:
        raise InvalidBoardError(
            f"Board must contain exactly one empty cell, found {len(found)}."
        )
    return found[0]


def validate_board(cells: Sequence[Cell], size: int) -> list[Cell]:
    """Check *cells* is a well-formed ``size`` x ``size`` board.

    Returns a list copy of the cells.  Malformed boards are rejected, never
    repaired.
    """
    if isinstance(size, bool) or not isinstance(size, int) or size < 2:
        raise InvalidBoardError(f"Board size must be an integer >= 2, got {size!r}.")
    flat = list(cells)
    if len(flat) != size * size:
        raise InvalidBoardError(
            f"Expected {size * size} cells for a {size}×{size} board, "
            f"got {len(flat)}."
        )

    top = size * size - 1
    seen: set[int] = set()
    for i, v in enumerate(flat):
        if v is EMPTY:
            continue
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidBoardError(f"Cell {i} holds a non-integer tile {v!r}.")
        if not 1 <= v <= top:
            raise InvalidBoardError(f"Tile {v} at cell {i} is outside 1..{top}.")
        if v in seen:
            raise InvalidBoardError(f"Tile {v} appears more than once.")
        seen.add(v)

    empty_index(flat)
    return flat


def goal_index(tile: int, size: int) -> int:
    """Index of *tile* in the solved board."""
    return tile - 1


def is_adjacent(index: int, other: int, size: int) -> bool:
    """True iff the two cells are rook-adjacent in a row-major grid."""
    r1, c1 = divmod(index, size)
    r2, c2 = divmod(other, size)
    if r1 == r2:
        return abs(c1 - c2) == 1
    if c1 == c2:
        return abs(r1 - r2) == 1
    return False


def neighbors(index: int, size: int) -> list[int]:
    """Cells rook-adjacent to *index*, ordered up, down, left, right."""
    row, col = divmod(index, size)
    found: list[int] = []
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        nr, nc = row + dr, col + dc
        if 0 <= nr < size and 0 <= nc < size:
            found.append(nr * size + nc)
    return found


# -- board --------------------------------------------------------------------


@dataclass
class Board:
    """A validated sliding puzzle board.

    ``cells`` is the flat row-major list; :attr:`rows` gives the 2D view used
    by the renderers.
    """

    size: int
    cells: list[Cell]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: Sequence[Cell]) -> Board:
        """Create a board from a flat row-major cell list.

        Example::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, None, 8])
        """
        return cls(size=size, cells=validate_board(flat, size))

    @classmethod
    def solved(cls, size: int) -> Board:
        return cls(size=size, cells=solved_board(size))

    # -- queries --------------------------------------------------------------

    @property
    def blank_index(self) -> int:
        return empty_index(self.cells)

    @property
    def blank_pos(self) -> tuple[int, int]:
        return divmod(self.blank_index, self.size)

    @property
    def rows(self) -> list[list[Cell]]:
        n = self.size
        return [self.cells[r * n : (r + 1) * n] for r in range(n)]

    def get_tile(self, row: int, col: int) -> Cell:
        return self.cells[row * self.size + col]

    def index_of(self, tile: int) -> int:
        try:
            return self.cells.index(tile)
        except ValueError:
            raise InvalidBoardError(f"Tile {tile} is not on the board.") from None

    def is_solved(self) -> bool:
        return is_solved(self.cells, self.size)

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if the cell at (row, col) holds its goal value."""
        idx = row * self.size + col
        val = self.cells[idx]
        if val is EMPTY:
            return idx == self.size * self.size - 1
        return idx == goal_index(val, self.size)

    def can_slide(self, index: int) -> bool:
        """True iff the tile at *index* is adjacent to the empty cell."""
        if not 0 <= index < self.size * self.size:
            return False
        return is_adjacent(index, self.blank_index, self.size)

    # -- mutation -------------------------------------------------------------

    def slide(self, index: int) -> bool:
        """Swap the tile at *index* into the empty cell if they are adjacent."""
        if not self.can_slide(index):
            return False
        blank = self.blank_index
        self.cells[blank], self.cells[index] = self.cells[index], self.cells[blank]
        return True

    def copy(self) -> Board:
        return Board(size=self.size, cells=self.cells[:])
