"""Next-move hints from a one-step Manhattan distance heuristic."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.board import EMPTY, Board, Direction, goal_index, neighbors


@dataclass(frozen=True)
class HintCandidate:
    """A tile next to the blank and what sliding it would gain."""

    index: int
    tile: int
    distance_before: int
    distance_after: int

    @property
    def improvement(self) -> int:
        return self.distance_before - self.distance_after


def _manhattan(index: int, target: int, size: int) -> int:
    r1, c1 = divmod(index, size)
    r2, c2 = divmod(target, size)
    return abs(r1 - r2) + abs(c1 - c2)


class HintAdvisor:
    """Suggests which tile to slide next.  Stateless."""

    @staticmethod
    def candidates(board: Board) -> list[HintCandidate]:
        """Tiles that can slide into the blank, ordered up, down, left, right."""
        n = board.size
        blank = board.blank_index
        found: list[HintCandidate] = []
        for idx in neighbors(blank, n):
            tile = board.cells[idx]
            if tile is EMPTY:
                continue
            goal = goal_index(tile, n)
            found.append(
                HintCandidate(
                    index=idx,
                    tile=tile,
                    distance_before=_manhattan(idx, goal, n),
                    distance_after=_manhattan(blank, goal, n),
                )
            )
        return found

    @staticmethod
    def suggest(board: Board) -> int | None:
        """Return the tile label to slide next, or ``None`` if nothing can move.

        The tile whose move brings it strictly closest to its goal wins; the
        first candidate wins ties.  When no move helps, the first movable
        tile is returned so the player always gets a legal move.
        """
        options = HintAdvisor.candidates(board)
        if not options:
            return None

        best: HintCandidate | None = None
        for option in options:
            if option.improvement <= 0:
                continue
            if best is None or option.improvement > best.improvement:
                best = option

        return (best or options[0]).tile

    @staticmethod
    def direction_for(board: Board, tile: int) -> Direction | None:
        """Direction *tile* would slide to reach the blank, if it is adjacent."""
        idx = board.index_of(tile)
        if not board.can_slide(idx):
            return None
        br, bc = board.blank_pos
        tr, tc = divmod(idx, board.size)
        if tr == br:
            return Direction.LEFT if tc > bc else Direction.RIGHT
        return Direction.UP if tr > br else Direction.DOWN
