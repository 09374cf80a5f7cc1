"""Core gameplay logic — processes moves and checks win condition."""

from __future__ import annotations

from backend.engine.gamestate import GameState
from backend.models.board import Board, Direction
from backend.models.session import SessionStatus

# Offset from the blank to the tile that slides in the given direction.
# UP   → tile below the blank moves up
# DOWN → tile above the blank moves down
# LEFT → tile right of the blank moves left
# RIGHT→ tile left of the blank moves right
_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


class GamePlay:
    """Orchestrates a single game session on the client side."""

    def __init__(self, board: Board) -> None:
        self.size = board.size
        self.state = GameState(board)

    @property
    def board(self) -> Board:
        return self.state.board

    # -- movement (direction = where the *tile* moves) ------------------------

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent blank.

        E.g. ``Direction.UP`` moves the tile **below** the blank upward.
        Returns True if the move was valid.
        """
        br, bc = self.board.blank_pos
        dr, dc = _OFFSETS[direction]
        tr, tc = br + dr, bc + dc

        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return False
        return self.move_tile(tr * self.size + tc)

    def move_tile(self, index: int) -> bool:
        """Move the tile at *index* into the adjacent blank.

        Returns True if the tile was adjacent to the blank and the move
        was applied.
        """
        if self.state.status is not SessionStatus.ACTIVE:
            return False
        if not self.board.slide(index):
            return False
        self.state.increment_moves()
        if self.state.is_solved:
            self.state.finish(SessionStatus.COMPLETED)
        return True

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.state.is_solved

    def abandon(self) -> None:
        if self.state.status is SessionStatus.ACTIVE:
            self.state.finish(SessionStatus.ABANDONED)
