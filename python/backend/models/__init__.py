from backend.models.board import (
    EMPTY,
    Board,
    Direction,
    empty_index,
    is_solved,
    solved_board,
    validate_board,
)
from backend.models.session import (
    DEFAULT_SKILL,
    SKILL_MAX,
    SKILL_MIN,
    DifficultyTier,
    PlayerProfile,
    SessionRecord,
    SessionStatus,
    StoredPuzzle,
)

__all__ = [
    "EMPTY",
    "Board",
    "Direction",
    "DEFAULT_SKILL",
    "DifficultyTier",
    "PlayerProfile",
    "SKILL_MAX",
    "SKILL_MIN",
    "SessionRecord",
    "SessionStatus",
    "StoredPuzzle",
    "empty_index",
    "is_solved",
    "solved_board",
    "validate_board",
]
