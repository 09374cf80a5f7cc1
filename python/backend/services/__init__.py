from backend.services.game_service import (
    BoardCheck,
    GameService,
    PlayerStats,
    PlayerSummary,
    PuzzleAssignment,
    SessionOutcome,
)

__all__ = [
    "BoardCheck",
    "GameService",
    "PlayerStats",
    "PlayerSummary",
    "PuzzleAssignment",
    "SessionOutcome",
]
