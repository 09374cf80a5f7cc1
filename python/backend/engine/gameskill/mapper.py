"""Maps a player's skill score to a grid size and difficulty rating."""

from __future__ import annotations

import math

from backend.models.session import DifficultyTier

# (exclusive upper skill bound, tier) in ascending order; a skill equal to a
# bound already belongs to the next tier.
TIERS: tuple[tuple[float, DifficultyTier], ...] = (
    (2.5, DifficultyTier(size=4, difficulty=2)),
    (5.0, DifficultyTier(size=6, difficulty=4)),
    (8.0, DifficultyTier(size=8, difficulty=6)),
)
TOP_TIER = DifficultyTier(size=10, difficulty=8)


class DifficultyMapper:
    """Stateless skill → tier lookup."""

    @staticmethod
    def map_skill(skill: float) -> DifficultyTier:
        """Return the tier for *skill*.  NaN is treated as the lowest skill."""
        if math.isnan(skill):
            return TIERS[0][1]
        for upper, tier in TIERS:
            if skill < upper:
                return tier
        return TOP_TIER

    @staticmethod
    def all_tiers() -> list[DifficultyTier]:
        return [tier for _, tier in TIERS] + [TOP_TIER]
