"""Recomputes a player's skill score after a finished session."""

from __future__ import annotations

import math
from dataclasses import dataclass

from backend.models.session import SKILL_MAX, SKILL_MIN, SessionStatus

MOVES_PER_CELL = 5
TIME_LIMIT_SECONDS = 600.0
MIN_EFFICIENCY = 0.1
MIN_TIME_BONUS = 0.5
LEARNING_RATE = 0.3
MAX_ADJUSTMENT = 1.0


@dataclass(frozen=True)
class SkillAdjustment:
    old_skill: float
    new_skill: float
    adjustment: float

    @property
    def delta(self) -> float:
        """Change actually applied after clamping."""
        return self.new_skill - self.old_skill


def clamp_skill(skill: float) -> float:
    if math.isnan(skill):
        return SKILL_MIN
    return max(SKILL_MIN, min(SKILL_MAX, skill))


class SkillAdjuster:
    """Deterministic skill update — all methods are static."""

    @staticmethod
    def raw_adjustment(
        moves: int, time_seconds: float, grid_size: int, difficulty: int
    ) -> float:
        """Skill gain for a completed session, capped at ``MAX_ADJUSTMENT``.

        Fewer moves than ``grid_size² × 5`` and completion under ten minutes
        both increase the gain; neither factor can drive it to zero.
        """
        expected_moves = grid_size * grid_size * MOVES_PER_CELL
        efficiency = max(MIN_EFFICIENCY, expected_moves / moves)
        elapsed = max(0.0, time_seconds)
        time_bonus = max(MIN_TIME_BONUS, 1.0 - elapsed / TIME_LIMIT_SECONDS)
        raw = (difficulty / 10) * efficiency * time_bonus * LEARNING_RATE
        return min(raw, MAX_ADJUSTMENT)

    @staticmethod
    def adjust(
        current_skill: float,
        status: SessionStatus | str,
        moves: int,
        time_seconds: float,
        grid_size: int,
        difficulty: int,
    ) -> SkillAdjustment:
        adjustment = 0.0
        if status == SessionStatus.COMPLETED and moves > 0:
            adjustment = SkillAdjuster.raw_adjustment(
                moves, time_seconds, grid_size, difficulty
            )
        new_skill = clamp_skill(current_skill + adjustment)
        return SkillAdjustment(
            old_skill=current_skill, new_skill=new_skill, adjustment=adjustment
        )

    @staticmethod
    def adjust_skill(
        current_skill: float,
        status: SessionStatus | str,
        moves: int,
        time_seconds: float,
        grid_size: int,
        difficulty: int,
    ) -> float:
        """Shortcut returning only the new skill score."""
        return SkillAdjuster.adjust(
            current_skill, status, moves, time_seconds, grid_size, difficulty
        ).new_skill
