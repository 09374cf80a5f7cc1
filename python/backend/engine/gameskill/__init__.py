from backend.engine.gameskill.adjuster import SkillAdjuster, SkillAdjustment, clamp_skill
from backend.engine.gameskill.mapper import DifficultyMapper

__all__ = ["DifficultyMapper", "SkillAdjuster", "SkillAdjustment", "clamp_skill"]
