"""Domain models package."""

from levelboard.models.level import Category, Level, parse_levels
from levelboard.models.profile import Profile, parse_profiles
from levelboard.models.creator import CreatorStats, RankingCriterion

__all__ = [
    "Category",
    "Level",
    "parse_levels",
    "Profile",
    "parse_profiles",
    "CreatorStats",
    "RankingCriterion",
]
