"""Level-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel

from levelboard.core.rating import RankTier
from levelboard.models.level import Category


class LevelSummary(BaseModel):
    """One card in a category list."""
    id: str
    name: str
    creator: str
    category: Category
    created: datetime | None
    thumbnail: str
    total_rating: float
    rank: RankTier | None  # None = unranked


class LevelDetail(LevelSummary):
    link: str
    schema_version: str
    ratings: dict[str, float]  # sub-scores in schema order
    creator_points: float
