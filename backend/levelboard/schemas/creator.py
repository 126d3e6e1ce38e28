"""Creator-related Pydantic schemas."""

from pydantic import BaseModel

from levelboard.schemas.level import LevelSummary


class CreatorProfile(BaseModel):
    name: str
    avatar: str
    banner: str


class CreatorPositions(BaseModel):
    """Leaderboard positions; None means unranked for that criterion."""
    points: int | None = None
    total: int | None = None
    speedrun: int | None = None
    hard: int | None = None


class CreatorDetail(BaseModel):
    name: str
    profile: CreatorProfile
    total_points: float
    total_levels: int
    speedrun_count: int
    hard_count: int
    positions: CreatorPositions
    levels: list[LevelSummary]
