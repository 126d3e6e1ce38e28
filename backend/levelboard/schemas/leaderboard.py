"""Leaderboard Pydantic schemas."""

from pydantic import BaseModel, Field

from levelboard.models.creator import RankingCriterion


class LeaderboardEntry(BaseModel):
    position: int = Field(..., ge=1)
    creator: str
    avatar: str
    total_points: float
    total_levels: int
    speedrun_count: int
    hard_count: int


class LeaderboardPage(BaseModel):
    criterion: RankingCriterion
    total_ranked: int
    entries: list[LeaderboardEntry]
