"""Leaderboard endpoints."""

from fastapi import APIRouter, Depends, Query

from levelboard.api.deps import get_snapshot
from levelboard.core.pipeline import Snapshot
from levelboard.models.creator import RankingCriterion
from levelboard.schemas.leaderboard import LeaderboardEntry, LeaderboardPage
from levelboard.services.catalog_service import catalog_service
from levelboard.services.profile_service import profile_service

router = APIRouter()


@router.get("/{criterion}", response_model=LeaderboardPage)
async def get_leaderboard(
    criterion: RankingCriterion,
    limit: int | None = Query(default=None, ge=1),
    snapshot: Snapshot = Depends(get_snapshot),
):
    """Ranked creators for one criterion, best first."""
    ranked = catalog_service.leaderboard(snapshot, criterion, limit)
    return LeaderboardPage(
        criterion=criterion,
        total_ranked=len(snapshot.ordering(criterion)),
        entries=[
            LeaderboardEntry(
                position=stats.position(criterion),
                creator=stats.name,
                avatar=profile_service.resolve(snapshot.profiles, stats.name).avatar,
                total_points=stats.total_points,
                total_levels=stats.total_levels,
                speedrun_count=stats.speedrun_count,
                hard_count=stats.hard_count,
            )
            for stats in ranked
        ],
    )
