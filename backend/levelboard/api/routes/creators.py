"""Creator endpoints - profile pages with stats and attributed levels."""

from fastapi import APIRouter, Depends, HTTPException

from levelboard.api.deps import get_snapshot
from levelboard.api.routes.levels import level_to_summary
from levelboard.core.pipeline import Snapshot
from levelboard.models.creator import RankingCriterion
from levelboard.schemas.creator import CreatorDetail, CreatorPositions, CreatorProfile
from levelboard.services.catalog_service import LevelSort, catalog_service
from levelboard.services.profile_service import profile_service

router = APIRouter()


@router.get("/{name}", response_model=CreatorDetail)
async def get_creator(
    name: str,
    search: str = "",
    sort: LevelSort = LevelSort.RECENT,
    snapshot: Snapshot = Depends(get_snapshot),
):
    """Creator page: totals, leaderboard positions and their levels."""
    stats = snapshot.creator(name)
    if stats is None:
        raise HTTPException(status_code=404, detail="Creator not found")

    profile = profile_service.resolve(snapshot.profiles, name)
    levels = catalog_service.creator_levels(snapshot, stats, search, sort)
    return CreatorDetail(
        name=stats.name,
        profile=CreatorProfile(**profile.model_dump()),
        total_points=stats.total_points,
        total_levels=stats.total_levels,
        speedrun_count=stats.speedrun_count,
        hard_count=stats.hard_count,
        positions=CreatorPositions(
            **{criterion.value: stats.position(criterion) for criterion in RankingCriterion}
        ),
        levels=[level_to_summary(level, snapshot) for level in levels],
    )


@router.get("/{name}/profile", response_model=CreatorProfile)
async def get_creator_profile(name: str, snapshot: Snapshot = Depends(get_snapshot)):
    """Display metadata for any known name, including profile-only creators."""
    if name not in snapshot.creators and name not in snapshot.profiles:
        raise HTTPException(status_code=404, detail="Creator not found")
    profile = profile_service.resolve(snapshot.profiles, name)
    return CreatorProfile(**profile.model_dump())
