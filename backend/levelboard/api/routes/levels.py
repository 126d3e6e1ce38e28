"""Level endpoints - category lists and level detail."""

from fastapi import APIRouter, Depends, HTTPException

from levelboard.api.deps import get_snapshot
from levelboard.core.pipeline import Snapshot
from levelboard.core.rating import creator_points, rank
from levelboard.models.level import Category, Level
from levelboard.schemas.level import LevelDetail, LevelSummary
from levelboard.services.catalog_service import LevelSort, catalog_service

router = APIRouter()


def level_to_summary(level: Level, snapshot: Snapshot) -> LevelSummary:
    """Convert a level to its list card with computed score and tier."""
    total = snapshot.total_rating(level)
    return LevelSummary(
        id=level.id,
        name=level.name,
        creator=level.creator,
        category=level.category,
        created=level.created,
        thumbnail=level.thumbnail,
        total_rating=total,
        rank=rank(total),
    )


@router.get("/{category}", response_model=list[LevelSummary])
async def list_levels(
    category: Category,
    search: str = "",
    sort: LevelSort = LevelSort.RECENT,
    snapshot: Snapshot = Depends(get_snapshot),
):
    """List a category's levels, filtered by name/creator and sorted."""
    levels = catalog_service.browse(snapshot, category, search, sort)
    return [level_to_summary(level, snapshot) for level in levels]


@router.get("/{category}/{level_id}", response_model=LevelDetail)
async def get_level(category: Category, level_id: str, snapshot: Snapshot = Depends(get_snapshot)):
    """Full detail for one level, including its per-axis ratings."""
    level = snapshot.find_level(category, level_id)
    if level is None:
        raise HTTPException(status_code=404, detail="Level not found")

    summary = level_to_summary(level, snapshot)
    return LevelDetail(
        **summary.model_dump(),
        link=level.link,
        schema_version=level.schema_version or snapshot.registry.default_version(category),
        ratings=snapshot.registry.breakdown(level),
        creator_points=creator_points(summary.total_rating),
    )
