"""Catalog service - search, sorting and leaderboard slices over a snapshot."""

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable

from levelboard.core.pipeline import Snapshot
from levelboard.core.rating import RatingSchemaRegistry
from levelboard.models.creator import CreatorStats, RankingCriterion
from levelboard.models.level import Level

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class LevelSort(str, Enum):
    RECENT = "recent"
    RATED = "rated"


class CatalogService:
    @staticmethod
    def search_levels(levels: Iterable[Level], query: str = "", match_creator: bool = True) -> list[Level]:
        """Case-insensitive substring match on the name (and creator, if asked)."""
        needle = (query or "").strip().lower()
        if not needle:
            return list(levels)
        return [
            level for level in levels
            if needle in level.name.lower()
            or (match_creator and level.creator and needle in level.creator.lower())
        ]

    @staticmethod
    def sort_levels(
        levels: Iterable[Level], sort: LevelSort, registry: RatingSchemaRegistry
    ) -> list[Level]:
        """Newest first, or best total rating first. Ties fall back to id.

        `rated` compares summed totals, not per-axis averages, so a two-axis
        level ranks below a three-axis one with the same average. Totals are
        what rank tiers and creator points are built on.
        """
        ordered = sorted(levels, key=lambda lv: lv.id)
        if LevelSort(sort) is LevelSort.RATED:
            ordered.sort(key=registry.total_rating, reverse=True)
        else:
            # Undated levels go last
            ordered.sort(key=lambda lv: lv.created or _OLDEST, reverse=True)
        return ordered

    def browse(
        self, snapshot: Snapshot, category, query: str = "", sort: LevelSort = LevelSort.RECENT
    ) -> list[Level]:
        """A category list page: search name and creator, then sort."""
        found = self.search_levels(snapshot.levels_for(category), query)
        return self.sort_levels(found, sort, snapshot.registry)

    def creator_levels(
        self, snapshot: Snapshot, stats: CreatorStats, query: str = "", sort: LevelSort = LevelSort.RECENT
    ) -> list[Level]:
        """A creator's own levels; search matches names only."""
        found = self.search_levels(stats.levels, query, match_creator=False)
        return self.sort_levels(found, sort, snapshot.registry)

    @staticmethod
    def leaderboard(snapshot: Snapshot, criterion, limit: int | None = None) -> list[CreatorStats]:
        """Ranked creators for one criterion, best first."""
        names = snapshot.ordering(RankingCriterion(criterion))
        if limit is not None:
            names = names[:limit]
        return [snapshot.creators[name] for name in names]


catalog_service = CatalogService()
