"""Aggregator - groups rated levels by creator into CreatorStats records."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from levelboard.core.errors import Diagnostic, MalformedLevelError
from levelboard.core.rating import RatingSchemaRegistry, creator_points
from levelboard.models.creator import CreatorStats
from levelboard.models.level import Category, Level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationResult:
    creators: Mapping[str, CreatorStats]
    # Levels that passed validation, per category, in feed order
    accepted: Mapping[Category, tuple[Level, ...]]
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass
class _Tally:
    levels: list = field(default_factory=list)
    speedrun_count: int = 0
    hard_count: int = 0
    total_points: float = 0.0


def aggregate(
    speedrun_levels: Iterable[Level],
    hard_levels: Iterable[Level],
    registry: RatingSchemaRegistry,
) -> AggregationResult:
    """Build a fresh creator -> CreatorStats mapping.

    Levels are processed speedrun first, each feed in its own order, and
    points are accumulated in that order so repeated runs give identical
    floats. A level without a creator or with unusable ratings is excluded
    and reported; a repeated id within one category is reported and kept.
    """
    tallies: dict[str, _Tally] = {}
    accepted: dict[Category, list[Level]] = {Category.SPEEDRUN: [], Category.HARD: []}
    diagnostics: list[Diagnostic] = []

    for category, levels in ((Category.SPEEDRUN, speedrun_levels), (Category.HARD, hard_levels)):
        seen_ids: set[str] = set()
        for level in levels:
            if level.category != category:
                level = level.model_copy(update={"category": category})

            if level.id in seen_ids:
                logger.warning("Duplicate %s level id %s", category.value, level.id)
                diagnostics.append(
                    Diagnostic.warning(
                        category.value, f"duplicate level id '{level.id}'",
                        level_id=level.id, creator=level.creator,
                    )
                )
            seen_ids.add(level.id)

            if not level.creator or not level.creator.strip():
                logger.warning("Excluding %s level %s: no creator", category.value, level.id)
                diagnostics.append(
                    Diagnostic.error(category.value, "level has no creator", level_id=level.id)
                )
                continue

            try:
                total = registry.total_rating(level)
            except MalformedLevelError as exc:
                logger.warning("Excluding %s level %s: %s", category.value, level.id, exc.reason)
                diagnostics.append(
                    Diagnostic.error(category.value, exc.reason, level_id=level.id, creator=level.creator)
                )
                continue

            tally = tallies.get(level.creator)
            if tally is None:
                tally = tallies[level.creator] = _Tally()
            tally.levels.append(level)
            if category is Category.SPEEDRUN:
                tally.speedrun_count += 1
            else:
                tally.hard_count += 1
            tally.total_points += creator_points(total)
            accepted[category].append(level)

    creators = {
        name: CreatorStats(
            name=name,
            levels=tuple(t.levels),
            speedrun_count=t.speedrun_count,
            hard_count=t.hard_count,
            total_levels=t.speedrun_count + t.hard_count,
            total_points=t.total_points,
        )
        for name, t in tallies.items()
    }

    return AggregationResult(
        creators=MappingProxyType(creators),
        accepted=MappingProxyType({c: tuple(lv) for c, lv in accepted.items()}),
        diagnostics=tuple(diagnostics),
    )
