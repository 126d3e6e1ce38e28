"""Snapshot pipeline - one immutable view of a full dataset load."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from levelboard.core.aggregator import aggregate
from levelboard.core.errors import Diagnostic
from levelboard.core.rating import RatingSchemaRegistry, get_registry
from levelboard.core.ranker import rank_creators
from levelboard.models.creator import CreatorStats, RankingCriterion
from levelboard.models.level import Category, Level
from levelboard.models.profile import Profile


@dataclass(frozen=True)
class Snapshot:
    """Everything the views read. Replaced wholesale on reload, never edited."""
    levels: Mapping[Category, tuple[Level, ...]]
    profiles: Mapping[str, Profile]
    creators: Mapping[str, CreatorStats]
    orderings: Mapping[RankingCriterion, tuple[str, ...]]
    diagnostics: tuple[Diagnostic, ...]
    registry: RatingSchemaRegistry
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def levels_for(self, category) -> tuple[Level, ...]:
        return self.levels[Category(category)]

    def find_level(self, category, level_id: str) -> Optional[Level]:
        """First level with this id in the category (ids may repeat)."""
        for level in self.levels_for(category):
            if level.id == str(level_id):
                return level
        return None

    def creator(self, name: str) -> Optional[CreatorStats]:
        return self.creators.get(name)

    def ordering(self, criterion) -> tuple[str, ...]:
        return self.orderings[RankingCriterion(criterion)]

    def total_rating(self, level: Level) -> float:
        return self.registry.total_rating(level)


def build_snapshot(
    speedrun_levels: Iterable[Level],
    hard_levels: Iterable[Level],
    profiles: Mapping[str, Profile] | None = None,
    registry: RatingSchemaRegistry | None = None,
    diagnostics: Iterable[Diagnostic] = (),
) -> Snapshot:
    """Aggregate, rank and freeze one dataset.

    `diagnostics` carries findings from earlier stages (feed parsing) so a
    snapshot reports everything that was wrong with its input.
    """
    registry = registry or get_registry()
    aggregation = aggregate(speedrun_levels, hard_levels, registry)
    ranking = rank_creators(aggregation.creators)

    return Snapshot(
        levels=aggregation.accepted,
        profiles=MappingProxyType(dict(profiles or {})),
        creators=ranking.creators,
        orderings=ranking.orderings,
        diagnostics=tuple(diagnostics) + aggregation.diagnostics,
        registry=registry,
    )
