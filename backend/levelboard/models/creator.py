"""
Derived per-creator records.

Provides immutable data objects produced by the aggregator and ranker.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from levelboard.models.level import Level


class RankingCriterion(str, Enum):
    POINTS = "points"
    TOTAL = "total"
    SPEEDRUN = "speedrun"
    HARD = "hard"


@dataclass(frozen=True)
class CreatorStats:
    """Aggregate counts and points for one creator."""
    name: str
    levels: Tuple[Level, ...]
    speedrun_count: int
    hard_count: int
    total_levels: int
    total_points: float
    # criterion -> 1-based position; criteria the creator does not qualify for are absent
    positions: Mapping[RankingCriterion, int] = field(default_factory=lambda: MappingProxyType({}))

    def position(self, criterion) -> Optional[int]:
        return self.positions.get(RankingCriterion(criterion))
