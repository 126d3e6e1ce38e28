"""Ranker - orders creators under each leaderboard criterion.

Every criterion sorts descending on its key and breaks ties by creator
name ascending, so positions are reproducible for identical input.
"""

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Callable, Mapping

from levelboard.models.creator import CreatorStats, RankingCriterion

# criterion -> (eligibility test, sort key)
CRITERIA: dict[RankingCriterion, tuple[Callable[[CreatorStats], bool], Callable[[CreatorStats], float]]] = {
    RankingCriterion.POINTS: (lambda s: True, lambda s: s.total_points),
    RankingCriterion.TOTAL: (lambda s: True, lambda s: s.total_levels),
    RankingCriterion.SPEEDRUN: (lambda s: s.speedrun_count > 0, lambda s: s.speedrun_count),
    RankingCriterion.HARD: (lambda s: s.hard_count > 0, lambda s: s.hard_count),
}


@dataclass(frozen=True)
class RankingResult:
    creators: Mapping[str, CreatorStats]  # copies carrying their positions
    orderings: Mapping[RankingCriterion, tuple[str, ...]]

    def ordering(self, criterion) -> tuple[str, ...]:
        return self.orderings[RankingCriterion(criterion)]


def order_creators(creators: Mapping[str, CreatorStats], criterion) -> tuple[str, ...]:
    """Eligible creator names, best first."""
    eligible, key = CRITERIA[RankingCriterion(criterion)]
    pool = [stats for stats in creators.values() if eligible(stats)]
    pool.sort(key=lambda s: (-key(s), s.name))
    return tuple(stats.name for stats in pool)


def rank_creators(creators: Mapping[str, CreatorStats]) -> RankingResult:
    """Derive all orderings from scratch and attach 1-based positions.

    The input mapping is left untouched; a new mapping of updated records is returned.
    """
    orderings = {criterion: order_creators(creators, criterion) for criterion in RankingCriterion}

    positions: dict[str, dict[RankingCriterion, int]] = {name: {} for name in creators}
    for criterion, names in orderings.items():
        for position, name in enumerate(names, start=1):
            positions[name][criterion] = position

    ranked = {
        name: replace(stats, positions=MappingProxyType(positions[name]))
        for name, stats in creators.items()
    }
    return RankingResult(creators=MappingProxyType(ranked), orderings=MappingProxyType(orderings))
