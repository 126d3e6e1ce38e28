"""Rating formulas - per-level totals, rank tiers and creator points.

Which sub-scores make up a level's total depends on its category and on the
schema version in force when it was rated. The versions live in a YAML file
(see data/rating_schemas.yaml) so the authoritative set can change without a
code release.
"""

import math
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Mapping

import yaml

from levelboard.config import settings
from levelboard.core.errors import (
    MalformedLevelError,
    RatingSchemaConfigError,
    UnknownRatingSchemaError,
)
from levelboard.models.level import Category, Level


class RankTier(str, Enum):
    NORMAL = "normal"
    EPIC = "epic"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"


# Lower bound (inclusive) of each tier; below the first one a level is unranked
RANK_TIERS = [
    (10, RankTier.NORMAL),
    (18, RankTier.EPIC),
    (23, RankTier.LEGENDARY),
    (27, RankTier.MYTHIC),
]


def rank(total: float) -> RankTier | None:
    """Classify a level's total rating into a tier, or None when unranked."""
    tier = None
    for threshold, name in RANK_TIERS:
        if total >= threshold:
            tier = name
    return tier


def creator_points(total: float) -> float:
    """One creator point per ten rating points. Rounding is left to the views."""
    return total / 10


class RatingSchemaRegistry:
    """Closed sets of sub-score names, keyed by category and schema version."""

    def __init__(
        self,
        versions: Mapping[Category, Mapping[str, tuple[str, ...]]],
        defaults: Mapping[Category, str],
    ):
        for category in Category:
            if category not in versions or not versions[category]:
                raise RatingSchemaConfigError(f"no schema versions for '{category.value}'")
            default = defaults.get(category)
            if default not in versions[category]:
                raise RatingSchemaConfigError(
                    f"default version '{default}' for '{category.value}' is not defined"
                )
        self._versions = {c: dict(v) for c, v in versions.items()}
        self._defaults = dict(defaults)

    @classmethod
    def from_mapping(cls, raw: dict, overrides: Mapping[Category, str | None] | None = None) -> "RatingSchemaRegistry":
        """Build from the decoded YAML layout:

            categories:
              <category>:
                default: <version>
                versions:
                  <version>: [field, ...]
        """
        if not isinstance(raw, dict) or not isinstance(raw.get("categories"), dict):
            raise RatingSchemaConfigError("missing 'categories' mapping")

        versions: dict[Category, dict[str, tuple[str, ...]]] = {}
        defaults: dict[Category, str] = {}
        for name, entry in raw["categories"].items():
            try:
                category = Category(name)
            except ValueError:
                raise RatingSchemaConfigError(f"unknown category '{name}'") from None
            if not isinstance(entry, dict) or not isinstance(entry.get("versions"), dict):
                raise RatingSchemaConfigError(f"'{name}' needs a 'versions' mapping")

            versions[category] = {}
            for version, fields in entry["versions"].items():
                if not isinstance(fields, list) or not fields or not all(isinstance(f, str) for f in fields):
                    raise RatingSchemaConfigError(f"'{name}/{version}' must list field names")
                if len(set(fields)) != len(fields):
                    raise RatingSchemaConfigError(f"'{name}/{version}' repeats a field name")
                versions[category][str(version)] = tuple(fields)
            defaults[category] = str(entry.get("default", ""))

        for category, version in (overrides or {}).items():
            if version:
                defaults[Category(category)] = version

        return cls(versions, defaults)

    @classmethod
    def from_file(cls, path: str | Path, overrides: Mapping[Category, str | None] | None = None) -> "RatingSchemaRegistry":
        """Load schema versions from a YAML file."""
        file_path = Path(path)
        if not file_path.exists():
            raise RatingSchemaConfigError(f"file not found: {file_path}")

        with open(file_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        return cls.from_mapping(raw, overrides)

    def default_version(self, category: Category) -> str:
        return self._defaults[Category(category)]

    def fields_for(self, level: Level) -> tuple[str, ...]:
        """Sub-score names that make up this level's total, in display order."""
        category = Category(level.category)
        version = level.schema_version or self._defaults[category]
        try:
            return self._versions[category][version]
        except KeyError:
            raise UnknownRatingSchemaError(category.value, version) from None

    def total_rating(self, level: Level) -> float:
        """Sum the level's sub-scores for its schema.

        A missing or non-numeric sub-score raises MalformedLevelError; fields
        outside the schema are ignored.
        """
        try:
            fields = self.fields_for(level)
        except UnknownRatingSchemaError as exc:
            raise MalformedLevelError(level.id, level.category.value, str(exc)) from exc

        total = 0
        for name in fields:
            if name not in level.ratings:
                raise MalformedLevelError(level.id, level.category.value, f"missing sub-score '{name}'")
            value = level.ratings[name]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise MalformedLevelError(
                    level.id, level.category.value, f"sub-score '{name}' is not a number: {value!r}"
                )
            total += value
        return total

    def breakdown(self, level: Level) -> dict[str, float]:
        """Sub-scores in schema order. Only meaningful for levels that pass total_rating."""
        return {name: level.ratings[name] for name in self.fields_for(level)}


@lru_cache
def get_registry() -> RatingSchemaRegistry:
    """Registry built from settings (cached for the process)."""
    return RatingSchemaRegistry.from_file(
        settings.RATING_SCHEMAS_PATH,
        overrides={
            Category.SPEEDRUN: settings.SPEEDRUN_RATING_SCHEMA,
            Category.HARD: settings.HARD_RATING_SCHEMA,
        },
    )


def total_rating(level: Level, registry: RatingSchemaRegistry | None = None) -> float:
    return (registry or get_registry()).total_rating(level)
