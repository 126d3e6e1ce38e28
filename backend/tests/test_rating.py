"""Tests for the rating formulas - totals, tiers, points and schema dispatch."""

import pytest

from levelboard.core.errors import MalformedLevelError, RatingSchemaConfigError
from levelboard.core.rating import RankTier, RatingSchemaRegistry, creator_points, rank, total_rating
from levelboard.models.level import Category


@pytest.mark.parametrize(
    "total, expected",
    [
        (0, None),
        (9.999, None),
        (10, RankTier.NORMAL),
        (17.999, RankTier.NORMAL),
        (18, RankTier.EPIC),
        (22.999, RankTier.EPIC),
        (23, RankTier.LEGENDARY),
        (26.999, RankTier.LEGENDARY),
        (27, RankTier.MYTHIC),
        (30, RankTier.MYTHIC),
    ],
)
def test_rank_boundaries(total, expected):
    assert rank(total) == expected


def test_speedrun_level_scenario(registry, make_level):
    """8 + 7 + 6 on the current speedrun schema is an epic 21."""
    level = make_level(ratings={"gameplay": 8, "design": 7, "speedrunning": 6})
    total = registry.total_rating(level)
    assert total == 21
    assert creator_points(total) == pytest.approx(2.1)
    assert rank(total) is RankTier.EPIC


def test_unranked_hard_level_scenario(registry, make_level):
    level = make_level(category=Category.HARD, ratings={"gameplay": 3, "design": 3, "balancing": 3})
    total = registry.total_rating(level)
    assert total == 9
    assert rank(total) is None
    assert creator_points(total) == pytest.approx(0.9)


def test_extra_rating_fields_are_ignored(registry, make_level):
    level = make_level(ratings={"gameplay": 8, "design": 7, "speedrunning": 6, "bonus": 100})
    assert registry.total_rating(level) == 21


def test_missing_sub_score_is_an_error(registry, make_level):
    level = make_level(ratings={"gameplay": 8, "design": 7})
    with pytest.raises(MalformedLevelError) as exc_info:
        registry.total_rating(level)
    assert "speedrunning" in exc_info.value.reason
    assert exc_info.value.level_id == level.id


@pytest.mark.parametrize("bad_value", ["7", None, True, float("nan")])
def test_non_numeric_sub_score_is_an_error(registry, make_level, bad_value):
    level = make_level(ratings={"gameplay": 8, "design": bad_value, "speedrunning": 6})
    with pytest.raises(MalformedLevelError):
        registry.total_rating(level)


def test_pinned_schema_version(registry, make_level):
    """A level rated under the old two-axis schema sums only those two axes."""
    level = make_level(schema_version="v1", ratings={"gameplay": 6, "design": 5, "speedrunning": 9})
    assert registry.fields_for(level) == ("gameplay", "design")
    assert registry.total_rating(level) == 11


def test_schema_version_alias(make_level, registry):
    level = make_level(schemaVersion="v2", ratings={"speedrun": 4, "design": 4, "difficulty": 4})
    assert level.schema_version == "v2"
    assert registry.total_rating(level) == 12


def test_unknown_schema_version_is_malformed(registry, make_level):
    level = make_level(schema_version="v9")
    with pytest.raises(MalformedLevelError) as exc_info:
        registry.total_rating(level)
    assert "v9" in exc_info.value.reason


def test_breakdown_follows_schema_order(registry, make_level):
    level = make_level(
        category=Category.HARD, ratings={"balancing": 1, "gameplay": 2, "design": 3, "note": 4}
    )
    assert list(registry.breakdown(level)) == ["gameplay", "design", "balancing"]


def test_default_override(make_level):
    raw = {
        "categories": {
            "speedrun": {"default": "v1", "versions": {"v1": ["gameplay", "design"], "v2": ["speedrun", "design", "difficulty"]}},
            "hard": {"default": "v1", "versions": {"v1": ["speedrun", "design", "difficulty"]}},
        }
    }
    registry = RatingSchemaRegistry.from_mapping(raw, overrides={Category.SPEEDRUN: "v2", Category.HARD: None})
    assert registry.default_version(Category.SPEEDRUN) == "v2"
    assert registry.default_version(Category.HARD) == "v1"

    level = make_level(ratings={"speedrun": 1, "design": 2, "difficulty": 3})
    assert registry.total_rating(level) == 6


@pytest.mark.parametrize(
    "raw",
    [
        {},
        {"categories": {"speedrun": {"default": "v1", "versions": {"v1": ["a"]}}}},
        {"categories": {
            "speedrun": {"default": "v2", "versions": {"v1": ["a"]}},
            "hard": {"default": "v1", "versions": {"v1": ["a"]}},
        }},
        {"categories": {
            "speedrun": {"default": "v1", "versions": {"v1": ["a", "a"]}},
            "hard": {"default": "v1", "versions": {"v1": ["a"]}},
        }},
        {"categories": {"puzzle": {"default": "v1", "versions": {"v1": ["a"]}}}},
    ],
)
def test_invalid_schema_config(raw):
    with pytest.raises(RatingSchemaConfigError):
        RatingSchemaRegistry.from_mapping(raw)


def test_missing_schema_file(tmp_path):
    with pytest.raises(RatingSchemaConfigError):
        RatingSchemaRegistry.from_file(tmp_path / "nope.yaml")


def test_module_total_rating_uses_configured_registry(make_level):
    """Without an explicit registry the settings-driven one applies."""
    level = make_level(category=Category.HARD, ratings={"gameplay": 9, "design": 9, "balancing": 9})
    assert total_rating(level) == 27
    assert rank(total_rating(level)) is RankTier.MYTHIC
