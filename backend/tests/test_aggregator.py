"""Tests for the aggregator - grouping, counts, points and integrity handling."""

import pytest

from levelboard.core.aggregator import aggregate
from levelboard.models.level import Category


def test_empty_input(registry):
    result = aggregate([], [], registry)
    assert dict(result.creators) == {}
    assert result.diagnostics == ()


def test_counts_and_points(registry, make_level):
    speedrun = [
        make_level("alice", ratings={"gameplay": 8, "design": 7, "speedrunning": 6}),
        make_level("alice", ratings={"gameplay": 5, "design": 5, "speedrunning": 5}),
    ]
    hard = [
        make_level("alice", Category.HARD, ratings={"gameplay": 3, "design": 3, "balancing": 3}),
        make_level("bob", Category.HARD),
    ]
    result = aggregate(speedrun, hard, registry)

    alice = result.creators["alice"]
    assert alice.speedrun_count == 2
    assert alice.hard_count == 1
    assert alice.total_levels == 3
    assert alice.total_points == pytest.approx(2.1 + 1.5 + 0.9)
    assert [lv.id for lv in alice.levels] == [speedrun[0].id, speedrun[1].id, hard[0].id]
    assert list(result.creators) == ["alice", "bob"]


def test_conservation_and_count_consistency(registry, make_level):
    speedrun = [make_level(name) for name in ["a", "b", "a", "c", "a"]]
    hard = [make_level(name, Category.HARD) for name in ["c", "d", "a"]]
    result = aggregate(speedrun, hard, registry)

    assert sum(s.total_levels for s in result.creators.values()) == len(speedrun) + len(hard)
    for stats in result.creators.values():
        assert stats.total_levels == stats.speedrun_count + stats.hard_count == len(stats.levels)


def test_points_never_decrease_when_adding_levels(registry, make_level):
    levels = [
        make_level("alice", ratings={"gameplay": 0, "design": 0, "speedrunning": 0}),
        make_level("alice", ratings={"gameplay": 10, "design": 9.5, "speedrunning": 0.1}),
        make_level("alice"),
    ]
    previous = 0.0
    for n in range(1, len(levels) + 1):
        points = aggregate(levels[:n], [], registry).creators["alice"].total_points
        assert points >= previous
        previous = points


def test_creator_names_are_case_sensitive(registry, make_level):
    result = aggregate([make_level("Alice"), make_level("alice")], [], registry)
    assert set(result.creators) == {"Alice", "alice"}


def test_missing_creator_is_excluded_and_reported(registry, make_level):
    result = aggregate([make_level(None), make_level("  "), make_level("alice")], [], registry)
    assert list(result.creators) == ["alice"]
    assert len(result.accepted[Category.SPEEDRUN]) == 1
    errors = [d for d in result.diagnostics if d.is_error]
    assert len(errors) == 2
    assert all(d.message == "level has no creator" for d in errors)


def test_malformed_ratings_exclude_only_that_level(registry, make_level):
    bad = make_level("alice", ratings={"gameplay": 8, "design": "great", "speedrunning": 6})
    good = make_level("alice")
    result = aggregate([bad, good], [], registry)

    alice = result.creators["alice"]
    assert alice.total_levels == 1
    assert alice.total_points == pytest.approx(1.5)
    (diagnostic,) = result.diagnostics
    assert diagnostic.is_error
    assert diagnostic.level_id == bad.id
    assert diagnostic.creator == "alice"


def test_creator_with_only_malformed_levels_is_absent(registry, make_level):
    result = aggregate([make_level("ghost", ratings={})], [], registry)
    assert "ghost" not in result.creators


def test_duplicate_ids_warn_but_keep_both(registry, make_level):
    first = make_level("alice", id="42")
    second = make_level("bob", id="42")
    result = aggregate([first, second], [make_level("carol", Category.HARD, id="42")], registry)

    assert result.creators["alice"].total_levels == 1
    assert result.creators["bob"].total_levels == 1
    warnings = [d for d in result.diagnostics if not d.is_error]
    # Same id across categories is fine; only the repeat inside speedrun is flagged
    assert len(warnings) == 1
    assert warnings[0].category == "speedrun"


def test_category_comes_from_the_collection(registry, make_level):
    level = make_level("alice", Category.SPEEDRUN, ratings={"gameplay": 1, "design": 1, "balancing": 1})
    result = aggregate([], [level], registry)
    assert result.creators["alice"].hard_count == 1
    assert result.creators["alice"].levels[0].category is Category.HARD


def test_result_is_read_only_and_repeatable(registry, make_level):
    speedrun = [make_level("a", ratings={"gameplay": 0.1, "design": 0.2, "speedrunning": 0.3}) for _ in range(7)]
    first = aggregate(speedrun, [], registry)
    second = aggregate(speedrun, [], registry)

    assert first.creators["a"].total_points == second.creators["a"].total_points
    assert first.creators["a"] is not second.creators["a"]
    with pytest.raises(TypeError):
        first.creators["b"] = first.creators["a"]
