"""Shared test fixtures - small in-memory datasets, no network or Redis needed."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from levelboard.config import DATA_DIR
from levelboard.core.pipeline import build_snapshot
from levelboard.core.rating import RatingSchemaRegistry
from levelboard.models.level import Category, Level, parse_levels
from levelboard.models.profile import parse_profiles
from levelboard.services.dataset_service import dataset_service


def _load_json(name: str):
    with open(DATA_DIR / name, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def registry() -> RatingSchemaRegistry:
    """Registry from the bundled schema file (speedrun v3, hard v2 by default)."""
    return RatingSchemaRegistry.from_file(DATA_DIR / "rating_schemas.yaml")


@pytest.fixture
def make_level():
    """Factory for Level records with sensible defaults per category."""
    counter = iter(range(1, 10_000))

    def _make(creator="alice", category=Category.SPEEDRUN, ratings=None, **kwargs):
        if ratings is None:
            ratings = (
                {"gameplay": 5, "design": 5, "speedrunning": 5}
                if Category(category) is Category.SPEEDRUN
                else {"gameplay": 5, "design": 5, "balancing": 5}
            )
        data = {
            "id": str(next(counter)),
            "name": f"Level {creator}",
            "creator": creator,
            "category": category,
            "ratings": ratings,
        }
        data.update(kwargs)
        return Level.model_validate(data)

    return _make


@pytest.fixture
def raw_feeds():
    """The bundled sample feeds, decoded."""
    return {
        "speedrun": _load_json("speedrun-levels.json"),
        "hard": _load_json("hard-levels.json"),
        "profiles": _load_json("profiles.json"),
    }


@pytest.fixture
def snapshot(raw_feeds, registry):
    """Snapshot of the bundled sample data.

    alice: 2 speedrun (21 and 11 rating points) -> 3.2 points
    carol: 1 speedrun + 1 hard (27.5 and 23.5) -> 5.1 points
    bob:   1 hard (9) -> 0.9 points
    """
    speedrun, _ = parse_levels(raw_feeds["speedrun"], Category.SPEEDRUN)
    hard, _ = parse_levels(raw_feeds["hard"], Category.HARD)
    profiles, _ = parse_profiles(raw_feeds["profiles"])
    return build_snapshot(speedrun, hard, profiles, registry=registry)


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the feed cache."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.expiry: dict[str, int] = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.expiry[key] = ex

    async def delete(self, key):
        self.store.pop(key, None)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
async def client(snapshot):
    """Async HTTP test client serving the sample snapshot."""
    from levelboard.main import app

    dataset_service.set_snapshot(snapshot)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    dataset_service.set_snapshot(None)
