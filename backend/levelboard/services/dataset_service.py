"""Dataset service - fetches the level/profile feeds and holds the live snapshot.

A refresh either fully succeeds and swaps in a new snapshot, or fails and
leaves the previous one serving.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from levelboard.config import DATA_DIR, settings
from levelboard.core.errors import DatasetLoadError, DatasetNotLoadedError, Diagnostic
from levelboard.core.feed_cache import FeedCache
from levelboard.core.pipeline import Snapshot, build_snapshot
from levelboard.core.rating import RatingSchemaRegistry
from levelboard.models.level import Category, parse_levels
from levelboard.models.profile import PROFILE_CATEGORY, parse_profiles

logger = logging.getLogger(__name__)


def is_remote(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def resolve_path(source: str) -> Path:
    """Local feed path; relative paths resolve against the bundled data dir."""
    path = Path(source)
    return path if path.is_absolute() else DATA_DIR / path


def decode_feed(source: str, text: str) -> list:
    """Decode a feed body. Anything but a JSON array (an error object, null) is a load failure."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetLoadError(source, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(payload, list):
        raise DatasetLoadError(source, "feed is not a JSON array")
    return payload


def read_local_feed(source: str) -> list:
    path = resolve_path(source)
    if not path.exists():
        raise DatasetLoadError(source, f"file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return decode_feed(source, f.read())


def assemble_snapshot(
    speedrun_raw: Any,
    hard_raw: Any,
    profiles_raw: Any,
    registry: RatingSchemaRegistry | None = None,
    extra_diagnostics: list[Diagnostic] | None = None,
) -> Snapshot:
    """Parse decoded feeds and run them through the aggregation pipeline."""
    speedrun, speedrun_diags = parse_levels(speedrun_raw, Category.SPEEDRUN)
    hard, hard_diags = parse_levels(hard_raw, Category.HARD)
    profiles, profile_diags = parse_profiles(profiles_raw)
    return build_snapshot(
        speedrun,
        hard,
        profiles,
        registry=registry,
        diagnostics=[*(extra_diagnostics or []), *speedrun_diags, *hard_diags, *profile_diags],
    )


class DatasetService:
    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        cache: FeedCache | None = None,
        registry: RatingSchemaRegistry | None = None,
    ):
        self._transport = transport
        self._cache = cache
        self._registry = registry
        self._snapshot: Snapshot | None = None

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> Snapshot:
        """The live snapshot. Raises DatasetNotLoadedError before the first load."""
        if self._snapshot is None:
            raise DatasetNotLoadedError()
        return self._snapshot

    def set_snapshot(self, snapshot: Snapshot | None) -> None:
        """Replace the live snapshot (used by tests and offline tooling)."""
        self._snapshot = snapshot

    def configure(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        cache: FeedCache | None = None,
        registry: RatingSchemaRegistry | None = None,
    ) -> None:
        self._transport = transport
        self._cache = cache
        self._registry = registry

    async def fetch_feed(self, client: httpx.AsyncClient, source: str, force: bool = False) -> Any:
        """Decode one feed from a URL or local path, via the cache when enabled."""
        if self._cache is not None and not force:
            cached = await self._cache.load(source)
            if cached is not None:
                logger.debug("Feed cache hit for %s", source)
                return cached

        if is_remote(source):
            try:
                response = await client.get(source)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise DatasetLoadError(source, str(exc) or exc.__class__.__name__) from exc
            payload = decode_feed(source, response.text)
        else:
            payload = read_local_feed(source)

        if self._cache is not None:
            await self._cache.save(source, payload)
        return payload

    async def refresh(self, force: bool = False) -> Snapshot:
        """Fetch every feed and swap in a freshly built snapshot."""
        extra: list[Diagnostic] = []
        async with httpx.AsyncClient(
            transport=self._transport, timeout=settings.FETCH_TIMEOUT
        ) as client:
            speedrun_raw = await self.fetch_feed(client, settings.SPEEDRUN_LEVELS_SOURCE, force)
            hard_raw = await self.fetch_feed(client, settings.HARD_LEVELS_SOURCE, force)

            profiles_raw = None
            if settings.PROFILES_SOURCE:
                try:
                    profiles_raw = await self.fetch_feed(client, settings.PROFILES_SOURCE, force)
                except DatasetLoadError as exc:
                    # Profiles only decorate views; carry on without them
                    logger.warning("Profile feed unavailable: %s", exc)
                    extra.append(Diagnostic.warning(PROFILE_CATEGORY, exc.reason))

        snapshot = assemble_snapshot(
            speedrun_raw, hard_raw, profiles_raw, registry=self._registry, extra_diagnostics=extra
        )
        self._snapshot = snapshot

        errors = sum(1 for d in snapshot.diagnostics if d.is_error)
        logger.info(
            "Dataset loaded: %d speedrun, %d hard levels, %d creators, %d profiles (%d excluded records)",
            len(snapshot.levels_for(Category.SPEEDRUN)),
            len(snapshot.levels_for(Category.HARD)),
            len(snapshot.creators),
            len(snapshot.profiles),
            errors,
        )
        return snapshot


dataset_service = DatasetService()
