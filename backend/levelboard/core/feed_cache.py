"""Feed cache - short-lived copies of decoded feeds in Redis.

Entries live under ``levelboard:feeds:<digest>`` where the digest is taken
from the source URL or path, and hold an envelope recording which source
was fetched and when. An entry whose envelope names a different source is
treated as a miss.
"""

import hashlib
import json
from datetime import datetime, timezone
from typing import Any

import redis.asyncio as aioredis

from levelboard.config import settings

KEY_PREFIX = "levelboard:feeds"


def feed_key(source: str) -> str:
    digest = hashlib.sha1(source.encode("utf-8")).hexdigest()[:16]
    return f"{KEY_PREFIX}:{digest}"


class FeedCache:
    def __init__(self, redis: aioredis.Redis, ttl: int | None = None):
        self.redis = redis
        self.ttl = ttl if ttl is not None else settings.FEED_CACHE_TTL

    async def save(self, source: str, payload: list) -> None:
        envelope = {
            "source": source,
            "fetched_at": datetime.now(timezone.utc).isoformat(),
            "payload": payload,
        }
        await self.redis.set(feed_key(source), json.dumps(envelope), ex=self.ttl)

    async def load(self, source: str) -> Any | None:
        """Cached payload for a source, or None on a miss."""
        raw = await self.redis.get(feed_key(source))
        if not raw:
            return None
        envelope = json.loads(raw)
        if not isinstance(envelope, dict) or envelope.get("source") != source:
            return None
        return envelope.get("payload")

    async def clear(self, source: str) -> None:
        await self.redis.delete(feed_key(source))
