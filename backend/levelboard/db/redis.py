"""Redis connection for the optional feed cache."""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from levelboard.config import settings

logger = logging.getLogger(__name__)

redis_client: redis.Redis | None = None


def get_redis_client() -> redis.Redis:
    """Shared client, created on first use."""
    global redis_client
    if redis_client is None:
        redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.FETCH_TIMEOUT,
        )
    return redis_client


async def redis_available(client: redis.Redis) -> bool:
    """True when the server answers PING. The cache is skipped otherwise."""
    try:
        return bool(await client.ping())
    except (RedisError, OSError) as exc:
        logger.warning("Redis at %s unreachable, feed cache disabled: %s", settings.REDIS_URL, exc)
        return False


async def close_redis() -> None:
    global redis_client
    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
