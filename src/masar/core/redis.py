"""
Redis Configuration

Async Redis client backing the rate limiter.
"""

import logging

from redis.asyncio import Redis, from_url

from masar.core.config import Settings

logger = logging.getLogger(__name__)

redis_client: Redis | None = None


async def init_redis(settings: Settings) -> Redis:
    """
    Initialize Redis connection.

    Call this on application startup.
    """
    global redis_client
    redis_client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    await redis_client.ping()
    return redis_client


def get_redis_client() -> Redis | None:
    """Return the Redis client, or None when Redis was not initialized."""
    return redis_client


async def close_redis() -> None:
    """Close Redis connection."""
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
