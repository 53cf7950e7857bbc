"""
Rate Limiting Module

Sliding-window rate limiting backed by Redis, falling back to in-memory
storage when Redis is unavailable.

Used to cap how often a requester can trigger admin WhatsApp notifications
through teacher selection.
"""

import logging
import time

from masar.core.exceptions import RateLimitExceededError
from masar.core.redis import get_redis_client

logger = logging.getLogger(__name__)

# In-memory rate limit storage (fallback when Redis unavailable)
# Format: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}

# Store size at which keys with no timestamp left in the window are evicted
MEMORY_SWEEP_THRESHOLD = 1000


async def _check_rate_limit_redis(client, key: str, limit: int, window_seconds: int) -> bool:
    """
    Check rate limit using a Redis sorted set as a sliding window.

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {str(now): now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _sweep_memory_store(window_start: float) -> None:
    """Drop every key whose newest timestamp has left the window."""
    stale = [
        key for key, stamps in _memory_store.items() if not stamps or stamps[-1] <= window_start
    ]
    for key in stale:
        del _memory_store[key]


def _check_rate_limit_memory(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check rate limit using in-memory storage.

    Does not work across multiple server instances.
    """
    now = time.time()
    window_start = now - window_seconds

    if len(_memory_store) >= MEMORY_SWEEP_THRESHOLD:
        _sweep_memory_store(window_start)

    timestamps = [ts for ts in _memory_store.pop(key, []) if ts > window_start]

    if len(timestamps) >= limit:
        _memory_store[key] = timestamps
        return False

    timestamps.append(now)
    _memory_store[key] = timestamps
    return True


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check if a request is within rate limits.

    Tries Redis first, falls back to in-memory storage.

    Args:
        key: Unique key for this rate limit (e.g., "selection:accept:<user id>")
        limit: Maximum requests allowed in the window
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    client = get_redis_client()

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except Exception as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


async def enforce_rate_limit(key: str, limit: int, window_seconds: int) -> None:
    """
    Raise RateLimitExceededError when ``key`` is over its limit.

    Raises:
        RateLimitExceededError: When rate limit is exceeded (HTTP 429)
    """
    allowed = await check_rate_limit(key, limit, window_seconds)
    if not allowed:
        logger.warning(f"Rate limit exceeded for {key}: {limit}/{window_seconds}s")
        raise RateLimitExceededError(limit, window_seconds)


def reset_memory_store() -> None:
    """Clear the in-memory fallback store."""
    _memory_store.clear()


__all__ = [
    "check_rate_limit",
    "enforce_rate_limit",
    "reset_memory_store",
]
