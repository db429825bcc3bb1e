"""
Rate Limiting

Per-actor rate limiting for moderation and flagging endpoints, backed by a
Redis sorted set (sliding window). Falls back to in-process memory when
Redis is not connected; the fallback is not shared across workers.
"""

import logging
import time

from redis.asyncio import Redis
from redis.exceptions import RedisError

from innohub.core import redis as redis_state
from innohub.core.auth import Actor
from innohub.core.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

# Format: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}


async def _check_rate_limit_redis(
    client: Redis,
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using Redis.

    Args:
        client: Redis client
        key: Rate limit key (e.g., "rate_limit:42:/api/v1/admin/projects/7/approve")
        limit: Maximum requests allowed
        window_seconds: Time window in seconds

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


def _check_rate_limit_memory(key: str, limit: int, window_seconds: int) -> bool:
    now = time.time()
    window_start = now - window_seconds

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]
    if len(hits) >= limit:
        _memory_store[key] = hits
        return False

    hits.append(now)
    _memory_store[key] = hits
    return True


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check if a request is within rate limits.

    Uses the shared Redis client when connected, in-memory storage otherwise.

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    client = redis_state.redis_client

    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except RedisError as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


async def enforce_rate_limit(
    actor: Actor,
    action: str,
    limit: int,
    window_seconds: int,
) -> None:
    """
    Apply a per-actor rate limit to an action.

    Args:
        actor: The authenticated actor
        action: Action name (e.g., "project:approve", "project:flag")
        limit: Maximum requests allowed
        window_seconds: Time window in seconds

    Raises:
        RateLimitExceededError: If rate limit is exceeded
    """
    key = f"rate_limit:{action}:{actor.id}"
    allowed = await check_rate_limit(key, limit, window_seconds)

    if not allowed:
        logger.warning(
            f"Rate limit exceeded for user {actor.id} on action '{action}': "
            f"{limit}/{window_seconds}s"
        )
        raise RateLimitExceededError(limit, window_seconds)


__all__ = ["check_rate_limit", "enforce_rate_limit"]
