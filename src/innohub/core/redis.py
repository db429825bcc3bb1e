"""
Redis Connection

The shared async client backs the per-actor rate limiter. It stays ``None``
until a connection succeeds, which is what the rate limiter checks before
falling back to in-process counters.
"""

import logging

from redis.asyncio import Redis, from_url
from redis.exceptions import RedisError

from innohub.core.config import settings

logger = logging.getLogger(__name__)

redis_client: Redis | None = None


async def init_redis() -> Redis:
    """
    Connect to Redis and publish the client for the rate limiter.

    Raises:
        RedisError: If the server cannot be reached; the client is left unset
    """
    global redis_client
    client = from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
    )
    try:
        await client.ping()
    except RedisError:
        await client.aclose()
        raise

    redis_client = client
    return redis_client


async def redis_status() -> str:
    """Report the connection state for the readiness check."""
    if redis_client is None:
        return "not initialized"
    try:
        await redis_client.ping()
    except RedisError as e:
        logger.warning(f"Redis ping failed: {e}")
        return "unreachable"
    return "connected"


async def close_redis() -> None:
    """Close the shared client, if any."""
    global redis_client
    if redis_client is not None:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")
