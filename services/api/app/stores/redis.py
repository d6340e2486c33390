"""Redis store for the cache-aside layer.

Handles:
- Client lifecycle
- Raw string cache operations with TTL
- Typed, fail-open get/set used by the student service

Fail-open policy: a missing key, an expired key, an undecodable payload and
an unreachable Redis all read as "absent". Writes that fail are logged and
the value is handed back unchanged.

TTL policy:
- Student entries: CACHE_TTL_SECONDS (10 seconds by default), absolute from write
"""

import json
import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
import redis.asyncio as redis
from redis.exceptions import RedisError

from app.settings import get_settings

T = TypeVar("T")

# Key prefixes
PREFIX_STUDENT = "student:"

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


async def init_redis() -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=settings.redis_socket_timeout,
        socket_timeout=settings.redis_socket_timeout,
    )
    # Validate connectivity early.
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found.
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_delete(key: str) -> None:
    """Delete value from cache.

    Args:
        key: Cache key.
    """
    await _get_redis().delete(key)


async def cache_get_json(key: str) -> Any | None:
    """Get JSON value from cache.

    Args:
        key: Cache key.

    Returns:
        Parsed JSON or None if not found.
    """
    value = await cache_get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: Any, ttl: int) -> None:
    """Set JSON value in cache.

    Args:
        key: Cache key.
        value: JSON-serializable value.
        ttl: Time-to-live in seconds.
    """
    await cache_set(key, json.dumps(value), ttl)


# ============================================================
# Typed fail-open operations (cache-aside)
# ============================================================


async def cache_get_as(key: str, type_: type[T]) -> T | None:
    """Get a cached value and validate it as `type_`.

    Args:
        key: Cache key.
        type_: Expected type (pydantic model, bool, list[...], ...).

    Returns:
        The decoded value, or None when absent, expired, undecodable or when
        Redis is unavailable.
    """
    try:
        raw = await cache_get(key)
    except (RedisError, RuntimeError) as e:
        logger.warning(f"Cache read failed for {key}, treating as miss: {e}")
        return None
    if raw is None:
        return None

    try:
        return TypeAdapter(type_).validate_json(raw)
    except ValidationError:
        logger.warning(f"Cache entry {key} does not decode as {type_!r}, treating as miss")
        return None


async def cache_set_as(key: str, value: T, ttl: int) -> T:
    """Cache `value` as JSON for `ttl` seconds and return it unchanged.

    Args:
        key: Cache key.
        value: Value to cache (must be serializable by pydantic).
        ttl: Absolute expiration in seconds from now.

    Returns:
        `value`, so calls can be chained.
    """
    payload = TypeAdapter(type(value)).dump_json(value, by_alias=True).decode()
    try:
        await cache_set(key, payload, ttl)
    except (RedisError, RuntimeError) as e:
        logger.warning(f"Cache write failed for {key}: {e}")
    return value


async def cache_evict(key: str) -> None:
    """Delete a cache entry, ignoring backend failures."""
    try:
        await cache_delete(key)
    except (RedisError, RuntimeError) as e:
        logger.warning(f"Cache eviction failed for {key}: {e}")
