"""
Redis caching service for event listings.

CACHING STRATEGY
================

What we cache:
  - `GET /events` responses, one entry per status filter
  - Cache key pattern: "events:list:status={status or 'all'}"

What we never cache:
  - `upcoming=true` listings: "upcoming" is evaluated against the current
    date on every call, so a cached copy would silently go stale at midnight.
  - Single events, details and statistics: they are read right after the
    mutations that change them (adding a guest, then opening the event).

Invalidation strategy:
  - Any write that changes an events row deletes every "events:list:" key.
    That includes guest/vendor inserts and deletes, since they rewrite the
    event's guest_count / vendor_count.
  - TTL-based expiry as safety net (5 minutes).

Redis is optional. When disabled or unreachable every call here is a no-op
and listings are read from the database.
"""

import json
from typing import Optional

import redis.asyncio as redis
from eventplanner.core.config import get_settings
from eventplanner.core.logging import get_logger
from eventplanner.core.metrics import record_cache_operation

logger = get_logger(__name__)
settings = get_settings()

EVENT_LIST_PREFIX = "events:list:"

_redis_client: Optional[redis.Redis] = None


async def get_redis() -> Optional[redis.Redis]:
    """Get or create Redis connection. Returns None if Redis is disabled."""
    global _redis_client

    if not settings.REDIS_ENABLED:
        return None

    if _redis_client is None:
        try:
            _redis_client = redis.from_url(
                settings.REDIS_URL,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
            )
            await _redis_client.ping()
            logger.info("redis_connected", url=settings.REDIS_URL)
        except Exception as e:
            logger.error("redis_connection_failed", error=str(e))
            _redis_client = None
            return None

    return _redis_client


async def close_redis() -> None:
    """Close Redis connection on shutdown."""
    global _redis_client
    if _redis_client:
        await _redis_client.aclose()
        _redis_client = None


def _make_event_list_key(status: Optional[str]) -> str:
    return f"{EVENT_LIST_PREFIX}status={status or 'all'}"


async def get_cached_events(status: Optional[str]) -> Optional[list]:
    """Retrieve a cached, already-serialized event list."""
    client = await get_redis()
    if not client:
        return None

    key = _make_event_list_key(status)
    try:
        data = await client.get(key)
        record_cache_operation("get", hit=data is not None)
        if data:
            logger.debug("cache_hit", key=key)
            return json.loads(data)
        logger.debug("cache_miss", key=key)
    except Exception as e:
        logger.error("cache_get_error", key=key, error=str(e))

    return None


async def set_cached_events(status: Optional[str], data: list) -> None:
    """Cache a serialized event list with TTL."""
    client = await get_redis()
    if not client:
        return

    key = _make_event_list_key(status)
    try:
        await client.setex(key, settings.REDIS_CACHE_TTL, json.dumps(data, default=str))
        logger.debug("cache_set", key=key, ttl=settings.REDIS_CACHE_TTL)
    except Exception as e:
        logger.error("cache_set_error", key=key, error=str(e))


async def invalidate_event_cache() -> None:
    """
    Invalidate all cached event listings. Call after the write is committed,
    otherwise a concurrent list can re-cache the old rows.
    Uses SCAN to find and delete all keys matching the prefix.
    """
    client = await get_redis()
    if not client:
        return

    try:
        deleted = 0
        async for key in client.scan_iter(match=f"{EVENT_LIST_PREFIX}*", count=100):
            await client.delete(key)
            deleted += 1
        logger.info("cache_invalidated", keys_deleted=deleted)
    except Exception as e:
        logger.error("cache_invalidation_error", error=str(e))


async def get_cache_stats() -> dict:
    """Get Redis cache statistics for monitoring."""
    client = await get_redis()
    if not client:
        return {"status": "disabled"}

    try:
        info = await client.info("stats")
        keyspace = await client.info("keyspace")
        hits = info.get("keyspace_hits", 0)
        misses = info.get("keyspace_misses", 0)
        return {
            "status": "connected",
            "hits": hits,
            "misses": misses,
            "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
            "keys": keyspace,
        }
    except Exception as e:
        return {"status": "error", "error": str(e)}
