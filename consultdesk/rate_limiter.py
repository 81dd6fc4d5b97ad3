"""
Hybrid in-memory + Redis rate limiting for the public form endpoints.
Counts live in process memory and are synced to Redis periodically so that
several workers share one window. Without Redis configured the limiter runs
memory-only.
"""

import logging
import os
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request, Response

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None
_redis_checked = False

# Format: {key: {'count': int, 'reset_time': int, 'last_redis_sync': int}}
memory_cache: dict[str, dict] = {}
cache_lock = Lock()

MEMORY_CACHE_SYNC_INTERVAL = 10  # Sync to Redis every 10 seconds
MEMORY_CACHE_CLEANUP_INTERVAL = 60  # Clean up expired entries every 60 seconds
last_cleanup_time = 0


def get_redis_client() -> Optional[redis.Redis]:
    """
    Get or create the Redis client.
    Returns None when neither REDIS_URL nor REDIS_HOST is configured.
    """
    global redis_client, _redis_checked

    if redis_client is not None or _redis_checked:
        return redis_client
    _redis_checked = True

    redis_url = os.getenv("REDIS_URL")
    redis_host = os.getenv("REDIS_HOST")

    if not redis_url and not redis_host:
        logger.info("ℹ️ Redis not configured - rate limiting runs in memory only")
        return None

    if redis_url:
        # Mask password in URL for logging
        if "@" in redis_url:
            url_parts = redis_url.split("@")
            protocol = url_parts[0].split(":")[0]
            masked_url = f"{protocol}:****@{url_parts[1]}"
        else:
            masked_url = "****"
        logger.info(f"📡 Using Redis URL connection: {masked_url}")
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
    else:
        client = redis.Redis(
            host=redis_host,
            port=int(os.getenv("REDIS_PORT", "6379")),
            password=os.getenv("REDIS_PASSWORD"),
            db=int(os.getenv("REDIS_DB", "0")),
            ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )

    try:
        client.ping()
        logger.info("Redis connected successfully")
        redis_client = client
    except redis.RedisError as e:
        logger.error(f"❌ Failed to connect to Redis: {e}")
        logger.warning("⚠️ Rate limiting falls back to memory only")

    return redis_client


def cleanup_expired_cache():
    """Remove expired entries from memory cache"""
    global last_cleanup_time
    current_time = int(time.time())

    if current_time - last_cleanup_time < MEMORY_CACHE_CLEANUP_INTERVAL:
        return

    with cache_lock:
        expired_keys = [
            k for k, v in memory_cache.items() if current_time >= v.get("reset_time", 0)
        ]
        for k in expired_keys:
            del memory_cache[k]

        if expired_keys:
            logger.debug(f"🧹 Cleaned up {len(expired_keys)} expired rate limit entries")

    last_cleanup_time = current_time


def _load_entry(key: str, window_seconds: int, client: Optional[redis.Redis], current_time: int) -> dict:
    entry = {
        "count": 0,
        "reset_time": current_time + window_seconds,
        "last_redis_sync": current_time,
    }
    if client is None:
        return entry

    try:
        redis_count = client.get(key)
        redis_ttl = client.ttl(key)
        if redis_count and redis_ttl > 0:
            entry["count"] = int(redis_count)
            entry["reset_time"] = current_time + redis_ttl
    except redis.RedisError as e:
        logger.warning(f"⚠️ Failed to load from Redis, using memory only: {e}")
    return entry


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis] = None
) -> tuple[bool, int, int]:
    """Check if rate limit is exceeded

    Args:
        key: Cache key for this rate limit
        limit: Maximum number of requests allowed
        window_seconds: Time window in seconds
        client: Redis client instance, or None for memory only

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    current_time = int(time.time())

    cleanup_expired_cache()

    with cache_lock:
        if key not in memory_cache:
            memory_cache[key] = _load_entry(key, window_seconds, client, current_time)

        cache_entry = memory_cache[key]

        # Check if window has expired
        if current_time >= cache_entry["reset_time"]:
            cache_entry["count"] = 0
            cache_entry["reset_time"] = current_time + window_seconds
            cache_entry["last_redis_sync"] = 0

        is_allowed = cache_entry["count"] < limit
        if is_allowed:
            cache_entry["count"] += 1

        # Sync to Redis periodically (not on every request)
        time_since_sync = current_time - cache_entry.get("last_redis_sync", 0)
        if client is not None and time_since_sync >= MEMORY_CACHE_SYNC_INTERVAL:
            try:
                client.set(key, cache_entry["count"], ex=window_seconds)
                cache_entry["last_redis_sync"] = current_time
                logger.debug(f"📡 Synced {key} to Redis: {cache_entry['count']}/{limit}")
            except redis.RedisError as e:
                logger.warning(f"⚠️ Failed to sync to Redis: {e}")

        ttl = cache_entry["reset_time"] - current_time
        return is_allowed, cache_entry["count"], max(0, ttl)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


async def rate_limit_dependency(
    request: Request,
    response: Response,
    limit: int,
    window_seconds: int,
    key_prefix: str = "rate_limit",
):
    """FastAPI dependency enforcing a per-IP request limit"""
    key = f"{key_prefix}:{client_ip(request)}"
    is_allowed, current_count, ttl = check_rate_limit(key, limit, window_seconds, get_redis_client())

    if not is_allowed:
        logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
        raise HTTPException(
            status_code=429,
            detail={
                "error": f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
                "retry_after": ttl,
            },
            headers={"Retry-After": str(ttl)},
        )

    response.headers["X-RateLimit-Limit"] = str(limit)
    response.headers["X-RateLimit-Remaining"] = str(limit - current_count)


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a rate limiter dependency with specific parameters

    Example usage:
        contact_rate_limit = create_rate_limiter(limit=5, window_seconds=3600, key_prefix="contact")

        @router.post("")
        async def submit(data: ContactCreate, _: None = Depends(contact_rate_limit)):
            ...
    """

    async def rate_limiter(request: Request, response: Response):
        return await rate_limit_dependency(request, response, limit, window_seconds, key_prefix)

    return rate_limiter
