"""Redis client with connection pooling and graceful fallback.

Redis is optional. When it is not configured or unreachable, callers get
None and degrade (session revocation becomes best effort).
"""

from redis.asyncio import ConnectionPool, Redis

from src.atelier.core.config import get_settings
from src.atelier.core.logging import get_logger

logger = get_logger(__name__)

_pool: ConnectionPool | None = None
_redis: Redis | None = None
_connection_attempted: bool = False


async def get_redis() -> Redis | None:
    """Get Redis client. Returns None if unavailable.

    The connection is lazily initialized on first call and reused thereafter.
    """
    global _pool, _redis, _connection_attempted

    if _redis is not None:
        return _redis

    # Failed once already, don't retry until close_redis is called
    if _connection_attempted:
        return None

    _connection_attempted = True
    settings = get_settings()

    if not settings.redis_url:
        logger.info("Redis not configured (REDIS_URL not set)")
        return None

    try:
        _pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_pool_size,
            decode_responses=True,
        )
        _redis = Redis(connection_pool=_pool)
        await _redis.ping()  # type: ignore[misc]
        logger.info("Redis connected successfully")
        return _redis

    except Exception as e:
        logger.warning(f"Redis connection failed: {e}. Falling back to non-Redis mode.")
        if _redis:
            await _redis.aclose()
        if _pool:
            await _pool.aclose()
        _redis = None
        _pool = None
        return None


async def close_redis() -> None:
    """Close the Redis connection. Call during shutdown."""
    global _pool, _redis, _connection_attempted
    if _redis is not None:
        await _redis.aclose()
    if _pool is not None:
        await _pool.aclose()
    _redis = None
    _pool = None
    _connection_attempted = False


def reset_redis_state() -> None:
    """Forget the cached client without closing it. Test helper."""
    global _pool, _redis, _connection_attempted
    _pool = None
    _redis = None
    _connection_attempted = False
