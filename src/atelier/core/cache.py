"""Session token blacklist with Redis backend.

Signed-out session tokens are remembered until they would have expired
anyway. Without Redis, sign-out cannot revoke a token server-side.
"""

from src.atelier.core.redis import get_redis

PREFIX_TOKEN_BLACKLIST = "session_blacklist"


async def blacklist_token(token_hash: str, ttl: int) -> bool:
    """Add a session token hash to the blacklist.

    Returns:
        True if stored in Redis, False if Redis unavailable or ttl already elapsed
    """
    if ttl <= 0:
        return False
    redis = await get_redis()
    if not redis:
        return False
    await redis.setex(f"{PREFIX_TOKEN_BLACKLIST}:{token_hash}", ttl, "1")
    return True


async def is_token_blacklisted(token_hash: str) -> bool | None:
    """Check whether a session token was signed out.

    Returns:
        True: token is revoked
        False: Redis confirmed it is not revoked
        None: Redis unavailable
    """
    redis = await get_redis()
    if not redis:
        return None
    result = await redis.get(f"{PREFIX_TOKEN_BLACKLIST}:{token_hash}")
    return result is not None
