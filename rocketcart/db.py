"""
Storage Clients - Upstash Redis

Provides the async Upstash Redis client used for the cart snapshot.
"""

from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis

from rocketcart import config

_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not config.redis_configured():
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(
            url=config.UPSTASH_REDIS_REST_URL,
            token=config.UPSTASH_REDIS_REST_TOKEN,
        )

    return _redis_client


async def close_redis() -> None:
    """Close the shared client, if one was created."""
    global _redis_client

    if _redis_client is not None:
        await _redis_client.close()
        _redis_client = None
