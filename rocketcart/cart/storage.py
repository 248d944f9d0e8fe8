"""Cart snapshot storage: Redis-backed and in-memory."""
import json
from typing import Optional, Protocol

from rocketcart import config
from rocketcart.db import get_redis
from rocketcart.errors import StorageUnavailableError
from rocketcart.logging import get_logger

logger = get_logger(__name__)


class CartStorage(Protocol):
    """Durable key-value store for the whole cart, saved as one blob."""

    async def load(self) -> Optional[list]:
        """Return the saved snapshot, or None when absent or unreadable."""
        ...

    async def save(self, items: list) -> None:
        ...

    async def clear(self) -> None:
        ...


def encode_snapshot(items: list) -> str:
    return json.dumps(items, ensure_ascii=False)


def decode_snapshot(raw, key: str) -> Optional[list]:
    """Parse a stored snapshot. Malformed values are logged and treated as absent."""
    if raw is None or raw == "":
        return None

    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Corrupted cart snapshot under {key!r}: {e}")
        return None

    if not isinstance(data, list):
        logger.warning(f"Cart snapshot under {key!r} is {type(data).__name__}, expected list")
        return None

    return data


class RedisCartStorage:
    """
    Stores the cart snapshot in Upstash Redis under a single fixed key.

    Usage:
        storage = RedisCartStorage()
        items = await storage.load()
        await storage.save(cart.to_list())
    """

    def __init__(self, key: Optional[str] = None, redis=None):
        self.key = key or config.CART_STORAGE_KEY
        self._redis = redis  # Lazy initialization

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis()
            except (ValueError, ImportError) as e:
                raise StorageUnavailableError(
                    f"Redis not available: {e}. Check UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN."
                ) from e
        return self._redis

    async def load(self) -> Optional[list]:
        try:
            raw = await self.redis.get(self.key)
        except StorageUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to read cart from Redis: {e}")
            raise StorageUnavailableError(f"Cart storage unavailable: {e}") from e

        return decode_snapshot(raw, self.key)

    async def save(self, items: list) -> None:
        try:
            await self.redis.set(self.key, encode_snapshot(items))
        except StorageUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to save cart to Redis: {e}")
            raise StorageUnavailableError(f"Cart storage unavailable: {e}") from e

    async def clear(self) -> None:
        try:
            await self.redis.delete(self.key)
        except StorageUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Failed to clear cart from Redis: {e}")
            raise StorageUnavailableError(f"Cart storage unavailable: {e}") from e


class MemoryCartStorage:
    """In-process storage; keeps the encoded snapshot like Redis would."""

    def __init__(self, key: Optional[str] = None, initial: Optional[str] = None):
        self.key = key or config.CART_STORAGE_KEY
        self.raw: Optional[str] = initial

    async def load(self) -> Optional[list]:
        return decode_snapshot(self.raw, self.key)

    async def save(self, items: list) -> None:
        self.raw = encode_snapshot(items)

    async def clear(self) -> None:
        self.raw = None
