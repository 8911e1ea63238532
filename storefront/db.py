"""
Storage Module - Key/value stores for the cart snapshot

Provides:
- KeyValueStore protocol (async get/set by string key)
- RedisStore backed by the Upstash async Redis client
- MemoryStore for local runs and tests
- get_store() singleton picking Redis when it is configured
"""

import asyncio
from typing import Dict, Optional, Protocol

from upstash_redis.asyncio import Redis as AsyncRedis

from storefront import config
from storefront.logging import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """Async key/value storage surviving process restarts."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> bool:
        ...


class RedisStore:
    """KeyValueStore on top of Upstash Redis (REST)."""

    def __init__(self, client: AsyncRedis):
        self.client = client

    @classmethod
    def from_env(cls) -> "RedisStore":
        """
        Build a store from the standard Upstash env var names:
        - UPSTASH_REDIS_REST_URL
        - UPSTASH_REDIS_REST_TOKEN
        """
        if not config.redis_configured():
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        return cls(AsyncRedis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN))

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: str) -> bool:
        result = await self.client.set(key, value)
        return bool(result)


class MemoryStore:
    """
    In-process KeyValueStore.

    Survives nothing beyond the process; used when Redis is not
    configured and as the store in tests.
    """

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    async def get(self, key: str) -> Optional[str]:
        await asyncio.sleep(0)
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        await asyncio.sleep(0)
        self.data[key] = value
        return True


class StorageKeys:
    """Key names used in the store."""

    CART = config.CART_STORAGE_KEY


# Singleton instance
_store: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    """
    Get the key/value store (singleton).

    Redis when both Upstash variables are set, otherwise an in-memory
    store (cart then lives only as long as the process).
    """
    global _store

    if _store is None:
        if config.redis_configured():
            _store = RedisStore.from_env()
        else:
            logger.warning("Upstash Redis is not configured, cart will be kept in memory only")
            _store = MemoryStore()

    return _store


def set_store(store: Optional[KeyValueStore]) -> None:
    """Replace the store singleton (None resets it)."""
    global _store
    _store = store
