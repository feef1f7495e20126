"""
Key-value storage backends for persisted session state.

The stores never talk to a backend directly; they go through
SessionStateRepository, which only needs get/set/delete of string values.
"""

import logging
from abc import ABC, abstractmethod

from redis.asyncio import Redis

import config
from enums.storage_backend import StorageBackend

logger = logging.getLogger(__name__)


class KeyValueStorage(ABC):

    @abstractmethod
    async def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...

    async def close(self) -> None:
        pass


class InMemoryKeyValueStorage(KeyValueStorage):
    """Process-local storage. Contents are lost when the process exits."""

    def __init__(self):
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)


class RedisKeyValueStorage(KeyValueStorage):

    def __init__(self, redis: Redis, ttl_seconds: int = 0):
        """
        Args:
            redis: Redis client created with decode_responses=True
            ttl_seconds: Expiry applied on every write (0 = keep forever)
        """
        self.redis = redis
        self.ttl_seconds = ttl_seconds

    async def get(self, key: str) -> str | None:
        return await self.redis.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.ttl_seconds > 0:
            await self.redis.set(key, value, ex=self.ttl_seconds)
        else:
            await self.redis.set(key, value)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)

    async def close(self) -> None:
        await self.redis.aclose()


def create_storage(backend: StorageBackend | None = None) -> KeyValueStorage:
    """Build the storage backend selected by config.STORAGE_BACKEND."""
    backend = backend or config.STORAGE_BACKEND

    if backend == StorageBackend.REDIS:
        redis = Redis(
            host=config.REDIS_HOST,
            port=config.REDIS_PORT,
            password=config.REDIS_PASSWORD or None,
            db=config.REDIS_DB,
            decode_responses=True
        )
        logger.info(f"Session storage: redis at {config.REDIS_HOST}:{config.REDIS_PORT}/{config.REDIS_DB}")
        return RedisKeyValueStorage(redis, ttl_seconds=config.STORAGE_TTL_SECONDS)

    logger.info("Session storage: in-memory (state is lost on restart)")
    return InMemoryKeyValueStorage()
