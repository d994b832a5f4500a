from abc import ABC, abstractmethod
from typing import Dict, Optional

from redis.asyncio import Redis

DEFAULT_SESSION_TTL = 60 * 60 * 24


class SessionStorage(ABC):
    """Session-scoped string key-value storage for store snapshots."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...


class MemorySessionStorage(SessionStorage):
    """Lives as long as the process; the equivalent of one browser tab."""

    def __init__(self):
        self.data: Dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self.data.pop(key, None)


class RedisSessionStorage(SessionStorage):
    """Keys are namespaced by session id and expire with the session."""

    def __init__(self, redis: Redis, session_id: str, ttl: int = DEFAULT_SESSION_TTL):
        self.redis = redis
        self.session_id = session_id
        self.ttl = ttl

    def _key(self, key: str) -> str:
        return f"session:{self.session_id}:{key}"

    async def get(self, key: str) -> Optional[str]:
        value = await self.redis.get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self.redis.set(self._key(key), value, ex=self.ttl)

    async def delete(self, key: str) -> None:
        await self.redis.delete(self._key(key))
