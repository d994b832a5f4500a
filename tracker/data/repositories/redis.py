from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from tracker.config import Config, logger

redis_logger = logger.getChild("redis")


class RedisUnavailableError(Exception):
    """Raised when a Redis command cannot be completed."""


class RedisClient:
    """A singleton Redis client for interacting with Redis asynchronously."""

    _instance = None

    def __new__(cls, *args, **kwargs):
        if not cls._instance:
            cls._instance = super(RedisClient, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return
        self.redis: Optional[Redis] = None
        self._initialized = True

    async def connect(self) -> Redis:
        if self.redis is None:
            self.redis = Redis(
                host=Config.REDIS_HOST,
                port=Config.REDIS_PORT,
                db=0,
                password=Config.REDIS_PASSWORD or None,
                decode_responses=True,
            )
            redis_logger.info(f"Redis client created for {Config.REDIS_HOST}:{Config.REDIS_PORT}")
        return self.redis

    async def close(self) -> None:
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None

    async def get(self, name: str) -> Any:
        redis = await self.connect()
        try:
            return await redis.get(name)
        except RedisError as e:
            raise RedisUnavailableError(f"Redis operation failed: {str(e)}") from e

    async def incr(self, name: str) -> int:
        redis = await self.connect()
        try:
            return await redis.incr(name)
        except RedisError as e:
            raise RedisUnavailableError(f"Redis operation failed: {str(e)}") from e

    async def expire(self, name: str, seconds: int) -> bool:
        redis = await self.connect()
        try:
            return await redis.expire(name, seconds)
        except RedisError as e:
            raise RedisUnavailableError(f"Redis operation failed: {str(e)}") from e


redis_client = RedisClient()


async def get_redis_client() -> RedisClient:
    return redis_client
