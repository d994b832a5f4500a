from typing import Awaitable, Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from tracker.config import Config, logger
from tracker.data.repositories.redis import RedisClient, RedisUnavailableError, get_redis_client
from tracker.errors import ErrorCode

rate_limit_logger = logger.getChild("rate_limit")

WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}


def client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request counter per client address and path, kept in Redis."""

    def __init__(
        self,
        app,
        read_limit: int = Config.RATE_LIMIT_READ,
        write_limit: int = Config.RATE_LIMIT_WRITE,
        window: int = Config.RATE_LIMIT_WINDOW,
        redis_factory: Optional[Callable[[], Awaitable[RedisClient]]] = None,
    ):
        super().__init__(app)
        self.read_limit = read_limit
        self.write_limit = write_limit
        self.window = window
        self.redis_factory = redis_factory or get_redis_client

    def limit_for(self, request: Request) -> int:
        if request.method in WRITE_METHODS:
            return self.write_limit
        return self.read_limit

    async def dispatch(self, request: Request, call_next):
        bucket = "write" if request.method in WRITE_METHODS else "read"
        key = f"rate_limit:ip:{client_address(request)}:{bucket}:{request.url.path}"
        limit = self.limit_for(request)

        try:
            redis = await self.redis_factory()
            current_count = int(await redis.get(key) or 0)
            if current_count >= limit:
                rate_limit_logger.warning(f"Rate limit exceeded for {key}")
                return JSONResponse(
                    status_code=429,
                    content={
                        "detail": "Rate limit exceeded. Please try again later.",
                        "code": ErrorCode.RATE_LIMITED.value,
                    },
                    headers={"Retry-After": str(self.window)},
                )
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, self.window)
        except RedisUnavailableError as e:
            rate_limit_logger.error(f"Rate limiting skipped, Redis unavailable: {e}")

        return await call_next(request)
