import httpx
import pytest
from fastapi import FastAPI, status

from tracker.data.repositories import RedisUnavailableError
from tracker.presentation.middleware import RateLimitMiddleware


class FakeRedis:
    def __init__(self):
        self.values = {}
        self.expiry = {}

    async def get(self, name):
        return self.values.get(name)

    async def incr(self, name):
        self.values[name] = int(self.values.get(name, 0)) + 1
        return self.values[name]

    async def expire(self, name, seconds):
        self.expiry[name] = seconds
        return True


class BrokenRedis:
    async def get(self, name):
        raise RedisUnavailableError("connection refused")


def build_app(redis, read_limit=3, write_limit=1):
    app = FastAPI()

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    @app.post("/ping")
    async def post_ping():
        return {"ok": True}

    async def redis_factory():
        return redis

    app.add_middleware(
        RateLimitMiddleware,
        read_limit=read_limit,
        write_limit=write_limit,
        window=60,
        redis_factory=redis_factory,
    )
    return app


async def send(app, method, path="/ping"):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.request(method, path, headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.2"})


@pytest.mark.asyncio
async def test_reads_are_limited_per_window():
    redis = FakeRedis()
    app = build_app(redis)

    codes = [(await send(app, "GET")).status_code for _ in range(4)]

    assert codes == [200, 200, 200, 429]
    assert redis.expiry == {"rate_limit:ip:10.0.0.1:read:/ping": 60}


@pytest.mark.asyncio
async def test_limited_response_body():
    app = build_app(FakeRedis())

    await send(app, "POST")
    response = await send(app, "POST")

    assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
    assert response.json()["code"] == "RATE_LIMITED"
    assert response.headers["retry-after"] == "60"


@pytest.mark.asyncio
async def test_reads_and_writes_are_counted_separately():
    redis = FakeRedis()
    app = build_app(redis)

    assert (await send(app, "POST")).status_code == status.HTTP_200_OK
    assert (await send(app, "GET")).status_code == status.HTTP_200_OK
    assert set(redis.values) == {
        "rate_limit:ip:10.0.0.1:write:/ping",
        "rate_limit:ip:10.0.0.1:read:/ping",
    }


@pytest.mark.asyncio
async def test_unavailable_redis_lets_requests_through():
    app = build_app(BrokenRedis(), read_limit=0)

    response = await send(app, "GET")

    assert response.status_code == status.HTTP_200_OK
