# Configure the application for tests before anything imports tracker.config
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "False"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("LOG_FILE", "logs/test.log")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tracker.business.services import create_access_token
from tracker.config import logger
from tracker.data.repositories import get_session
from tracker.data.schemas import Phase, Platform, Problem, User
from tracker.main import create_app

TEST_USER_ID = "user-1"
OTHER_USER_ID = "user-2"


# One in-memory database per test, shared by every session through StaticPool
@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db(session_factory):
    async with session_factory() as session:
        yield session


# Two phases; problem ids differ from ladder numbers on purpose
@pytest_asyncio.fixture
async def ladder(test_db):
    phases = [
        Phase(
            id=1,
            name="Foundations",
            target_rating_start=800,
            target_rating_end=1000,
            problem_start=41,
            problem_end=43,
        ),
        Phase(
            id=2,
            name="Intermediate",
            target_rating_start=1000,
            target_rating_end=1200,
            problem_start=44,
            problem_end=45,
        ),
    ]
    problems = [
        Problem(id=1, number=41, platform=Platform.LEETCODE, name="Two Sum",
                url="https://leetcode.com/problems/two-sum", phase_id=1, topic="Arrays"),
        Problem(id=2, number=42, platform=Platform.CODEFORCES, name="Watermelon",
                url="https://codeforces.com/problemset/problem/4/A", phase_id=1, topic="Math"),
        Problem(id=3, number=43, platform=Platform.CSES, name="Weird Algorithm",
                url="https://cses.fi/problemset/task/1068", phase_id=1, topic="Simulation",
                is_starred=True),
        Problem(id=4, number=44, platform=Platform.ATCODER, name="Frog 1",
                url="https://atcoder.jp/contests/dp/tasks/dp_a", phase_id=2, topic="DP"),
        Problem(id=5, number=45, platform=Platform.OTHER, name="Custom Graph",
                url="https://example.com/graph", phase_id=2, topic="Graphs",
                note="Practice BFS first"),
    ]
    test_db.add_all(phases)
    await test_db.commit()
    test_db.add_all(problems)
    await test_db.commit()
    return problems


@pytest_asyncio.fixture
async def test_user(test_db):
    user = User(id=TEST_USER_ID, name="Test User", email="test@example.com")
    test_db.add(user)
    await test_db.commit()
    return user


@pytest_asyncio.fixture
async def other_user(test_db):
    user = User(
        id=OTHER_USER_ID, name="Other User", email="other@example.com", username="taken_name"
    )
    test_db.add(user)
    await test_db.commit()
    return user


@pytest.fixture
def app(session_factory):
    application = create_app(rate_limit=False)

    async def override_get_session():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_session] = override_get_session
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    token = create_access_token(TEST_USER_ID, {"name": "Test User", "email": "test@example.com"})
    return {"Authorization": f"Bearer {token}"}


# Disable logging during tests
@pytest.fixture(autouse=True)
def disable_logging():
    logger.disabled = True
    yield
    logger.disabled = False
