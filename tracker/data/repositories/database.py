from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tracker.config import Config, logger

db_logger = logger.getChild("db")

async_engine = create_async_engine(url=Config.DATABASE_URL, echo=Config.DATABASE_ECHO)
async_session_factory = async_sessionmaker(
    bind=async_engine, class_=AsyncSession, expire_on_commit=False
)


async def init_db() -> None:
    """
    Creates the tracker tables if they do not exist yet.
    """
    # Register every table on SQLModel.metadata before create_all
    import tracker.data.schemas  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    db_logger.info("Database tables ensured")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get an async session for the tracker database.
    """
    async with async_session_factory() as session:
        yield session
