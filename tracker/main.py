from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tracker.config import Config, logger
from tracker.data.repositories import init_db, redis_client
from tracker.errors import register_exception_handlers
from tracker.presentation.middleware import LoggingMiddleware, RateLimitMiddleware
from tracker.presentation.routes import (
    favorites_router,
    history_router,
    init_router,
    phase_router,
    problem_router,
    stats_router,
    status_router,
    user_router,
)


@asynccontextmanager
async def life_span(app: FastAPI):
    logger.info("Server is starting...")
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
    yield
    await redis_client.close()
    logger.info("Server has been stopped")


version = "v1"


def create_app(rate_limit: bool = Config.RATE_LIMIT_ENABLED) -> FastAPI:
    app = FastAPI(
        title="CP Ladder Tracker API",
        description="Track progress through a curated ladder of competitive-programming problems",
        version=version,
        lifespan=life_span,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(LoggingMiddleware)

    if rate_limit:
        app.add_middleware(RateLimitMiddleware)
        logger.info("Rate limiting middleware added")

    register_exception_handlers(app)

    app.include_router(status_router, prefix=f"/api/{version}")
    app.include_router(history_router, prefix=f"/api/{version}")
    app.include_router(favorites_router, prefix=f"/api/{version}")
    app.include_router(phase_router, prefix=f"/api/{version}")
    app.include_router(problem_router, prefix=f"/api/{version}")
    app.include_router(stats_router, prefix=f"/api/{version}")
    app.include_router(user_router, prefix=f"/api/{version}")
    app.include_router(init_router, prefix=f"/api/{version}")

    logger.info(f"Application startup complete - API version: {version}")
    return app


app = create_app()
