"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from soundtrek.auth.router import router as auth_router
from soundtrek.config import Settings, get_settings
from soundtrek.database import close_db, init_db
from soundtrek.health.router import router as health_router
from soundtrek.middleware import setup_middleware
from soundtrek.noise.router import router as noise_router
from soundtrek.redis_client import close_redis, init_redis
from soundtrek.stats.router import router as stats_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings: Settings = app.state.settings
    await init_db(settings.database_url, pool_size=settings.db_pool_size, max_overflow=settings.db_max_overflow)
    if settings.redis_url:
        await init_redis(settings.redis_url)
    logger.info("startup_complete", environment=settings.environment, version=settings.app_version)

    yield

    await close_db()
    await close_redis()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="SoundTrek API",
        description="Backend API for SoundTrek: crowdsourced noise-level map",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(noise_router)
    app.include_router(stats_router)

    return app


app = create_app()
