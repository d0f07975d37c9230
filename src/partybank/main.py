"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from partybank.bank.router import router as bank_router
from partybank.config import get_settings
from partybank.database import close_db, create_tables, init_db
from partybank.games.router import router as games_router
from partybank.health.router import router as health_router
from partybank.middleware import setup_middleware
from partybank.missions.router import router as missions_router
from partybank.redis_client import close_redis, init_redis
from partybank.social.notification_router import router as notification_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    if settings.create_tables:
        await create_tables()
    if settings.redis_url:
        await init_redis(settings.redis_url)
    else:
        logger.warning("redis_disabled", reason="PARTYBANK_REDIS_URL not set")

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Party Bank API",
        description="Coin bank for party games: risk station, hidden QR codes, scavenger chains and missions",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(bank_router)
    app.include_router(games_router)
    app.include_router(missions_router)
    app.include_router(notification_router)

    return app


app = create_app()
