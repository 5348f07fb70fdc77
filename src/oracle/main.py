"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from oracle.catalog.seed import seed_catalog
from oracle.collections.router import router as collections_router
from oracle.config import get_settings
from oracle.database import close_db, get_session, init_db
from oracle.health.router import router as health_router
from oracle.middleware import setup_middleware
from oracle.redis_client import close_redis, init_redis

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)

    # Seed the word catalog (idempotent)
    if settings.seed_catalog_on_startup:
        try:
            async for db in get_session():
                await seed_catalog(db)
                break
        except SQLAlchemyError:
            logger.warning("Catalog seeding failed (tables may not exist yet)", exc_info=True)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Oracle Collections API",
        description="Spin result tracking and collection profiles for the Oracle word game",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(collections_router)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (the `oracle-api` console script)."""
    settings = get_settings()
    uvicorn.run(
        "oracle.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
