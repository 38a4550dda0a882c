# ABOUTME: FastAPI application factory with asset origin and database lifespan.
# ABOUTME: Main entry point for the trifecta edge dispatcher.

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from trifecta_edge import __version__
from trifecta_edge.config import get_settings
from trifecta_edge.db.session import close_db, init_db
from trifecta_edge.services.asset_origin import AssetOrigin
from trifecta_edge.web.routes import api, assets, newsletter, preflight

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan: shared origin client and database setup/teardown."""
    settings = get_settings()
    logger.info("app_startup", origin=settings.assets_origin_url)
    app.state.asset_origin = AssetOrigin(
        settings.assets_origin_url, timeout=settings.assets_timeout
    )
    if settings.db_create_tables:
        await init_db()
    yield
    logger.info("app_shutdown")
    await app.state.asset_origin.aclose()
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Trifecta Edge",
        description="Edge dispatcher for newsletter signups and affiliate-tagged pages",
        version=__version__,
        lifespan=lifespan,
    )

    # Order matters: the asset router's catch-all must come last.
    app.include_router(preflight.router)
    app.include_router(api.router)
    app.include_router(newsletter.router)
    app.include_router(assets.router)

    return app


# Application instance for uvicorn
app = create_app()
