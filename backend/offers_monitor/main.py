"""Steam Offers Monitor -- FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from offers_monitor.api.v1.router import api_v1_router
from offers_monitor.config import settings
from offers_monitor.db.session import async_session_factory, engine
from offers_monitor.models import Base
from offers_monitor.scanner.factory import build_orchestrator, create_http_client
from offers_monitor.services.catalog_service import DatabaseCatalog

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Startup
    logger.info("Starting Offers Monitor API server...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables verified/created")
    except Exception as e:
        logger.error(f"Database init failed: {e}", exc_info=True)

    # Process-wide: page cursors live on the orchestrator
    http_client = create_http_client()
    app.state.http_client = http_client
    app.state.orchestrator = build_orchestrator(
        http_client,
        DatabaseCatalog(async_session_factory),
    )
    logger.info(
        f"Scanner ready (window={settings.SCAN_WINDOW_SIZE}, "
        f"quota={settings.SCAN_QUOTA}, limit={settings.RESULT_LIMIT})"
    )

    yield

    # Shutdown
    logger.info("Shutting down Offers Monitor API server...")
    await http_client.aclose()
    await engine.dispose()


app = FastAPI(
    title="Steam Offers Monitor API",
    description="Finds Steam apps with an active discount",
    version="0.1.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Register API v1 router
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Steam Offers Monitor API",
        "version": "0.1.0",
        "description": "Finds Steam apps with an active discount",
        "docs": "/docs" if settings.DEBUG else None,
        "offers": "/api/v1/offers?page=1",
        "health": "/api/v1/health",
    }
