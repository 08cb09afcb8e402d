# ============================================================================
# SEO META API - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: Wire pool, services, routes and health checks
# ============================================================================
"""
SEO Meta API Main Application

FastAPI application that:
1. Exposes POST /rank-math-api/v1/update-meta
2. Manages the database connection pool
3. Serves health probes (/livez, /readyz, /health)

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE, CODENAME
from api.routes import rest_error_handler, router, set_meta_services
from core.config import get_defaults, get_eligible_kinds
from core.errors import RestError
from infrastructure.auth import IdentityService
from repositories.database import close_pool, init_pool
from services import SeoMetaService

# Health check system
from health import get_registry, health_router

# Configure logging using our structured logging system
from core.logging import configure_logging, get_logger

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Initializes services on startup, cleans up on shutdown.
    """
    logger.info(f"Starting {CODENAME} v{__version__} (Build {BUILD_DATE})")
    logger.info(f"Eligible content kinds: {', '.join(get_eligible_kinds())}")

    # Optional: Bootstrap schema on startup (for development)
    if os.environ.get("AUTO_BOOTSTRAP_SCHEMA", "").lower() == "true":
        logger.info("Auto-bootstrap enabled, deploying schema...")
        from infrastructure import DatabaseInitializer
        result = DatabaseInitializer().initialize_all(dry_run=False)
        if result.success:
            logger.info("Schema bootstrap completed successfully")
        else:
            logger.warning(f"Schema bootstrap had issues: {result.errors}")

    pool = await init_pool()
    logger.info("Database pool initialized")

    set_meta_services(
        meta_service=SeoMetaService(pool),
        identity_service=IdentityService(pool),
    )

    import health.checks  # noqa: F401  Register all health check plugins
    logger.info(f"Health checks initialized ({len(get_registry())} checks registered)")

    yield

    logger.info(f"Shutting down {CODENAME}...")
    await close_pool()
    logger.info(f"{CODENAME} stopped")


app = FastAPI(
    title=CODENAME,
    description="Update SEO title, description and canonical URL of content items",
    version=__version__,
    lifespan=lifespan,
)

app.add_exception_handler(RestError, rest_error_handler)

# Health check routes (no prefix - /livez, /readyz, /health)
app.include_router(health_router)

# Meta routes under the REST namespace
app.include_router(router, prefix=get_defaults().api.prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": CODENAME,
        "version": __version__,
        "build_date": BUILD_DATE,
        "namespace": get_defaults().api.namespace,
        "status": "running",
        "docs": "/docs",
    }


# ============================================================================
# MAIN ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "8000"))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
