"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reviewguide import __version__
from reviewguide.api import routes
from reviewguide.config.settings import settings
from reviewguide.rules import registry
from reviewguide.utils.logging import setup_observability

# Setup logging and observability
setup_observability()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        f"Starting review-guide API in {settings.environment} environment "
        f"with {len(registry)} rules"
    )
    yield
    logger.info("Shutting down review-guide API")


app = FastAPI(
    title="Review Guide",
    description="Integrity checks for Markdown guides: table of contents, fences, headings and links",
    version=__version__,
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire if configured
if settings.logfire_token:
    import logfire

    logfire.instrument_fastapi(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router)


@app.get("/health")
async def health_check() -> dict[str, str | bool | int]:
    """Health check endpoint with configuration status."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "version": __version__,
        "rules": len(registry),
        "logfire_enabled": bool(settings.logfire_token),
    }


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "message": "Review Guide API",
        "docs": "/docs",
        "health": "/health",
        "rules": "/rules",
        "check": "/check",
    }
