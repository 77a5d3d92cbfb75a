"""FastAPI application entry point for Blogfixer."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from blogfixer import __version__
from blogfixer.api.routes import router
from blogfixer.config import get_settings
from blogfixer.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    settings = get_settings()
    setup_logging(settings.log_level, json_logs=settings.log_json)
    logger = get_logger(__name__)
    logger.info(
        "Blogfixer starting",
        version=__version__,
        api_version=settings.shopify_api_version,
        write_rate_per_second=settings.write_rate_per_second,
    )
    yield
    logger.info("Blogfixer shutting down")


app = FastAPI(
    title="Blogfixer",
    description="Find and fix structural SEO problems in Shopify blog articles",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic info."""
    return {
        "name": "Blogfixer",
        "version": __version__,
        "docs": "/docs",
    }
