"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lifecalendar.api.config import get_settings
from lifecalendar.api.middleware import LoggingMiddleware
from lifecalendar.api.routes import api_router

logger = logging.getLogger("lifecalendar.api")

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Debug mode: {settings.debug}")
    if not settings.has_fonts_api_key:
        logger.warning("No Google Fonts API key configured, calendars are rendered without embedded fonts")

    yield

    logger.info("Shutting down...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Embeddable life calendar SVGs",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Logging middleware
    app.add_middleware(
        LoggingMiddleware,
        exclude_paths=["/health"],
    )

    # CORS middleware (calendars are embedded from any origin)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)

    uvicorn.run(
        "lifecalendar.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
