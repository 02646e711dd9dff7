"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ts_helper import __version__
from ts_helper.api.routes import router as sessions_router
from ts_helper.client.service import close_chat_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Releases the shared assistant HTTP client on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting TS Helper API...")
    yield
    logger.info("Shutting down TS Helper API...")
    await close_chat_service()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="TS Helper API",
        description=(
            "Chat relay to a hosted assistant for Tourette's Syndrome questions. "
            "Creates conversation threads and returns the assistant's reply to "
            "each user turn."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(sessions_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "ts-helper"}

    return application


app = create_app()
