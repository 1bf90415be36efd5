"""
Main application entry point for the Contact Book API.

This module builds the FastAPI application from explicit settings, sets up
logging, CORS and the JSON error envelope, and includes the contacts router
and the liveness probe.

Modules:
- FastAPI: Web framework
- CORSMiddleware: Middleware for handling CORS
- contact_book.core: Application settings
- contact_book.database: Engine and session factory
- contact_book.errors: Error taxonomy and handlers
- contact_book.contacts: Contacts router
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_book import contacts, schemas
from contact_book.core import Settings, get_settings
from contact_book.database import create_db_engine, create_session_factory, create_tables
from contact_book.errors import register_error_handlers

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """
    Configure root logging for the service.

    Args:
        settings (Settings): Application settings; ``LOG_LEVEL`` sets the
            threshold.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Settings) -> FastAPI:
    """
    Build the Contact Book application.

    The datastore engine is created here from ``settings``; without
    credentials the service still starts and the data endpoints report
    ``Database not configured``.

    Args:
        settings (Settings): Application settings.

    Returns:
        FastAPI: Configured application.
    """
    engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        if engine is None:
            logger.warning("Database not configured, data endpoints are disabled")
        else:
            create_tables(engine)
        logger.info("Contact Book API starting on port %s", settings.PORT)
        yield
        if engine is not None:
            engine.dispose()
        logger.info("Contact Book API stopped")

    app = FastAPI(title="Contact Book API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(contacts.router)

    @app.get("/health", response_model=schemas.HealthResponse, tags=["health"])
    def health_check():
        """
        Liveness probe.

        Returns a static payload without checking any dependency.
        """
        return schemas.HealthResponse()

    return app


settings = get_settings()
configure_logging(settings)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
