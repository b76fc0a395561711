"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from conferences.alerts import install_error_handlers
from conferences.config import Settings
from conferences.middleware.logging import RequestLoggingMiddleware
from conferences.routes import admin, conferences, health, search
from conferences.search import Fts5SearchIndex
from conferences.services import ConferenceSyncService
from conferences.storage import SqliteConferenceStore

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Opens the conference database and the search index, optionally
    rebuilds the index from the database, and closes both on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("api_startup", host=settings.host, port=settings.port)

    store = SqliteConferenceStore(settings.database_path)
    store.initialize()

    search_index = Fts5SearchIndex(settings.search_index_path)
    search_index.initialize()

    service = ConferenceSyncService(store, search_index)
    if settings.reindex_on_startup:
        doc_count = service.reindex()
        logger.info("search_index_ready", document_count=doc_count)

    app.state.conference_store = store
    app.state.search_index = search_index
    app.state.conference_service = service

    try:
        yield
    finally:
        search_index.close()
        store.close()
        logger.info("api_shutdown")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Conference Registry API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    install_error_handlers(app)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(conferences.router, prefix="/api/v1")
    app.include_router(search.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
