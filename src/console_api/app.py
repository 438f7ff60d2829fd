"""FastAPI application factory and lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from console_api.config import Settings
from console_api.middleware.logging import RequestLoggingMiddleware
from console_api.routes import health, repository
from console_api.tree import (
    Catalog,
    CatalogError,
    ContentTreeService,
    DirectoryDraftStore,
    load_catalog,
)

logger = structlog.get_logger()


def build_service(settings: Settings, catalog: Catalog) -> ContentTreeService:
    """Wire the tree service to a catalog and the drafts directory.

    Args:
        settings: Service configuration.
        catalog: Content snapshot backing every store but drafts.

    Returns:
        Configured tree service.
    """
    return ContentTreeService(
        oracle=catalog,
        directory=catalog,
        assets=catalog,
        recycle_bin=catalog,
        data_sources=catalog,
        library=catalog,
        schedule=catalog,
        dashboards=catalog,
        drafts=DirectoryDraftStore(settings.drafts_dir),
        security_enabled=settings.security_enabled,
        ascending=settings.sort_ascending,
        max_workers=settings.gather_max_workers,
        timeout=settings.gather_timeout,
        retention=settings.draft_retention,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle events.

    Loads the catalog and builds the tree service on startup unless one
    was supplied to ``create_app``. A catalog that fails to load is
    replaced by an empty one and reported by the readiness probe.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info("api_startup", host=settings.host, port=settings.port)

    if app.state.tree_service is None:
        try:
            catalog = load_catalog(settings.catalog_path)
        except CatalogError as e:
            logger.error("catalog_load_failed", path=e.path, error=str(e))
            app.state.catalog_error = str(e)
            catalog = Catalog()
        app.state.tree_service = build_service(settings, catalog)

    try:
        yield
    finally:
        logger.info("api_shutdown")


def create_app(
    settings: Settings | None = None,
    service: ContentTreeService | None = None,
) -> FastAPI:
    """Factory function to create configured FastAPI application.

    Args:
        settings: Configuration instance. Creates default if None.
        service: Tree service to use. Built from settings on startup if None.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Content Console API",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/api/v1/docs" if settings.debug else None,
        redoc_url=None,
        openapi_url="/api/v1/openapi.json" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.tree_service = service
    app.state.catalog_error = None

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router, prefix="/api/v1")
    app.include_router(repository.router, prefix="/api/v1")

    return app
