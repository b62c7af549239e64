"""
Main FastAPI application with modular structure.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import advanced, filters, status
from .core.config import Settings, get_settings
from .core.exceptions import CatalogLoadError
from .services.feat_service import FeatService
from .utils.logger import setup_logger
from .utils.middleware import log_requests_middleware


def create_app(settings: Optional[Settings] = None, service: Optional[FeatService] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to the environment-driven settings
        service: Pre-built session service; when omitted one is created and
            its catalog is loaded on startup

    Returns:
        FastAPI application
    """
    settings = settings or get_settings()
    logger = setup_logger("feat-explorer", log_level=settings.log_level, log_dir=settings.log_dir)
    feat_service = service or FeatService(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not feat_service.is_ready:
            try:
                await feat_service.load_catalog_async()
            except CatalogLoadError as e:
                # Filtering stays unavailable; endpoints report "no data".
                logger.error(f"Starting without a catalog: {e.message}")
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        description=(
            "Faceted feat browser.\n\n"
            "Narrow the feat catalog by Type, Ancestry, Class and Tier, refine the result\n"
            "through the advanced panel, and list or remove the active filters."
        ),
        openapi_tags=[
            {"name": "filters", "description": "Sidebar facets, results and active filters."},
            {"name": "advanced", "description": "Advanced panel options and selections."},
            {"name": "status", "description": "Health and catalog status endpoints."},
        ],
    )
    app.state.feat_service = feat_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.middleware("http")(log_requests_middleware)

    app.include_router(filters.router, tags=["filters"])
    app.include_router(advanced.router, tags=["advanced"])
    app.include_router(status.router, tags=["status"])
    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    setup_logger("feat-explorer", log_level=settings.log_level).info("Starting Feat Explorer")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
