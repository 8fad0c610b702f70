from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from flatrest.core.config import Settings, get_settings
from flatrest.core.logging import RequestLogMiddleware, configure_logging
from flatrest.repositories.json_storage import JsonFileStore
from flatrest.routers import catalog as catalog_router
from flatrest.routers import examples as examples_router
from flatrest.routers import users as users_router
from flatrest.services.collection_service import CollectionError, CollectionService

logger = logging.getLogger(__name__)


async def _collection_error_handler(request: Request, exc: CollectionError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Unhandled %s on %s %s: %s", exc.code, request.method, request.url.path, exc.__cause__ or exc)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn (``uvicorn flatrest.app:create_app --factory``)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    # interactive docs only outside production
    docs_enabled = settings.app_env != "prod"
    app = FastAPI(
        title="flatrest",
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    app.add_middleware(RequestLogMiddleware)
    app.add_exception_handler(CollectionError, _collection_error_handler)

    store = JsonFileStore(settings.data_dir, indent=settings.json_indent)
    app.state.settings = settings
    app.state.collection_service = CollectionService(store)

    @app.get("/health")
    def health():
        return {"ok": True}

    app.include_router(users_router.router)
    app.include_router(catalog_router.router)
    # catch-all GET route, keep last
    app.include_router(examples_router.router)

    logger.debug("Serving collections from %s", settings.data_dir)
    return app


app = create_app()
