"""
LOR API Server - FastAPI application.

Endpoints:
- /health                                : Health check
- /api/v1/resources                      : Resource search
- /api/v1/resources/{item_id}            : Resource view data
- /api/v1/resource-types                 : Registered resource types
- /api/v1/categories, /api/v1/grades     : Option vocabularies
- /api/v1/user                           : Current user
- /api/v1/items                          : Item create/update/delete
- /api/v1/items/{item_id}/files/{prop}   : Stored file delivery
- /docs                                  : OpenAPI documentation

Running:
    # Development (auto-reload)
    lor serve --reload

    # Production
    uvicorn lor.api.main:create_app --factory --host 0.0.0.0 --port 8000
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from ..exceptions import ItemNotFoundError, StorageError, UnknownResourceTypeError
from ..catalog import ItemCatalog
from ..lifecycle import ItemLifecycle
from ..registry import ResourceTypeRegistry
from ..settings import settings
from ..types import TypeServices
from .routers import items_router, resources_router


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log request method/path and response status/duration."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"→ REQUEST: {request.method} {request.url.path} | Client: {client_host}")

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"← RESPONSE: {request.method} {request.url.path} | "
            f"Status: {response.status_code} | "
            f"Duration: {duration_ms:.2f}ms"
        )
        return response


def create_app(
    services: TypeServices | None = None,
    registry: ResourceTypeRegistry | None = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        services: Storage/database collaborators (built from settings if None)
        registry: Resource type registry (global registry if None)
    """
    services = services or TypeServices.from_settings(settings)
    lifecycle = ItemLifecycle(services, registry)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        services.db.create_schema()
        services.storage.get_path_to_repository()
        logger.info(f"Repository root: {services.storage.root}")
        yield
        services.db.dispose()

    app = FastAPI(
        title="LOR API",
        description="Learning object repository",
        version="0.1.0",
        root_path=settings.root_path,
        lifespan=lifespan,
    )
    app.state.catalog = ItemCatalog(lifecycle)

    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(ItemNotFoundError)
    async def item_not_found_handler(request: Request, exc: ItemNotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(UnknownResourceTypeError)
    async def unknown_type_handler(request: Request, exc: UnknownResourceTypeError):
        return JSONResponse(status_code=422, content={"detail": {"type": str(exc)}})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"detail": "Operation failed"})

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    app.include_router(resources_router)
    app.include_router(items_router)
    return app

