"""
FastAPI dependencies.

Headers -> RequestContext mapping:
- X-User-Id -> context.user_id (authentication itself happens upstream)
"""

from fastapi import Request

from ..catalog import ItemCatalog
from ..lifecycle import ItemLifecycle
from ..models import RequestContext
from ..types import TypeServices


def get_catalog(request: Request) -> ItemCatalog:
    return request.app.state.catalog


def get_lifecycle(request: Request) -> ItemLifecycle:
    return request.app.state.catalog.lifecycle


def get_services(request: Request) -> TypeServices:
    return request.app.state.catalog.services


def get_request_context(request: Request) -> RequestContext:
    """Build the per-request context once; endpoints receive it explicitly."""
    return RequestContext(
        url=str(request.url),
        user_id=request.headers.get("X-User-Id") or None,
    )
