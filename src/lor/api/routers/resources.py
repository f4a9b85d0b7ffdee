"""
Read endpoints for the search and view pages.

Endpoints:
    GET /api/v1/resources                      - Search resources
    GET /api/v1/resources/{item_id}            - Single resource to display
    GET /api/v1/resource-types                 - Registered resource types
    GET /api/v1/resource-types/{type}/form     - Item form for a type
    GET /api/v1/categories                     - Category options
    GET /api/v1/grades                         - Grade options
    GET /api/v1/user                           - Current user
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from ...exceptions import UnknownResourceTypeError
from ...lifecycle import ItemLifecycle
from ...models import Item, RequestContext
from ...types import ItemForm, ResourceType, TypeServices
from ..deps import get_lifecycle, get_request_context, get_services
from ..forms import build_item_form
from ..schemas import ResourceDetail, ResourceSummary, ResourceTypeInfo, UserInfo

router = APIRouter(prefix="/api/v1", tags=["resources"])


def summarize(item: Item, resource_type: ResourceType, services: TypeServices) -> ResourceSummary:
    return ResourceSummary(
        id=item.id,
        name=item.name,
        type=item.type,
        category=item.category,
        grades=item.grades,
        topics=item.topics,
        description=item.description,
        owner=item.owner,
        image_url=services.storage.get_image_url(item),
        resource_url=resource_type.resolve_resource_url(item.id),
    )


@router.get("/resources", response_model=list[ResourceSummary])
def get_resources(
    keywords: str | None = Query(default=None, description="Substring terms"),
    type: list[str] | None = Query(default=None, description="Resource types"),
    category: list[str] | None = Query(default=None, description="Categories"),
    grade: list[str] | None = Query(default=None, description="Grades"),
    lifecycle: ItemLifecycle = Depends(get_lifecycle),
) -> list[ResourceSummary]:
    """
    Search resources for the main search page.

    Items whose payload is incomplete (missing attribute rows) or whose type
    is no longer registered are left out.
    """
    services = lifecycle.services
    results = []
    for item in services.items.search(keywords, types=type, categories=category, grades=grade):
        try:
            resource_type = lifecycle.resource_type(item.type)
        except UnknownResourceTypeError:
            logger.warning(f"Item {item.id} has unregistered type {item.type!r}, hiding it")
            continue
        if not resource_type.is_complete(item.id):
            continue
        results.append(summarize(item, resource_type, services))
    return results


@router.get("/resources/{item_id}", response_model=ResourceDetail)
def get_resource(
    item_id: int,
    lifecycle: ItemLifecycle = Depends(get_lifecycle),
    context: RequestContext = Depends(get_request_context),
) -> ResourceDetail:
    """Get a single resource to display."""
    services = lifecycle.services
    item = services.items.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Resource {item_id} not found")

    try:
        resource_type = lifecycle.resource_type(item.type)
    except UnknownResourceTypeError:
        logger.warning(f"Item {item_id} has unregistered type {item.type!r}")
        raise HTTPException(status_code=404, detail=f"Resource {item_id} not found")

    page = context.with_page(item.name)
    summary = summarize(item, resource_type, services)
    return ResourceDetail(
        **summary.model_dump(),
        title=page.title,
        heading=page.heading,
        display_html=resource_type.display_view(item_id),
        display_height=resource_type.display_height(),
        embed_html=resource_type.embed_view(item_id),
        unique_identifier=resource_type.unique_identifier(item_id),
    )


@router.get("/resource-types", response_model=list[ResourceTypeInfo])
def get_resource_types(lifecycle: ItemLifecycle = Depends(get_lifecycle)) -> list[ResourceTypeInfo]:
    """Get the types of resources."""
    types = []
    for name in lifecycle.registry.names():
        resource_type = lifecycle.resource_type(name)
        types.append(
            ResourceTypeInfo(
                name=name,
                label=resource_type.label,
                properties=list(resource_type.declared_properties()),
                display_height=resource_type.display_height(),
            )
        )
    return types


@router.get("/resource-types/{type_name}/form", response_model=ItemForm)
def get_item_form(
    type_name: str,
    item_id: int | None = Query(default=None, description="Item being edited"),
    lifecycle: ItemLifecycle = Depends(get_lifecycle),
) -> ItemForm:
    """Item create/edit form for a resource type."""
    resource_type = lifecycle.resource_type(type_name)
    return build_item_form(lifecycle.services.items, resource_type, item_id)


@router.get("/categories", response_model=list[str])
def get_categories(services: TypeServices = Depends(get_services)) -> list[str]:
    """Get all of the possible resource categories."""
    return services.items.list_categories()


@router.get("/grades", response_model=list[str])
def get_grades(services: TypeServices = Depends(get_services)) -> list[str]:
    """Get all of the possible resource grades."""
    return services.items.list_grades()


@router.get("/user", response_model=UserInfo)
def get_user(context: RequestContext = Depends(get_request_context)) -> UserInfo:
    """Get the current user."""
    return UserInfo(
        user_id=context.user_id,
        authenticated=context.is_authenticated,
        context=context.context,
    )
