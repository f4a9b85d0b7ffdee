"""
Item mutation and file delivery endpoints.

Endpoints:
    POST   /api/v1/items                        - Create an item (multipart form)
    PUT    /api/v1/items/{item_id}              - Edit an item (multipart form)
    DELETE /api/v1/items/{item_id}              - Delete an item and its payload
    GET    /api/v1/items/{item_id}/files/{prop} - Download a stored file
    GET    /api/v1/items/{item_id}/image        - Download the item thumbnail

Generic fields go to the item store; everything else in the submission,
uploads included, is handed to the item's resource type.
"""

from pathlib import PurePath
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import FileResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ...catalog import ItemCatalog
from ...models import Item, RequestContext
from ...services.fs import UploadedFiles
from ...types import TypeServices
from ..deps import get_catalog, get_request_context, get_services
from ..forms import build_item_form
from ..schemas import OperationResponse

router = APIRouter(prefix="/api/v1", tags=["items"])

LIST_FIELDS = {"grades", "topics"}


async def read_submission(request: Request) -> tuple[dict[str, Any], UploadedFiles]:
    """
    Split a multipart submission into form values and uploads.

    Topics may be sent repeated or comma separated. Empty file inputs are
    treated as "no upload".
    """
    form = await request.form()
    data: dict[str, Any] = {}
    uploads = UploadedFiles()

    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if not value.filename:
                continue
            content = await value.read()
            if content:
                uploads.add(key, content, value.filename)
        elif key in LIST_FIELDS:
            parts = value.split(",") if key == "topics" else [value]
            data.setdefault(key, []).extend(p.strip() for p in parts if p.strip())
        else:
            data[key] = value.strip()

    return data, uploads


def _validate(
    catalog: ItemCatalog,
    type_name: str,
    data: dict[str, Any],
    uploads: UploadedFiles,
    existing_item_id: int | None = None,
) -> None:
    resource_type = catalog.lifecycle.resource_type(type_name)
    form = build_item_form(catalog.services.items, resource_type, existing_item_id)
    errors = form.validate_submission(data, uploads)
    if errors:
        raise HTTPException(status_code=422, detail=errors)


def _create(catalog: ItemCatalog, item: Item, data: dict[str, Any], uploads: UploadedFiles):
    item, result = catalog.create(item, data, uploads)
    if not result:
        raise HTTPException(status_code=500, detail="Operation failed")
    return OperationResponse(id=item.id, success=True)


def _update(catalog: ItemCatalog, item_id: int, data: dict[str, Any], uploads: UploadedFiles):
    item, result = catalog.update(item_id, data, uploads)
    if not result:
        raise HTTPException(status_code=500, detail="Operation failed")
    return OperationResponse(id=item.id, success=True)


@router.post("/items", response_model=OperationResponse, status_code=201)
async def create_item(
    request: Request,
    catalog: ItemCatalog = Depends(get_catalog),
    context: RequestContext = Depends(get_request_context),
) -> OperationResponse:
    """Create an item and store its payload."""
    data, uploads = await read_submission(request)
    type_name = data.get("type")
    if not type_name:
        raise HTTPException(status_code=422, detail={"type": "Required"})

    await run_in_threadpool(_validate, catalog, type_name, data, uploads)

    item = Item(
        name=data["name"],
        type=type_name,
        owner=context.user_id,
        category=data.get("category") or None,
        grades=data.get("grades", []),
        topics=data.get("topics", []),
        description=data.get("description", ""),
    )
    return await run_in_threadpool(_create, catalog, item, data, uploads)


@router.put("/items/{item_id}", response_model=OperationResponse)
async def update_item(
    item_id: int,
    request: Request,
    catalog: ItemCatalog = Depends(get_catalog),
) -> OperationResponse:
    """Edit an item; a changed name relocates its stored files."""
    item = await run_in_threadpool(catalog.get, item_id)
    data, uploads = await read_submission(request)
    if data.get("type", item.type) != item.type:
        raise HTTPException(status_code=422, detail={"type": "Resource type cannot be changed"})

    await run_in_threadpool(_validate, catalog, item.type, data, uploads, item_id)
    return await run_in_threadpool(_update, catalog, item_id, data, uploads)


@router.delete("/items/{item_id}", status_code=204)
def delete_item(item_id: int, catalog: ItemCatalog = Depends(get_catalog)) -> Response:
    """Delete an item with its stored files and attribute rows."""
    if not catalog.delete(item_id):
        raise HTTPException(status_code=500, detail="Operation failed")
    return Response(status_code=204)


@router.get("/items/{item_id}/files/{prop}")
def download_file(item_id: int, prop: str, services: TypeServices = Depends(get_services)):
    """Serve the stored file of one property."""
    record = services.data.get_record(item_id, prop)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} has no {prop}")

    try:
        path = services.storage.open_file(record.value)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"No {prop} uploaded for item {item_id}")

    return FileResponse(path, filename=PurePath(record.value).name)


@router.get("/items/{item_id}/image")
def download_image(item_id: int, catalog: ItemCatalog = Depends(get_catalog)):
    """Serve the item thumbnail."""
    item = catalog.get(item_id)
    if not item.image:
        raise HTTPException(status_code=404, detail=f"Item {item_id} has no image")

    try:
        path = catalog.services.storage.open_file(item.image)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Image missing for item {item_id}")

    return FileResponse(path)
