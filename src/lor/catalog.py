"""
ItemCatalog - the generic item record plus its typed payload.

Front ends (API, CLI) go through the catalog: it writes the generic record
to the item store, stores the optional thumbnail, and hands the payload to
the lifecycle coordinator. A create whose payload fails is undone so the
half-created item never shows up.
"""

from pathlib import PurePath
from typing import Any

from loguru import logger

from .exceptions import ItemNotFoundError, StorageError
from .lifecycle import ItemLifecycle
from .models import Item
from .services.fs import UploadHandle
from .types import OperationResult

IMAGE_DIRECTORY = "images"
GENERIC_FIELDS = ("name", "category", "grades", "topics", "description")


class ItemCatalog:
    """Create, edit and delete items end to end."""

    def __init__(self, lifecycle: ItemLifecycle):
        self.lifecycle = lifecycle
        self.services = lifecycle.services

    def get(self, item_id: int) -> Item:
        """
        Raises:
            ItemNotFoundError: If the item does not exist
        """
        item = self.services.items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def create(
        self, item: Item, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> tuple[Item, OperationResult]:
        """
        Insert the item and store its payload.

        Returns:
            The stored item (with id) and the payload result. On failure the
            item, its thumbnail and any stored payload are already removed.
        """
        self.lifecycle.resource_type(item.type)
        item = self.services.items.create(item)
        try:
            item = self._store_image(item, upload)
            result = self.lifecycle.create(item.id, item.type, data, upload)
        except StorageError:
            logger.exception(f"Storage failure while creating item {item.id}, removing it")
            self._discard(item)
            raise

        if not result:
            logger.warning(f"Payload of item {item.id} failed ({result.failures}), removing it")
            self._discard(item)
        return item, result

    def update(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> tuple[Item, OperationResult]:
        """
        Apply generic field changes, then let the type relocate/replace payload.

        Empty names are ignored; an empty category clears it.
        """
        item = self.get(item_id)
        changes = {key: data[key] for key in GENERIC_FIELDS if key in data}
        if not changes.get("name", item.name):
            changes.pop("name")
        if "category" in changes:
            changes["category"] = changes["category"] or None

        item = self.services.items.update(item.model_copy(update=changes))
        item = self._store_image(item, upload)
        result = self.lifecycle.update(item.id, item.type, data, upload)
        return item, result

    def delete(self, item_id: int) -> OperationResult:
        """Remove payload, thumbnail and record. The record stays if the payload delete fails."""
        item = self.get(item_id)
        result = self.lifecycle.delete(item.id, item.type)
        if result:
            self._remove_record(item)
        return result

    def _store_image(self, item: Item, upload: UploadHandle | None) -> Item:
        """Save an uploaded thumbnail as images/<item id><suffix>."""
        if upload is None or not upload.has_content("image"):
            return item

        storage = self.services.storage
        suffix = PurePath(upload.get_filename("image") or "").suffix.lower() or ".png"
        path = f"{IMAGE_DIRECTORY}/{item.id}{suffix}"
        storage.create_directory(IMAGE_DIRECTORY)
        if item.image and item.image != path:
            storage.delete_file(item.image)
        upload.save_file("image", storage.absolute_path(path))
        return self.services.items.update(item.model_copy(update={"image": path}))

    def _discard(self, item: Item) -> None:
        self.lifecycle.delete(item.id, item.type)
        self._remove_record(item)

    def _remove_record(self, item: Item) -> None:
        if item.image:
            self.services.storage.delete_file(item.image)
        self.services.items.delete(item.id)
