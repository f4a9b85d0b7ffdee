"""
Resource type contract.

Every kind of resource (file, link, video, ...) implements ResourceType to
persist its payload, keep stored files and attribute rows consistent across
create/update/delete, and render itself. Collaborators are passed in via
TypeServices rather than looked up globally.

Shared default logic lives in the module-level functions below; concrete
types call the ones they need instead of inheriting behaviour.
"""

import html
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from loguru import logger

from ..exceptions import ItemNotFoundError
from ..models import Item, ItemAttribute
from ..services.db import DatabaseService, ItemDataStore, ItemStore
from ..services.fs import StorageRepository, UploadHandle
from .form import ItemForm


@dataclass
class TypeServices:
    """Collaborators handed to every resource type instance."""

    storage: StorageRepository
    data: ItemDataStore
    items: ItemStore

    @classmethod
    def from_settings(cls, settings: Any = None) -> "TypeServices":
        """
        Build services from application settings.

        Args:
            settings: Settings instance (defaults to the global singleton)
        """
        if settings is None:
            from ..settings import settings

        db = DatabaseService(settings.database.url, echo=settings.database.echo)
        data = ItemDataStore(db)
        storage = StorageRepository(
            root=settings.storage.root,
            base_url=settings.storage.base_url,
            data=data,
            default_image_url=settings.storage.default_image_url,
        )
        return cls(storage=storage, data=data, items=ItemStore(db))

    @property
    def db(self) -> DatabaseService:
        return self.items.db


@dataclass
class OperationResult:
    """
    Outcome of a create/update/delete.

    ``success`` is the logical AND over every per-property step; ``failures``
    records which property failed and why. Truthiness follows ``success``.
    """

    success: bool = True
    failures: dict[str, str] = field(default_factory=dict)

    def fail(self, prop: str, reason: str) -> None:
        self.success = False
        self.failures[prop] = reason

    def __bool__(self) -> bool:
        return self.success


class ResourceType(ABC):
    """
    Base class for resource types.

    Class attributes:
        name: Type discriminator stored on items
        label: Human-readable type name
        storage_dir: Sub-directory of the repository root owned by this type
        properties: Named payload slots persisted as attribute rows. Changing
            this list orphans existing rows unless the data is migrated.
        primary_property: Property whose artifact represents the item
        height: Layout hint for the resource view page
    """

    name: ClassVar[str]
    label: ClassVar[str]
    storage_dir: ClassVar[str] = "files"
    properties: ClassVar[tuple[str, ...]] = ()
    primary_property: ClassVar[str | None] = None
    height: ClassVar[str] = "600px"

    def __init__(self, services: TypeServices):
        self.services = services

    @property
    def storage(self) -> StorageRepository:
        return self.services.storage

    @property
    def data(self) -> ItemDataStore:
        return self.services.data

    def storage_directory(self) -> str:
        """Sub-directory of the repository root used by this type."""
        return self.storage_dir

    def declared_properties(self) -> tuple[str, ...]:
        """Ordered names of the payload slots this type persists."""
        return tuple(self.properties)

    def display_height(self) -> str:
        """Height of the resource on its view page."""
        return self.height

    def embed_filepath(self, item_id: int, prop: str | None = None) -> str | None:
        """Stored value of a property (primary property by default)."""
        prop = prop or self.primary_property
        if prop is None:
            return None
        record = self.data.get_record(item_id, prop)
        return record.value if record else None

    def is_complete(self, item_id: int) -> bool:
        """True once every declared property has an attribute row."""
        return check_complete(self.data, item_id, self.declared_properties())

    @abstractmethod
    def augment_creation_form(self, form: ItemForm, existing_item_id: int | None = None) -> None:
        """Add type-specific inputs and rules to the item form."""

    @abstractmethod
    def create(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        """Persist the payload of a newly created item."""

    @abstractmethod
    def update(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        """Bring stored payload in line with an edited item."""

    @abstractmethod
    def delete(self, item_id: int) -> OperationResult:
        """Remove the payload of an item being deleted."""

    @abstractmethod
    def embed_view(self, item_id: int) -> str:
        """Compact sharable HTML for use outside the resource viewer."""

    @abstractmethod
    def display_view(self, item_id: int) -> str:
        """Full HTML for the resource's own view page."""

    @abstractmethod
    def resolve_resource_url(self, item_id: int) -> str | None:
        """Public URL of the primary artifact."""

    @abstractmethod
    def unique_identifier(self, item_id: int) -> str | None:
        """Value stable for the life of the item, usable to find references to it."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


# =============================================================================
# SHARED DEFAULT LOGIC
# =============================================================================


def get_item(services: TypeServices, item_id: int) -> Item:
    """
    Load an item.

    Raises:
        ItemNotFoundError: If the item does not exist
    """
    item = services.items.get(item_id)
    if item is None:
        raise ItemNotFoundError(item_id)
    return item


def target_path(storage: StorageRepository, directory: str, item_name: str, extension: str) -> str:
    """Repository-relative path derived from an item name: "<dir>/<name>.<ext>"."""
    return f"{directory}/{storage.format_filepath(f'{item_name}.{extension}')}"


def write_attributes(
    data: ItemDataStore, item_id: int, values: dict[str, str], result: OperationResult
) -> OperationResult:
    """Insert one attribute row per entry, recording failures on result."""
    for prop, value in values.items():
        if not data.insert(item_id, prop, value):
            result.fail(prop, "attribute insert failed")
    return result


def overwrite_attribute(
    data: ItemDataStore, record: ItemAttribute, value: str, result: OperationResult
) -> OperationResult:
    """Replace the value of an existing row, recording a failure on result."""
    if not data.update(record.model_copy(update={"value": value})):
        result.fail(record.name, "attribute update failed")
    return result


def delete_attributes(data: ItemDataStore, item_id: int, result: OperationResult) -> OperationResult:
    if not data.delete_records(item_id):
        result.fail("*", "attribute delete failed")
    return result


def check_complete(data: ItemDataStore, item_id: int, properties: tuple[str, ...]) -> bool:
    present = set(data.get_item_data(item_id))
    missing = set(properties) - present
    if missing:
        logger.warning(f"Item {item_id} is missing attributes: {sorted(missing)}")
    return not missing


def render_embed_table(name: str, href: str | None, image_url: str, topics: list[str]) -> str:
    """
    Compact table: linked thumbnail on the left, name and topics on the right.
    """
    link = html.escape(href or "#", quote=True)
    image = html.escape(image_url, quote=True)
    return (
        '<table align="center" border="1" style="width: 600px;">'
        "<tbody><tr>"
        f'<td width="200px"><a href="{link}"><img src="{image}" width="200" height="150"/></a></td>'
        "<td><b><span style=\"background-color: transparent; color: #7d9fd3; font-size: 16px;\">"
        f"{html.escape(name)}</span><br/></b><br/>"
        f'<span style="color: #c8c8c8;">Topics: {html.escape(", ".join(topics))}</span></td>'
        "</tr></tbody></table>"
    )


def store_submitted_values(
    data: ItemDataStore,
    item_id: int,
    submitted: dict[str, Any],
    properties: tuple[str, ...],
) -> OperationResult:
    """
    Create rows for types whose payload is submitted form values (URLs).

    A declared property with no submitted value is a failure: there is no
    later upload that could fill the slot.
    """
    result = OperationResult()
    values = {}
    for prop in properties:
        value = submitted.get(prop)
        if value in (None, ""):
            result.fail(prop, "no value submitted")
        else:
            values[prop] = str(value).strip()
    return write_attributes(data, item_id, values, result)


def replace_submitted_values(
    data: ItemDataStore,
    item_id: int,
    submitted: dict[str, Any],
    properties: tuple[str, ...],
) -> OperationResult:
    """
    Overwrite rows with newly submitted values.

    Properties without an existing row, or without a new value, are left alone.
    """
    result = OperationResult()
    for prop in properties:
        value = submitted.get(prop)
        if value in (None, ""):
            continue
        record = data.get_record(item_id, prop)
        if record is None:
            logger.debug(f"Item {item_id} has no {prop!r} attribute, skipping update")
            continue
        overwrite_attribute(data, record, str(value).strip(), result)
    return result
