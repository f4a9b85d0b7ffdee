"""
LOR - Learning Object Repository.

Resources are items tagged with a type, category, grades and topics. Each
item's payload (files, links, videos) is stored by the ResourceType its
``type`` discriminator names.

Usage:
    from lor import ItemLifecycle, TypeServices
    from lor.services import UploadedFiles

    services = TypeServices.from_settings()
    services.db.create_schema()
    lifecycle = ItemLifecycle(services)
    lifecycle.create(item.id, "file", {}, UploadedFiles.from_paths(pdf="lesson.pdf"))
"""

from .lifecycle import ItemLifecycle
from .registry import (
    ResourceTypeRegistry,
    clear_type_registry,
    get_type_registry,
    register_resource_type,
    register_resource_types,
)
from .types import OperationResult, ResourceType, TypeServices

__all__ = [
    "ItemLifecycle",
    "OperationResult",
    "ResourceType",
    "ResourceTypeRegistry",
    "TypeServices",
    "clear_type_registry",
    "get_type_registry",
    "register_resource_type",
    "register_resource_types",
]
