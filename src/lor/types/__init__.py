"""
LOR Resource Types

Each type implements the ResourceType contract for one kind of resource:
- FileType: PDF + .docx stored under files/ (reference implementation)
- LinkType: external web page URL
- VideoType: hosted video URL

Custom types are registered with ``lor.register_resource_type``.
"""

from .base import OperationResult, ResourceType, TypeServices
from .file import FileType
from .form import FormElement, ItemForm
from .link import LinkType
from .video import VideoType

BUILTIN_TYPES: tuple[type[ResourceType], ...] = (FileType, LinkType, VideoType)

__all__ = [
    "BUILTIN_TYPES",
    "FileType",
    "FormElement",
    "ItemForm",
    "LinkType",
    "OperationResult",
    "ResourceType",
    "TypeServices",
    "VideoType",
]
