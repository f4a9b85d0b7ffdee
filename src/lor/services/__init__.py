"""
LOR Services

Service layer for storage and persistence:
- DatabaseService / ItemStore / ItemDataStore: item and attribute tables
- StorageRepository: stored files under the repository root
"""

from .db import DatabaseService, ItemDataStore, ItemStore
from .fs import StorageRepository, UploadedFiles, UploadHandle

__all__ = [
    "DatabaseService",
    "ItemDataStore",
    "ItemStore",
    "StorageRepository",
    "UploadHandle",
    "UploadedFiles",
]
