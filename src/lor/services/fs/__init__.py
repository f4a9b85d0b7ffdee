"""
File system layer for LOR.

- StorageRepository: paths, URLs and file operations inside the repository root
- UploadHandle / UploadedFiles: submitted content for resource types to persist
"""

from .storage import StorageRepository
from .uploads import UploadedFile, UploadedFiles, UploadHandle

__all__ = ["StorageRepository", "UploadHandle", "UploadedFile", "UploadedFiles"]
