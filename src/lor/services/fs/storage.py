"""
Repository storage provider for LOR.

Maps logical (type, property, item) references to paths inside the
repository root and performs the physical file operations.

Layout:
    <root>/
    ├── files/      # file type payloads (.pdf, .docx)
    └── images/     # item thumbnails

Stored paths are always relative to the root ("files/Photosynthesis.pdf").
Renaming or deleting a path that does not exist is a no-op, since items may
be created with optional properties left unfilled.
"""

import os
import re
import unicodedata
from pathlib import Path
from urllib.parse import quote

from loguru import logger

from ...exceptions import StorageError
from ...models import Item
from ..db import ItemDataStore

# Longest single path component most filesystems accept (NAME_MAX).
MAX_FILENAME_LENGTH = 255

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9 _.()\-]")
_WHITESPACE = re.compile(r"\s+")


class StorageRepository:
    """
    Local filesystem repository with item-aware URL resolution.

    Mirrors the operations resource types need: directory creation,
    filename normalization, rename, delete and delivery URLs.
    """

    def __init__(
        self,
        root: str | Path,
        base_url: str,
        data: ItemDataStore,
        default_image_url: str = "",
    ):
        """
        Initialize repository storage.

        Args:
            root: Repository root directory (created if missing)
            base_url: Public base URL of the API serving stored files
            data: Attribute store used to resolve stored paths
            default_image_url: Thumbnail URL for items without an image
        """
        self.root = Path(root).resolve()
        self.base_url = base_url.rstrip("/")
        self.data = data
        self.default_image_url = default_image_url

    def get_path_to_repository(self) -> Path:
        """Absolute repository root, created on first use."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create repository root {self.root}: {e}") from e
        return self.root

    def absolute_path(self, relative_path: str) -> Path:
        """
        Resolve a repository-relative path.

        Raises:
            StorageError: If the path escapes the repository root
        """
        root = self.get_path_to_repository()
        path = (root / relative_path).resolve()
        if not path.is_relative_to(root):
            raise StorageError(f"Invalid path: {relative_path} is outside the repository")
        return path

    def create_directory(self, relative_path: str) -> Path:
        """
        Create a directory (and parents) inside the repository.

        Idempotent.

        Returns:
            Absolute path of the directory
        """
        path = self.absolute_path(relative_path)
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create directory {relative_path}: {e}") from e
        return path

    @staticmethod
    def format_filepath(raw_name: str) -> str:
        """
        Normalize a filename into a filesystem-safe ASCII form.

        Accents are folded ("Électricité.pdf" -> "Electricite.pdf"), unsafe
        characters become "_", whitespace collapses to single spaces and the
        extension is preserved. Overlong names keep their start and end and
        lose the middle so the result fits MAX_FILENAME_LENGTH. Distinct
        names may normalize to the same filename; no deduplication happens
        here.

        Args:
            raw_name: Display name plus extension, e.g. "Photosynthesis v2.pdf"

        Returns:
            Safe filename
        """
        stem, dot, extension = raw_name.rpartition(".")
        if not dot or not stem.strip():
            stem, extension = raw_name, ""

        stem = _safe_component(stem) or "untitled"
        extension = _safe_component(extension).replace(" ", "")
        limit = MAX_FILENAME_LENGTH - (len(extension) + 1 if extension else 0)
        if len(stem) > limit:
            stem = _shorten_component(stem, len(stem) - limit).strip(" .") or "untitled"
        return f"{stem}.{extension}" if extension else stem

    def get_file_url(self, item_id: int, prop: str = "pdf") -> str | None:
        """
        Build the delivery URL of a stored property.

        The URL is parameterized by item id and property name, so it stays
        stable across renames of the underlying file.

        Returns:
            URL, or None when the item has no attribute row for the property
        """
        record = self.data.get_record(item_id, prop)
        if record is None:
            logger.warning(f"Item {item_id} has no {prop!r} attribute, no URL to build")
            return None

        return f"{self.base_url}/api/v1/items/{item_id}/files/{quote(prop)}"

    def get_image_url(self, item: Item) -> str:
        """Thumbnail URL of an item, or the configured default."""
        if item.image:
            return f"{self.base_url}/api/v1/items/{item.id}/image"
        return self.default_image_url

    def update_filepath(self, old_relative: str, new_relative: str) -> bool:
        """
        Move a stored file to a new repository-relative path.

        Returns:
            True if a file was moved; False if the source is missing or the
            paths are identical
        """
        source = self.absolute_path(old_relative)
        destination = self.absolute_path(new_relative)

        if source == destination:
            return False

        try:
            if not source.exists():
                logger.debug(f"Nothing to move at {old_relative}")
                return False

            destination.parent.mkdir(parents=True, exist_ok=True)
            os.replace(source, destination)
        except OSError as e:
            raise StorageError(f"Cannot move {old_relative} to {new_relative}: {e}") from e

        logger.debug(f"Moved {old_relative} -> {new_relative}")
        return True

    def delete_file(self, relative_path: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if a file was removed, False if there was nothing to remove
        """
        path = self.absolute_path(relative_path)
        try:
            if not path.is_file():
                logger.debug(f"Nothing to delete at {relative_path}")
                return False

            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Cannot delete {relative_path}: {e}") from e

        logger.debug(f"Deleted {relative_path}")
        return True

    def open_file(self, relative_path: str) -> Path:
        """
        Absolute path of an existing stored file, for delivery.

        Raises:
            FileNotFoundError: If the file is not materialized
        """
        path = self.absolute_path(relative_path)
        try:
            exists = path.is_file()
        except OSError as e:
            raise StorageError(f"Cannot open {relative_path}: {e}") from e
        if not exists:
            raise FileNotFoundError(f"File not found: {relative_path}")
        return path


def _safe_component(value: str) -> str:
    folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    cleaned = _UNSAFE_CHARS.sub("_", folded)
    return _WHITESPACE.sub(" ", cleaned).strip(" .")


def _shorten_component(value: str, by_what: int) -> str:
    """Drop at least ``by_what`` characters from the middle of value."""
    keep = (len(value) - by_what) // 2
    if keep <= 0:
        return value[:1]
    return value[:keep] + value[-keep:]
