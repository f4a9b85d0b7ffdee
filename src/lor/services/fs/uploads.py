"""
Upload handles.

An upload handle is what the form layer gives a resource type: it answers
whether a property received new content and moves that content into place.
Both operations are no-ops for properties nothing was uploaded for.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger

from ...exceptions import StorageError


@runtime_checkable
class UploadHandle(Protocol):
    """Interface resource types use to persist submitted files."""

    def has_content(self, name: str) -> bool:
        """True if new content was submitted for the property."""
        ...

    def get_filename(self, name: str) -> str | None:
        """Client-side filename of the submitted content, if any."""
        ...

    def save_file(self, name: str, destination: Path, override: bool = True) -> bool:
        """Write the property's content to destination. False if nothing was saved."""
        ...


@dataclass
class UploadedFile:
    """Content submitted for one property."""

    content: bytes
    filename: str | None = None


class UploadedFiles:
    """In-memory upload handle keyed by property name."""

    def __init__(self, files: dict[str, UploadedFile] | None = None):
        self.files: dict[str, UploadedFile] = dict(files or {})

    @classmethod
    def from_paths(cls, **paths: str | Path | None) -> "UploadedFiles":
        """
        Build a handle from local files, skipping properties given as None.

        Example:
            UploadedFiles.from_paths(pdf="./lesson.pdf", document=None)
        """
        files = {}
        for name, path in paths.items():
            if path is None:
                continue
            p = Path(path)
            if not p.is_file():
                raise FileNotFoundError(f"File not found: {path}")
            files[name] = UploadedFile(content=p.read_bytes(), filename=p.name)
        return cls(files)

    def add(self, name: str, content: bytes, filename: str | None = None) -> None:
        self.files[name] = UploadedFile(content=content, filename=filename)

    def has_content(self, name: str) -> bool:
        return name in self.files

    def get_filename(self, name: str) -> str | None:
        upload = self.files.get(name)
        return upload.filename if upload else None

    def save_file(self, name: str, destination: Path, override: bool = True) -> bool:
        """
        Write uploaded content atomically (temp file + rename in the target dir).

        Raises:
            StorageError: On filesystem failure
        """
        upload = self.files.get(name)
        if upload is None:
            return False

        destination = Path(destination)
        try:
            if destination.exists() and not override:
                logger.warning(f"Refusing to overwrite {destination} for {name!r}")
                return False

            destination.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=destination.parent, prefix=".upload-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(upload.content)
                os.replace(tmp_path, destination)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Cannot save {name!r} upload to {destination}: {e}") from e

        logger.debug(f"Saved {name!r} upload ({len(upload.content)} bytes) to {destination}")
        return True

    def __repr__(self) -> str:
        return f"UploadedFiles({sorted(self.files)})"
