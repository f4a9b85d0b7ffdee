"""
File resource type.

Stores a PDF and an editable .docx per item under ``files/``. Stored
filenames follow the item name:

    item 42 "Photosynthesis" -> files/Photosynthesis.pdf, files/Photosynthesis.docx

Creation reserves an attribute row for every property even when only some
files were uploaded; the row then points at a path that is materialized by a
later upload. Renaming the item renames every stored file on update.
"""

import html
from typing import Any, ClassVar

from loguru import logger

from ..exceptions import StorageError
from ..services.fs import UploadHandle
from .base import (
    OperationResult,
    ResourceType,
    delete_attributes,
    get_item,
    overwrite_attribute,
    render_embed_table,
    target_path,
    write_attributes,
)
from .form import ItemForm


class FileType(ResourceType):
    """PDF + Word document resource."""

    name = "file"
    label = "File"
    storage_dir = "files"
    properties = ("pdf", "document")
    primary_property = "pdf"
    height = "900px"

    extensions: ClassVar[dict[str, str]] = {"pdf": "pdf", "document": "docx"}

    def augment_creation_form(self, form: ItemForm, existing_item_id: int | None = None) -> None:
        """
        Add the PDF and document file pickers.

        When editing, both become optional and a note links the files
        currently stored so the user knows re-uploading is not needed.
        """
        if existing_item_id:
            pdf_link = self.storage.get_file_url(existing_item_id, "pdf") or "#"
            document_link = self.storage.get_file_url(existing_item_id, "document") or "#"
            form.add_note(
                "Files are already stored for this resource "
                f'(<a href="{html.escape(pdf_link, quote=True)}">PDF</a>, '
                f'<a href="{html.escape(document_link, quote=True)}">document</a>). '
                "Upload a file only to replace it."
            )

        form.add_element(
            "filepicker", "pdf", label="PDF",
            help="Printable version of the resource",
            maxfiles=1, accepted_types=[".pdf"],
        )
        form.add_element(
            "filepicker", "document", label="Document",
            help="Editable version of the resource",
            maxfiles=1, accepted_types=[".docx"],
        )

        if not existing_item_id:
            for prop in self.declared_properties():
                form.add_rule(prop, "required")

    def target_paths(self, item_id: int) -> dict[str, str]:
        """Repository-relative path of every property, derived from the current item name."""
        item = get_item(self.services, item_id)
        return {
            prop: target_path(self.storage, self.storage_directory(), item.name, self.extensions[prop])
            for prop in self.declared_properties()
        }

    def _save_upload(
        self, prop: str, path: str, upload: UploadHandle | None, result: OperationResult
    ) -> None:
        if upload is None or not upload.has_content(prop):
            return
        try:
            saved = upload.save_file(prop, self.storage.absolute_path(path), override=True)
        except StorageError as e:
            logger.error(f"Saving {prop!r} to {path} failed: {e}")
            result.fail(prop, str(e))
            return
        if not saved:
            result.fail(prop, "upload could not be saved")

    def create(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        result = OperationResult()
        targets = self.target_paths(item_id)
        self.storage.create_directory(self.storage_directory())

        for prop, path in targets.items():
            self._save_upload(prop, path, upload, result)

        return write_attributes(self.data, item_id, targets, result)

    def update(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        """
        Relocate stored files to the current item name, store replacements.

        Properties without an attribute row are skipped entirely: no row is
        created and any upload for them is ignored.
        """
        result = OperationResult()
        targets = self.target_paths(item_id)
        self.storage.create_directory(self.storage_directory())

        for prop, path in targets.items():
            record = self.data.get_record(item_id, prop)
            if record is None:
                logger.debug(f"Item {item_id} has no {prop!r} attribute, skipping update")
                continue

            try:
                self.storage.update_filepath(record.value, path)
            except StorageError as e:
                logger.error(f"Relocating {prop!r} of item {item_id} failed: {e}")
                result.fail(prop, str(e))
                continue

            self._save_upload(prop, path, upload, result)
            overwrite_attribute(self.data, record, path, result)

        return result

    def delete(self, item_id: int) -> OperationResult:
        result = OperationResult()
        stored = self.data.get_item_data(item_id)

        for prop in self.declared_properties():
            path = stored.get(prop)
            if path is None:
                continue
            try:
                self.storage.delete_file(path)
            except StorageError as e:
                logger.error(f"Deleting {prop!r} of item {item_id} failed: {e}")
                result.fail(prop, str(e))

        return delete_attributes(self.data, item_id, result)

    def embed_view(self, item_id: int) -> str:
        item = get_item(self.services, item_id)
        return render_embed_table(
            item.name,
            self.storage.get_file_url(item_id),
            self.storage.get_image_url(item),
            item.topics,
        )

    def display_view(self, item_id: int) -> str:
        src = self.storage.get_file_url(item_id) or ""
        return f'<embed src="{html.escape(src, quote=True)}" width="100%" height="100%">'

    def resolve_resource_url(self, item_id: int) -> str | None:
        return self.storage.get_file_url(item_id)

    def unique_identifier(self, item_id: int) -> str | None:
        return self.storage.get_file_url(item_id)
