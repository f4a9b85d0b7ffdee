"""Link resource type: an external web page referenced by URL."""

import html
from typing import Any

from ..services.fs import UploadHandle
from .base import (
    OperationResult,
    ResourceType,
    delete_attributes,
    get_item,
    render_embed_table,
    replace_submitted_values,
    store_submitted_values,
)
from .form import ItemForm


class LinkType(ResourceType):
    """External web page."""

    name = "link"
    label = "Link"
    properties = ("link",)
    primary_property = "link"
    height = "800px"

    def augment_creation_form(self, form: ItemForm, existing_item_id: int | None = None) -> None:
        form.add_element("url", "link", label="Link", help="Address of the web page")
        form.add_rule("link", "url")
        if not existing_item_id:
            form.add_rule("link", "required")

    def create(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        return store_submitted_values(self.data, item_id, data, self.declared_properties())

    def update(
        self, item_id: int, data: dict[str, Any], upload: UploadHandle | None = None
    ) -> OperationResult:
        return replace_submitted_values(self.data, item_id, data, self.declared_properties())

    def delete(self, item_id: int) -> OperationResult:
        return delete_attributes(self.data, item_id, OperationResult())

    def embed_view(self, item_id: int) -> str:
        item = get_item(self.services, item_id)
        return render_embed_table(
            item.name,
            self.embed_filepath(item_id),
            self.storage.get_image_url(item),
            item.topics,
        )

    def display_view(self, item_id: int) -> str:
        src = html.escape(self.embed_filepath(item_id) or "", quote=True)
        return f'<iframe src="{src}" width="100%" height="100%" frameborder="0"></iframe>'

    def resolve_resource_url(self, item_id: int) -> str | None:
        return self.embed_filepath(item_id)

    def unique_identifier(self, item_id: int) -> str | None:
        return self.embed_filepath(item_id)
