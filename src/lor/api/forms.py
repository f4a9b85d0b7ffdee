"""Generic item form shared by every resource type."""

from ..services.db import ItemStore
from ..types import ItemForm, ResourceType


def build_item_form(
    items: ItemStore, resource_type: ResourceType, existing_item_id: int | None = None
) -> ItemForm:
    """
    Generic item inputs followed by the type's own inputs.

    Name is required only when creating; the type decides its own rules.
    """
    form = ItemForm()
    form.add_element("text", "name", label="Name", maxlength=255)
    form.add_element("textarea", "description", label="Description")
    form.add_element("select", "category", label="Category", choices=items.list_categories())
    form.add_element("select", "grades", label="Grades", choices=items.list_grades(), multiple=True)
    form.add_element("tags", "topics", label="Topics")
    form.add_element(
        "filepicker", "image", label="Thumbnail",
        maxfiles=1, accepted_types=[".png", ".jpg", ".jpeg", ".gif", ".webp"],
    )
    if not existing_item_id:
        form.add_rule("name", "required")

    resource_type.augment_creation_form(form, existing_item_id)
    return form
