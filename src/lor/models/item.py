"""
Item - a catalogued learning resource.

Items carry generic metadata (name, owner, topics, category, grades) plus a
``type`` discriminator naming the resource type that stores the item's
payload. Type-specific state lives in ItemAttribute rows, never on the item.

Key Fields:
- name: Display name; stored filenames are derived from it
- type: Resource type discriminator (file, link, video, ...)
- topics: Free-form topic tags
- category / grades: Values from the category and grade vocabularies
- image: Thumbnail path relative to the repository root (optional)
"""

from typing import Optional

from pydantic import BaseModel, Field

from .core import CoreModel


class Item(CoreModel):
    """Learning resource record owned by the generic item store."""

    name: str = Field(
        ...,
        min_length=1,
        description="Human-readable resource name (drives stored filenames)",
    )
    type: str = Field(
        ...,
        description="Resource type discriminator",
    )
    owner: Optional[str] = Field(
        default=None,
        description="User identifier of the uploader",
    )
    category: Optional[str] = Field(
        default=None,
        description="Resource category",
    )
    grades: list[str] = Field(
        default_factory=list,
        description="Grade levels the resource targets",
    )
    topics: list[str] = Field(
        default_factory=list,
        description="Topic tags",
    )
    description: str = Field(
        default="",
        description="Free-text description",
    )
    image: Optional[str] = Field(
        default=None,
        description="Thumbnail path relative to the repository root",
    )


class ItemAttribute(BaseModel):
    """One type-specific value for one item: (itemid, name) -> value."""

    id: int | None = None
    itemid: int
    name: str
    value: str
