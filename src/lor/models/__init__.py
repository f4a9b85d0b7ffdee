"""
LOR Models

- Item: generic resource record (name, owner, topics, type discriminator)
- ItemAttribute: type-specific (itemid, name) -> value row
- RequestContext: per-request rendering/access state
"""

from .context import RequestContext
from .core import CoreModel
from .item import Item, ItemAttribute

__all__ = ["CoreModel", "Item", "ItemAttribute", "RequestContext"]
