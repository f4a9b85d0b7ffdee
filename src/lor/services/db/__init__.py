"""
Database services for LOR.

- DatabaseService: SQLAlchemy engine and schema
- ItemStore: generic item records, categories and grades
- ItemDataStore: type-specific (itemid, name) -> value rows
"""

from .item_data import ItemDataStore
from .items import ItemStore
from .service import DatabaseService

__all__ = ["DatabaseService", "ItemDataStore", "ItemStore"]
