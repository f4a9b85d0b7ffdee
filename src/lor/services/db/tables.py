"""
SQLAlchemy table definitions.

Tables:
- lor_items: generic item records
- lor_data: type-specific attribute rows keyed by (itemid, name)
- lor_categories / lor_grades: option vocabularies for items
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

items_table = Table(
    "lor_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("type", String(50), nullable=False, index=True),
    Column("owner", String(255)),
    Column("category", String(255), index=True),
    Column("grades", JSON, nullable=False, default=list),
    Column("topics", JSON, nullable=False, default=list),
    Column("description", Text, nullable=False, default=""),
    Column("image", String(512)),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)

item_data_table = Table(
    "lor_data",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("itemid", Integer, nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("value", Text, nullable=False),
    UniqueConstraint("itemid", "name", name="uq_lor_data_itemid_name"),
)

categories_table = Table(
    "lor_categories",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False, unique=True),
)

grades_table = Table(
    "lor_grades",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False, unique=True),
)
