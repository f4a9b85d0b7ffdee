"""
ItemDataStore - type-specific attribute rows.

One row per (itemid, name) pair holding an opaque string value. The file
type stores each property's path relative to the repository root:

    (42, "pdf")      -> "files/Photosynthesis.pdf"
    (42, "document") -> "files/Photosynthesis.docx"

Write methods return a success flag instead of raising; failures are logged
with their cause so callers can aggregate per-property results.
"""

from loguru import logger
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from ...models import ItemAttribute
from .service import DatabaseService
from .tables import item_data_table


class ItemDataStore:
    """Access to the lor_data table."""

    def __init__(self, db: DatabaseService):
        self.db = db
        self.table = item_data_table

    def insert(self, itemid: int, name: str, value: str) -> bool:
        """
        Insert one attribute row.

        Returns:
            True if the row was written, False on any database error
            (including an existing row for the same itemid/name)
        """
        try:
            with self.db.engine.begin() as conn:
                conn.execute(insert(self.table).values(itemid=itemid, name=name, value=value))
        except SQLAlchemyError as e:
            logger.error(f"Failed to insert attribute {name!r} for item {itemid}: {e}")
            return False

        logger.debug(f"Inserted attribute {name!r}={value!r} for item {itemid}")
        return True

    def update(self, record: ItemAttribute) -> bool:
        """
        Overwrite the value of an existing row.

        Returns:
            True if exactly one row was updated
        """
        stmt = (
            update(self.table)
            .where(self.table.c.itemid == record.itemid, self.table.c.name == record.name)
            .values(value=record.value)
        )
        try:
            with self.db.engine.begin() as conn:
                result = conn.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update attribute {record.name!r} for item {record.itemid}: {e}")
            return False

        if result.rowcount != 1:
            logger.error(f"Attribute {record.name!r} for item {record.itemid} vanished before update")
            return False

        logger.debug(f"Updated attribute {record.name!r}={record.value!r} for item {record.itemid}")
        return True

    def get_record(self, itemid: int, name: str) -> ItemAttribute | None:
        """Get a single attribute row, or None when the item has no such property."""
        stmt = select(self.table).where(self.table.c.itemid == itemid, self.table.c.name == name)
        with self.db.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()

        return ItemAttribute.model_validate(dict(row)) if row else None

    def get_records(self, itemid: int) -> list[ItemAttribute]:
        """All attribute rows for an item, in insertion order."""
        stmt = select(self.table).where(self.table.c.itemid == itemid).order_by(self.table.c.id)
        with self.db.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()

        return [ItemAttribute.model_validate(dict(row)) for row in rows]

    def get_item_data(self, itemid: int) -> dict[str, str]:
        """Attribute rows for an item as a name -> value mapping."""
        return {record.name: record.value for record in self.get_records(itemid)}

    def delete_records(self, itemid: int) -> bool:
        """
        Delete every attribute row of an item.

        Deleting an item that has no rows succeeds.
        """
        try:
            with self.db.engine.begin() as conn:
                result = conn.execute(delete(self.table).where(self.table.c.itemid == itemid))
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete attributes for item {itemid}: {e}")
            return False

        logger.debug(f"Deleted {result.rowcount} attribute rows for item {itemid}")
        return True
