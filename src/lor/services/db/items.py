"""
ItemStore - generic item records and the category/grade vocabularies.

Search is plain filtering: keywords match as case-insensitive substrings of
name, description or topics; type, category and grade match exactly.
"""

from typing import Iterable

from loguru import logger
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError

from ...models import Item
from ...models.core import utcnow
from .service import DatabaseService
from .tables import categories_table, grades_table, items_table


class ItemStore:
    """Repository for Item records."""

    def __init__(self, db: DatabaseService):
        self.db = db
        self.table = items_table

    def create(self, item: Item) -> Item:
        """Insert an item and return it with its id (assigned unless given)."""
        values = item.model_dump(exclude={"id"} if item.id is None else None)
        with self.db.engine.begin() as conn:
            result = conn.execute(insert(self.table).values(**values))
            item_id = result.inserted_primary_key[0]

        logger.info(f"Created item {item_id} ({item.type}): {item.name!r}")
        return item.model_copy(update={"id": item_id})

    def get(self, item_id: int) -> Item | None:
        """Get an item by id, or None."""
        with self.db.engine.connect() as conn:
            row = conn.execute(select(self.table).where(self.table.c.id == item_id)).mappings().first()

        return Item.model_validate(dict(row)) if row else None

    def update(self, item: Item) -> Item:
        """
        Persist changed generic fields of an existing item.

        Raises:
            ValueError: If the item has no id
        """
        if item.id is None:
            raise ValueError("Cannot update an item without an id")

        item = item.model_copy(update={"updated_at": utcnow()})
        values = item.model_dump(exclude={"id", "created_at"})
        with self.db.engine.begin() as conn:
            conn.execute(update(self.table).where(self.table.c.id == item.id).values(**values))

        logger.info(f"Updated item {item.id}: {item.name!r}")
        return item

    def delete(self, item_id: int) -> bool:
        """Delete an item record. Returns True if a row was removed."""
        with self.db.engine.begin() as conn:
            result = conn.execute(delete(self.table).where(self.table.c.id == item_id))

        logger.info(f"Deleted item {item_id}")
        return result.rowcount > 0

    def list_items(self) -> list[Item]:
        """All items, newest first."""
        stmt = select(self.table).order_by(self.table.c.created_at.desc(), self.table.c.id.desc())
        with self.db.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()

        return [Item.model_validate(dict(row)) for row in rows]

    def search(
        self,
        keywords: str | None = None,
        types: Iterable[str] | None = None,
        categories: Iterable[str] | None = None,
        grades: Iterable[str] | None = None,
    ) -> list[Item]:
        """
        Filter items.

        Args:
            keywords: Whitespace separated terms; every term must appear in
                the name, description or one of the topics
            types: Allowed type discriminators
            categories: Allowed categories
            grades: An item matches if it targets any of these grades

        Returns:
            Matching items, newest first
        """
        stmt = select(self.table)
        types = list(types or [])
        categories = list(categories or [])
        if types:
            stmt = stmt.where(self.table.c.type.in_(types))
        if categories:
            stmt = stmt.where(self.table.c.category.in_(categories))
        stmt = stmt.order_by(self.table.c.created_at.desc(), self.table.c.id.desc())

        with self.db.engine.connect() as conn:
            items = [Item.model_validate(dict(row)) for row in conn.execute(stmt).mappings()]

        wanted_grades = set(grades or [])
        if wanted_grades:
            items = [item for item in items if wanted_grades.intersection(item.grades)]

        terms = (keywords or "").lower().split()
        if terms:
            items = [item for item in items if _matches_all(item, terms)]

        return items

    # =========================================================================
    # VOCABULARIES
    # =========================================================================

    def list_categories(self) -> list[str]:
        return self._list_names(categories_table)

    def add_category(self, name: str) -> bool:
        return self._add_name(categories_table, name)

    def list_grades(self) -> list[str]:
        return self._list_names(grades_table)

    def add_grade(self, name: str) -> bool:
        return self._add_name(grades_table, name)

    def _list_names(self, table) -> list[str]:
        with self.db.engine.connect() as conn:
            return list(conn.execute(select(table.c.name).order_by(table.c.id)).scalars())

    def _add_name(self, table, name: str) -> bool:
        """Add a vocabulary entry. Returns False if it already exists."""
        try:
            with self.db.engine.begin() as conn:
                conn.execute(insert(table).values(name=name))
        except IntegrityError:
            logger.debug(f"{table.name}: {name!r} already exists")
            return False
        return True


def _matches_all(item: Item, terms: list[str]) -> bool:
    haystack = " ".join([item.name, item.description, *item.topics]).lower()
    return all(term in haystack for term in terms)
