"""
DatabaseService - SQLAlchemy engine and schema management.

Works with any SQLAlchemy URL. SQLite is the local default; file-backed
SQLite databases get their parent directory created on connect.
"""

from pathlib import Path

from loguru import logger
from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url

from .tables import metadata


class DatabaseService:
    """Owns the engine used by the item and attribute stores."""

    def __init__(self, url: str, echo: bool = False):
        """
        Initialize database service.

        Args:
            url: SQLAlchemy database URL
            echo: Log every SQL statement
        """
        self.url = url
        self.echo = echo
        self._engine: Engine | None = None

    @property
    def engine(self) -> Engine:
        """Lazily created engine."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        parsed = make_url(self.url)
        if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Connecting to database: {parsed.render_as_string(hide_password=True)}")
        return create_engine(self.url, echo=self.echo)

    def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        metadata.create_all(self.engine)
        logger.info(f"Database schema ready ({len(metadata.tables)} tables)")

    def drop_schema(self) -> None:
        """Drop all tables. Useful for testing."""
        metadata.drop_all(self.engine)
        logger.debug("Database schema dropped")

    def dispose(self) -> None:
        """Close pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
