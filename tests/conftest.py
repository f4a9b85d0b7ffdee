"""
Pytest configuration and fixtures for LOR tests.

Every test gets its own repository root and SQLite database under tmp_path.
"""

from pathlib import Path

import pytest

from lor.catalog import ItemCatalog
from lor.lifecycle import ItemLifecycle
from lor.models import Item
from lor.registry import ResourceTypeRegistry
from lor.services.db import DatabaseService, ItemDataStore, ItemStore
from lor.services.fs import StorageRepository
from lor.types import TypeServices

BASE_URL = "http://lor.test"


@pytest.fixture
def repository_root(tmp_path: Path) -> Path:
    return tmp_path / "repository"


@pytest.fixture
def db(tmp_path: Path):
    service = DatabaseService(f"sqlite:///{tmp_path / 'lor.db'}")
    service.create_schema()
    yield service
    service.dispose()


@pytest.fixture
def services(db: DatabaseService, repository_root: Path) -> TypeServices:
    data = ItemDataStore(db)
    storage = StorageRepository(
        root=repository_root,
        base_url=BASE_URL,
        data=data,
        default_image_url=f"{BASE_URL}/static/default.png",
    )
    return TypeServices(storage=storage, data=data, items=ItemStore(db))


@pytest.fixture
def registry() -> ResourceTypeRegistry:
    """Fresh registry so tests never leak custom types into each other."""
    return ResourceTypeRegistry()


@pytest.fixture
def lifecycle(services: TypeServices, registry: ResourceTypeRegistry) -> ItemLifecycle:
    return ItemLifecycle(services, registry)


@pytest.fixture
def catalog(lifecycle: ItemLifecycle) -> ItemCatalog:
    return ItemCatalog(lifecycle)


@pytest.fixture
def make_item(services: TypeServices):
    """Insert a generic item record and return it."""

    def _make_item(name: str = "Photosynthesis", type: str = "file", **fields) -> Item:
        return services.items.create(Item(name=name, type=type, **fields))

    return _make_item
