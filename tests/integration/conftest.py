"""
Pytest configuration for integration tests.

Integration tests drive the API and CLI against a temporary repository root
and SQLite database.
"""

import pytest
from fastapi.testclient import TestClient

from lor.api import create_app


@pytest.fixture
def client(services, registry):
    """API client with lifespan (schema creation) running."""
    with TestClient(create_app(services, registry)) as test_client:
        yield test_client


def pytest_collection_modifyitems(items):
    """Add markers to integration tests."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
