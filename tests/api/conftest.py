"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from storefront.api.products import get_catalog_service
from storefront.catalog.service import CatalogService
from storefront.infrastructure.config import settings
from storefront.main import app


@pytest.fixture(autouse=True)
def override_catalog_service(service: CatalogService) -> Iterator[None]:
    """Serve every request from the in-memory catalog service."""
    app.dependency_overrides[get_catalog_service] = lambda: service
    yield
    app.dependency_overrides.pop(get_catalog_service, None)


@pytest.fixture
def client() -> TestClient:
    """Create test client without authentication."""
    return TestClient(app)


@pytest.fixture
def auth_client() -> TestClient:
    """Create test client with valid API key authentication."""
    return TestClient(
        app,
        headers={"Authorization": f"Bearer {settings.storefront_api_key}"},
    )
