"""Tests for health check endpoints."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from storefront.infrastructure.database import get_session
from storefront.main import app


class FakeSession:
    """Session stand-in whose execute either succeeds or raises."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.statements: list = []

    async def execute(self, statement):
        self.statements.append(statement)
        if self.error is not None:
            raise self.error


@pytest.fixture
def client() -> Iterator[TestClient]:
    """Create test client."""
    yield TestClient(app)
    app.dependency_overrides.pop(get_session, None)


def test_health_check(client: TestClient) -> None:
    """Test health endpoint returns healthy status."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "storefront-api"
    assert "version" in data


def test_readiness_check(client: TestClient) -> None:
    """Test readiness endpoint returns ready when the database answers."""
    session = FakeSession()
    app.dependency_overrides[get_session] = lambda: session

    response = client.get("/ready")

    assert response.status_code == 200
    assert response.json()["status"] == "ready"
    assert len(session.statements) == 1


def test_readiness_check_database_down(client: TestClient) -> None:
    """Test readiness endpoint returns 503 when the database fails."""
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))
    app.dependency_overrides[get_session] = lambda: FakeSession(error)

    response = client.get("/ready")

    assert response.status_code == 503
    assert response.json()["status"] == "unavailable"
