from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from fluxori.boundary.db import get_async_db


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(client):
    session = AsyncMock(spec=AsyncSession)
    client.app.dependency_overrides[get_async_db] = lambda: session

    response = client.get("/api/v1/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK"}
    session.execute.assert_awaited_once()


def test_health_check_db_unavailable(client):
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
    client.app.dependency_overrides[get_async_db] = lambda: session

    response = client.get("/api/v1/health/db")

    assert response.status_code == 503
    assert response.json() == {"detail": "Database unavailable"}


def test_responses_carry_correlation_id(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "req-123"})
    assert response.headers["X-Correlation-ID"] == "req-123"


def test_unusable_correlation_id_is_replaced(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "x" * 200})

    echoed = response.headers["X-Correlation-ID"]
    assert echoed != "x" * 200
    assert len(echoed) == 32


def test_generated_correlation_id_when_header_missing(client):
    first = client.get("/api/v1/health").headers["X-Correlation-ID"]
    second = client.get("/api/v1/health").headers["X-Correlation-ID"]

    assert first and second
    assert first != second
