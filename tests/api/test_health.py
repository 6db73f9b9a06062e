"""Tests for health endpoints."""

from httpx import AsyncClient


async def test_root_health_check(api_client: AsyncClient):
    """Test root health endpoint."""
    response = await api_client.get("/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


async def test_api_health_check(api_client: AsyncClient):
    response = await api_client.get("/api/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime_seconds"] >= 0


async def test_db_health(api_client: AsyncClient):
    """Database check runs a query through the pool."""
    response = await api_client.get("/api/health/db")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["name"] == "sqlite"
    assert data["database"]["available"] is True


async def test_request_id_header(api_client: AsyncClient):
    response = await api_client.get("/api/health")
    assert len(response.headers["X-Request-ID"]) == 8
    assert "X-Response-Time" in response.headers
