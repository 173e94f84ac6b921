"""Tests for health check endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test basic health check."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_detailed_health_check(client: AsyncClient) -> None:
    """Test detailed health check reports the database and signing secret."""
    response = await client.get("/health/detailed")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    assert data["token_signing"] == "configured"


@pytest.mark.asyncio
async def test_ping_and_root(client: AsyncClient) -> None:
    """Test ping and root endpoints."""
    response = await client.get("/ping")
    assert response.json() == {"message": "pong"}

    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["message"] == "Welcome to Help Cards API"


@pytest.mark.asyncio
async def test_unknown_route(client: AsyncClient) -> None:
    """Test unknown routes use the message error body."""
    response = await client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
