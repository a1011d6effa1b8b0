"""Tests for health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from ygocli.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestHealth:
    async def test_health_returns_ok(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "timestamp" in data

    def test_app_metadata(self) -> None:
        assert app.title == "YGO CLI"
        assert app.version == "2.0.0"
