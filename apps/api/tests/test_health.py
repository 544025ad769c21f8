from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from rtc_relay.core.config import settings
from rtc_relay.main import app


@pytest.mark.asyncio
async def test_health_endpoint() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["environment"] == settings.app_env
    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None


@pytest.mark.asyncio
async def test_health_head() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.head("/health")

    assert response.status_code == 200


def test_cors_origins_accept_comma_separated_env(monkeypatch):
    from rtc_relay.core.config import Settings

    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")

    assert Settings().cors_allow_origins == ["https://a.example", "https://b.example"]
