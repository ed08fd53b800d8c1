import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("ACTIVE_PROVIDER", "mock")
    monkeypatch.setenv("REDIS_URL", "")
    monkeypatch.setenv("SEARCH_FALLBACK_TO_MOCK", "false")


@pytest.fixture
async def client(mock_env):
    from app.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
