"""API fixtures — httpx client against the ASGI app, no server process."""

import pytest
from httpx import ASGITransport, AsyncClient

from lahlah_server.main import app


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
