"""HTTP front door — /api/health, /api/init and the global error handlers.

Invariants:
    - /api/health is always 200 {"status": "ok", "port": SERVER_PORT or 5000}
    - /api/init failures become 500 {"error": message}
    - A failing handler never takes the app down; the next request still works
"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

import lahlah_server.api.routes.init_data as init_module
from lahlah_server.api.error_handlers import register_error_handlers
from lahlah_server.config import Settings, get_settings
from lahlah_server.core.errors import SchemaError
from lahlah_server.main import app


async def test_health_reports_default_port(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "port": 5000}


async def test_health_reports_configured_port(client, monkeypatch):
    monkeypatch.setenv("SERVER_PORT", "8123")
    get_settings.cache_clear()
    res = await client.get("/api/health")
    assert res.json() == {"status": "ok", "port": 8123}


async def test_health_uses_injected_settings(client):
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, server_port=9000)
    res = await client.get("/api/health")
    assert res.json()["port"] == 9000


async def test_init_returns_empty_collections(client):
    res = await client.get("/api/init")
    assert res.status_code == 200
    body = res.json()
    assert body["projects"] == [] and body["tasks"] == [] and body["documents"] == []
    assert "frontend" in body["message"]


async def test_init_failure_returns_error_payload(client, monkeypatch):
    def explode():
        raise RuntimeError("payload unavailable")

    monkeypatch.setattr(init_module, "build_init_payload", explode)
    res = await client.get("/api/init")
    assert res.status_code == 500
    assert res.json() == {"error": "payload unavailable"}

    assert (await client.get("/api/health")).status_code == 200


async def test_cors_headers_present(client):
    res = await client.get("/api/health", headers={"Origin": "http://localhost:5173"})
    assert res.headers["access-control-allow-origin"] == "*"


# --- global handlers ----------------------------------------------------------

@pytest.fixture
async def failing_client():
    failing = FastAPI()
    register_error_handlers(failing)

    @failing.get("/boom")
    async def boom():
        raise ValueError("kaput")

    @failing.get("/schema")
    async def schema():
        raise SchemaError("Unknown database 'nope'", 1049)

    @failing.get("/items/{item_id}")
    async def item(item_id: int):
        return {"id": item_id}

    async with AsyncClient(
        transport=ASGITransport(app=failing, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c


async def test_unhandled_exception_becomes_500(failing_client):
    res = await failing_client.get("/boom")
    assert res.status_code == 500
    assert res.json() == {"error": "kaput"}


async def test_lahlah_error_uses_its_status_and_hint(failing_client):
    res = await failing_client.get("/schema")
    assert res.status_code == 503
    body = res.json()
    assert body["code"] == "ER_BAD_DB_ERROR"
    assert body["hint"] == SchemaError.default_hint


async def test_validation_error_is_400(failing_client):
    res = await failing_client.get("/items/not-a-number")
    assert res.status_code == 400
    assert res.json()["code"] == "VALIDATION_ERROR"
    assert res.json()["details"][0]["field"] == "path.item_id"
