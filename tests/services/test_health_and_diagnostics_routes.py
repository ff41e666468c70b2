"""Health, Diagnostics and Error Envelope Routes.

Tests cover:
    - Liveness always 200; readiness 200 with DB, 503 without
    - /test/circuit-breaker returns OK / SUCCESS / fallback text, always 200
    - Negative delay rejected with 400
    - Unhandled exceptions become a generic 500 envelope
"""

from httpx import ASGITransport, AsyncClient

import user_service.infrastructure.database as db_module
from user_service.infrastructure.user_repository import SqlAlchemyUserRepository
from user_service.main import app

CB = "/api/v1/users/test/circuit-breaker"


async def test_liveness(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    assert res.json()["service"] == "user-service"


async def test_readiness_with_database(client):
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_circuit_breaker_ok(client):
    res = await client.get(CB)
    assert res.status_code == 200
    assert res.json()["result"] == "Circuit Breaker Test - OK. Delay: 0ms"


async def test_circuit_breaker_success(client):
    res = await client.get(CB, params={"delay": 1, "success": "true"})
    assert res.json()["result"] == "Circuit Breaker Test - SUCCESS. Delay: 1ms"


async def test_circuit_breaker_error_returns_fallback(client):
    res = await client.get(CB, params={"error": "true"})
    assert res.status_code == 200
    assert res.json()["result"].startswith("Fallback: Service is temporarily unavailable")


async def test_circuit_breaker_negative_delay_rejected(client):
    res = await client.get(CB, params={"delay": -5})
    assert res.status_code == 400


async def test_circuit_breaker_delay_above_ceiling_rejected(client):
    res = await client.get(CB, params={"delay": 60_001})
    assert res.status_code == 400


async def test_circuit_breaker_status(client):
    res = await client.get(f"{CB}/status")
    assert res.status_code == 200
    assert "/test/circuit-breaker" in res.json()["message"]


async def test_unhandled_exception_returns_generic_500(client, monkeypatch):
    async def explode(self, email):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(SqlAlchemyUserRepository, "exists_by_email", explode)

    # Starlette re-raises after the catch-all handler responds; keep the response instead
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        res = await c.get("/api/v1/users/check-email/a@example.com")

    assert res.status_code == 500
    body = res.json()["error"]
    assert body["code"] == "INTERNAL_ERROR"
    assert "secret" not in body["message"]
