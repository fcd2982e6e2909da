"""Tests for middleware — security headers, request IDs."""

import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from accountd.api.deps import get_account_store
from accountd.middleware.request_id import parse_request_id


@pytest.mark.asyncio
async def test_security_headers_on_error_response(client):
    """Auth failures carry the hardening headers too."""
    r = await client.get("/me")
    assert r.status_code == 401
    assert r.headers["Cache-Control"] == "no-store"
    assert r.headers["X-Content-Type-Options"] == "nosniff"
    assert r.headers["X-Frame-Options"] == "DENY"
    assert r.headers["Referrer-Policy"] == "no-referrer"


@pytest.mark.asyncio
async def test_login_response_not_cacheable(client):
    await client.post(
        "/users/signup", json={"email": "a@test.com", "password": "Secret1", "name": "Ann"}
    )
    r = await client.post("/users/login", json={"email": "a@test.com", "password": "Secret1"})
    assert r.status_code == 200
    assert r.headers["Cache-Control"] == "no-store"
    assert r.headers["Pragma"] == "no-cache"


@pytest.mark.asyncio
async def test_request_id_generated(client):
    """Each request gets a unique X-Request-ID header."""
    r1 = await client.get("/me")
    r2 = await client.get("/me")
    assert "X-Request-ID" in r1.headers
    assert "X-Request-ID" in r2.headers
    assert r1.headers["X-Request-ID"] != r2.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_request_id_propagated(client):
    """Incoming X-Request-ID is propagated through the response."""
    custom_id = str(uuid.uuid4())
    r = await client.get("/me", headers={"X-Request-ID": custom_id})
    assert r.headers["X-Request-ID"] == custom_id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "incoming", ["test-trace-12345", "x" * 5000, "<script>alert(1)</script>", ""]
)
async def test_request_id_not_a_uuid_is_replaced(client, incoming):
    r = await client.get("/me", headers={"X-Request-ID": incoming})
    returned = r.headers["X-Request-ID"]
    assert returned != incoming
    assert str(uuid.UUID(returned)) == returned


def test_parse_request_id_canonicalizes():
    raw = uuid.uuid4()
    assert parse_request_id(raw.hex.upper()) == str(raw)
    assert parse_request_id(f"urn:uuid:{raw}") == str(raw)
    assert parse_request_id("1" * 5000) is None
    assert parse_request_id(None) is None


@pytest.mark.asyncio
async def test_unhandled_error_keeps_request_id_and_headers(app):
    class ExplodingStore:
        async def get_by_email(self, email):
            raise RuntimeError("boom")

    app.dependency_overrides[get_account_store] = lambda: ExplodingStore()
    custom_id = str(uuid.uuid4())

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        r = await ac.post(
            "/users/login",
            json={"email": "a@test.com", "password": "Secret1"},
            headers={"X-Request-ID": custom_id},
        )

    assert r.status_code == 500
    assert r.headers["X-Request-ID"] == custom_id
    assert r.headers["Cache-Control"] == "no-store"
    assert r.headers["X-Content-Type-Options"] == "nosniff"


@pytest.mark.asyncio
async def test_no_hsts_on_http(client):
    """HSTS header is NOT set on HTTP connections (only HTTPS)."""
    r = await client.get("/me")
    assert "Strict-Transport-Security" not in r.headers


@pytest.mark.asyncio
async def test_hsts_on_https(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="https://test") as ac:
        r = await ac.get("/me")
    assert r.headers["Strict-Transport-Security"].startswith("max-age=")
