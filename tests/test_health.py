"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(unconfigured_client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await unconfigured_client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data.get("status") == "ok"
    assert data.get("document_store") == "disabled"


async def test_request_id_is_echoed(unconfigured_client: AsyncClient) -> None:
    """A safe client X-Request-ID is forwarded on the response."""
    response = await unconfigured_client.get(
        "/api/v1/health", headers={"X-Request-ID": "req-123"}
    )
    assert response.headers.get("X-Request-ID") == "req-123"


async def test_unsafe_request_id_is_replaced(unconfigured_client: AsyncClient) -> None:
    """Request IDs with unsafe characters are replaced by a generated one."""
    response = await unconfigured_client.get(
        "/api/v1/health", headers={"X-Request-ID": "bad id; drop table"}
    )
    echoed = response.headers.get("X-Request-ID")
    assert echoed
    assert echoed != "bad id; drop table"


async def test_screens_lists_registry(unconfigured_client: AsyncClient) -> None:
    """GET /api/v1/screens returns the static screen registry."""
    response = await unconfigured_client.get("/api/v1/screens")
    assert response.status_code == 200
    ids = [s["id"] for s in response.json()]
    assert "list_brand" in ids
    assert "list_jewelry_mat" in ids
    assert len(ids) == 7


async def test_flows_without_document_store_returns_503(
    unconfigured_client: AsyncClient,
) -> None:
    """Flow endpoints answer 503 when Firestore credentials are not configured."""
    response = await unconfigured_client.get("/api/v1/flows")
    assert response.status_code == 503
    assert response.json()["error"] == "DOCUMENT_STORE_NOT_CONFIGURED"
