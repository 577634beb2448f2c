"""Tests for the installation lifecycle endpoints."""

from __future__ import annotations

import httpx
from litestar.testing import TestClient

from tests.conftest import FakeHoneycomb, script_install


def test_status_before_install(client: TestClient) -> None:  # type: ignore[type-arg]
    """GET /api/installation reports absent before any hook ran."""
    response = client.get("/api/installation")

    assert response.status_code == 200
    assert response.json() == {"status": "absent", "description": None}


def test_sync_then_status(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """A successful sync is ready and stays visible via GET."""
    script_install(fake_honeycomb)

    response = client.post("/api/installation/sync")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "description": None}
    assert client.get("/api/installation").json()["status"] == "ready"


def test_sync_is_idempotent_over_http(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """Two syncs persist one recipient in the database-backed store."""
    script_install(fake_honeycomb)

    client.post("/api/installation/sync")
    response = client.post("/api/installation/sync")

    assert response.json()["status"] == "ready"
    assert len(fake_honeycomb.calls("POST", "/1/recipients")) == 1


def test_sync_failure_reports_description(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """Install failures are a status, not an HTTP error."""
    fake_honeycomb.add("GET", "/1/auth", httpx.Response(401, text="unknown API key"))

    response = client.post("/api/installation/sync")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "failed"
    assert "unknown API key" in body["description"]


def test_drain_after_sync(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """Drain deletes the recipient created by sync."""
    script_install(fake_honeycomb, recipient_id="rcp-7")
    fake_honeycomb.add("DELETE", "/1/recipients/rcp-7", httpx.Response(204))
    client.post("/api/installation/sync")

    response = client.post("/api/installation/drain")

    assert response.json() == {"status": "drained", "description": None}
    assert len(fake_honeycomb.calls("DELETE", "/1/recipients/rcp-7")) == 1


def test_drain_failure_then_retry(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """A failed drain keeps the id so a retry deletes the same recipient."""
    script_install(fake_honeycomb, recipient_id="rcp-7")
    fake_honeycomb.add(
        "DELETE", "/1/recipients/rcp-7",
        httpx.Response(500, text="internal"),
        httpx.Response(404, text="gone"),
    )
    client.post("/api/installation/sync")

    first = client.post("/api/installation/drain").json()
    second = client.post("/api/installation/drain").json()

    assert first["status"] == "draining_failed"
    assert "500" in first["description"]
    assert second["status"] == "drained"
    assert len(fake_honeycomb.calls("DELETE", "/1/recipients/rcp-7")) == 2


def test_drain_without_install(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """Draining a never-installed app is a no-op."""
    response = client.post("/api/installation/drain")

    assert response.json()["status"] == "drained"
    assert fake_honeycomb.requests == []


def test_orphans(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """GET /api/installation/orphans lists untracked recipients."""
    fake_honeycomb.add("GET", "/1/recipients", httpx.Response(200, json=[
        {"id": "r1", "type": "webhook", "details": {"webhook_name": "flows-test-x"}},
    ]))

    response = client.get("/api/installation/orphans")

    assert response.status_code == 200
    assert response.json() == [{"id": "r1", "webhook_name": "flows-test-x"}]


def test_orphans_upstream_failure_is_502(
    client: TestClient, fake_honeycomb: FakeHoneycomb,  # type: ignore[type-arg]
) -> None:
    """A failed listing surfaces as a bad gateway."""
    fake_honeycomb.add("GET", "/1/recipients", httpx.Response(403, text="forbidden"))

    response = client.get("/api/installation/orphans")

    assert response.status_code == 502
