"""Tests for trigger subscription endpoints."""

from __future__ import annotations

from litestar.testing import TestClient


def test_subscribe_all_triggers(client: TestClient) -> None:  # type: ignore[type-arg]
    """POST /api/subscriptions without trigger_id subscribes to everything."""
    response = client.post("/api/subscriptions", json={})

    assert response.status_code == 201
    data = response.json()
    assert data["trigger_id"] is None
    assert data["id"]
    assert data["created_at"]


def test_subscribe_one_trigger(client: TestClient) -> None:  # type: ignore[type-arg]
    """A trigger_id filter is stored as given."""
    response = client.post("/api/subscriptions", json={"trigger_id": "t1"})

    assert response.status_code == 201
    assert response.json()["trigger_id"] == "t1"


def test_subscribe_empty_trigger_id_means_all(client: TestClient) -> None:  # type: ignore[type-arg]
    """An empty trigger_id is stored as no filter."""
    response = client.post("/api/subscriptions", json={"trigger_id": ""})

    assert response.json()["trigger_id"] is None


def test_subscribe_non_string_trigger_id_is_400(client: TestClient) -> None:  # type: ignore[type-arg]
    """trigger_id must be a string."""
    response = client.post("/api/subscriptions", json={"trigger_id": 42})

    assert response.status_code == 400


def test_list_subscriptions(client: TestClient) -> None:  # type: ignore[type-arg]
    """GET /api/subscriptions returns every subscription."""
    client.post("/api/subscriptions", json={})
    client.post("/api/subscriptions", json={"trigger_id": "t1"})

    response = client.get("/api/subscriptions")

    assert response.status_code == 200
    assert sorted(str(s["trigger_id"]) for s in response.json()) == ["None", "t1"]


def test_unsubscribe(client: TestClient) -> None:  # type: ignore[type-arg]
    """DELETE removes the subscription."""
    subscription_id = client.post("/api/subscriptions", json={}).json()["id"]

    response = client.delete(f"/api/subscriptions/{subscription_id}")

    assert response.status_code == 204
    assert client.get("/api/subscriptions").json() == []


def test_unsubscribe_unknown_is_404(client: TestClient) -> None:  # type: ignore[type-arg]
    """Deleting an unknown subscription is a 404."""
    response = client.delete("/api/subscriptions/nope")

    assert response.status_code == 404


def test_deliveries_unknown_is_404(client: TestClient) -> None:  # type: ignore[type-arg]
    """Reading the inbox of an unknown subscription is a 404."""
    response = client.get("/api/subscriptions/nope/deliveries")

    assert response.status_code == 404
