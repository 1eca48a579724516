"""API tests for newsletter subscriptions."""
from __future__ import annotations

from fastapi.testclient import TestClient


def test_subscribe_creates_subscription(client: TestClient) -> None:
    response = client.post("/api/v1/newsletter/subscribe", json={"email": "Reader@Example.com"})

    assert response.status_code == 201
    subscription = response.json()["subscription"]
    assert subscription["email"] == "reader@example.com"
    assert subscription["is_active"] is True
    assert subscription["unsubscribed_at"] is None


def test_duplicate_active_subscription_conflicts(client: TestClient) -> None:
    client.post("/api/v1/newsletter/subscribe", json={"email": "a@example.com"})

    response = client.post("/api/v1/newsletter/subscribe", json={"email": "A@example.com"})

    assert response.status_code == 409


def test_unsubscribe_then_resubscribe(client: TestClient) -> None:
    created = client.post("/api/v1/newsletter/subscribe", json={"email": "b@example.com"}).json()

    left = client.post("/api/v1/newsletter/unsubscribe", json={"email": "b@example.com"})
    assert left.status_code == 200

    again = client.post("/api/v1/newsletter/subscribe", json={"email": "b@example.com"})
    assert again.status_code == 200
    assert again.json()["subscription"]["id"] == created["subscription"]["id"]
    assert again.json()["subscription"]["is_active"] is True


def test_unsubscribe_unknown_address(client: TestClient) -> None:
    response = client.post("/api/v1/newsletter/unsubscribe", json={"email": "nobody@example.com"})
    assert response.status_code == 404


def test_subscribe_rejects_invalid_email(client: TestClient) -> None:
    response = client.post("/api/v1/newsletter/subscribe", json={"email": "nope"})
    assert response.status_code == 422
