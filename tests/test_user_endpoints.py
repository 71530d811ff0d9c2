"""
Tests for the REST endpoints: routing and errorKind -> HTTP status mapping.
"""
import pytest
from fastapi.testclient import TestClient

from accountkit.app import app
from accountkit.modules.users.api import operations


@pytest.fixture
def client(monkeypatch, repository, billing_service, notification_service, admin_service):
    monkeypatch.setattr(operations, "_repository", repository)
    monkeypatch.setattr(operations, "_billing_service", billing_service)
    monkeypatch.setattr(operations, "_notification_service", notification_service)
    monkeypatch.setattr(operations, "_admin_service", admin_service)
    # Lifespan (AWS clients) is not started without the context manager
    return TestClient(app)


def create_user(client, **fields):
    response = client.post("/api/users", json={"email": "ann@example.com", "name": "Ann", **fields})
    assert response.status_code == 201
    return response.json()["user"]


def test_root(client):
    assert client.get("/").json() == {"status": "online", "system": "Accountkit"}


def test_create_get_and_update(client):
    user = create_user(client)

    response = client.patch(f"/api/users/{user['id']}", json={"name": "Annie"})
    assert response.status_code == 200

    fetched = client.get(f"/api/users/{user['id']}").json()
    assert fetched["status"] == "success"
    assert fetched["user"]["name"] == "Annie"


def test_find_by_email(client):
    create_user(client)

    body = client.get("/api/users", params={"email": "ann@example.com"}).json()

    assert body["count"] == 1


def test_missing_user_is_404(client):
    response = client.get("/api/users/missing")

    assert response.status_code == 404
    assert response.json()["errorKind"] == "NotFoundError"


def test_invalid_payload_is_400(client):
    response = client.post("/api/users", json={"email": "ann@example.com"})

    assert response.status_code == 400
    assert response.json()["errorKind"] == "ValidationError"


def test_reactivate_active_user_is_409(client):
    user = create_user(client)

    response = client.post(f"/api/users/{user['id']}/reactivate")

    assert response.status_code == 409
    assert response.json()["errorKind"] == "InvalidTransitionError"


def test_duplicate_id_is_409(client):
    create_user(client, id="user-1")

    response = client.post("/api/users", json={"id": "user-1", "email": "eve@example.com", "name": "Eve"})

    assert response.status_code == 409
    assert response.json()["errorKind"] == "AlreadyExistsError"


def test_billing_routes(client):
    user = create_user(client, billingPlan="standard")

    assert client.get(f"/api/users/{user['id']}/billing").json()["amount"] == 1100

    processed = client.post(f"/api/users/{user['id']}/billing/process", json={"billingPeriod": "2024-06"})
    assert processed.json()["billingPeriod"] == "2024-06"

    changed = client.put(f"/api/users/{user['id']}/billing/plan", json={"newPlan": "premium"})
    assert changed.json()["billingPlan"] == "premium"

    history = client.get(f"/api/users/{user['id']}/billing/history").json()["history"]
    assert history[0]["amount"] == 1100


def test_notification_routes(client, senders):
    user = create_user(client)

    settings = client.patch(f"/api/users/{user['id']}/notification-settings", json={"push": True})
    assert settings.json()["notificationSettings"]["push"] is True

    sent = client.post(f"/api/users/{user['id']}/notifications", json={"message": "hi"})
    assert sent.json()["channels"] == ["email", "push"]
    senders["push"].send.assert_awaited_once_with(user["id"], "hi")


def test_suspend_and_delete_routes(client):
    user = create_user(client)

    suspended = client.post(f"/api/users/{user['id']}/suspend", json={"reason": "spam", "notifyUser": False})
    assert suspended.json()["userStatus"] == "suspended"

    assert client.get(f"/api/users/{user['id']}/activity").json()["activity"]["status"] == "suspended"

    client.delete(f"/api/users/{user['id']}")
    assert client.get(f"/api/users/{user['id']}").json()["user"]["status"] == "inactive"

    client.delete(f"/api/users/{user['id']}", params={"hard_delete": True})
    assert client.get(f"/api/users/{user['id']}").status_code == 404
