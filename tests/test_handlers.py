"""
Tests for the Lambda handlers.
"""
import json
from unittest.mock import AsyncMock

import pytest

from accountkit.handlers import billing_processor, lambda_response, notification_sender
from accountkit.modules.users.api import operations


@pytest.fixture(autouse=True)
def no_aws(monkeypatch):
    monkeypatch.setattr(lambda_response, "connect_to_aws", lambda: None)


def test_billing_processor_success(monkeypatch):
    process = AsyncMock(return_value={"status": "success", "userId": "u1", "billingAmount": 1100})
    monkeypatch.setattr(operations, "process_billing", process)

    response = billing_processor.handler({"userId": "u1"}, None)

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["billingAmount"] == 1100
    process.assert_awaited_once_with({"userId": "u1"})


def test_billing_processor_error_is_500(monkeypatch, repository, billing_service):
    monkeypatch.setattr(operations, "_billing_service", billing_service)

    response = billing_processor.handler({"userId": "missing"}, None)

    assert response["statusCode"] == 500
    body = json.loads(response["body"])
    assert body["errorKind"] == "NotFoundError"


def test_billing_processor_requires_user_id():
    response = billing_processor.handler({}, None)

    assert response["statusCode"] == 500
    assert json.loads(response["body"])["errorKind"] == "ValidationError"


def test_notification_sender(monkeypatch, repository, notification_service, senders):
    monkeypatch.setattr(operations, "_notification_service", notification_service)
    repository.store.items["u1"] = {
        "id": "u1",
        "email": "ann@example.com",
        "name": "Ann",
        "notificationSettings": {"email": False, "sms": False, "push": False},
    }

    response = notification_sender.handler({"userId": "u1", "message": "hi", "overrides": {"forcePush": True}}, None)

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["channels"] == ["push"]
    senders["push"].send.assert_awaited_once_with("u1", "hi")
