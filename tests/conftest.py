"""
Shared fixtures: an in-memory store with the same contract as UserStore,
mocked channel senders and services wired to them.
"""
import copy
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from accountkit.modules.audit_manager import audit_manager
from accountkit.modules.users.domain.errors import AlreadyExistsError, StorageError, UserNotFoundError
from accountkit.modules.users.repositories.user_repository import UserRepository
from accountkit.modules.users.services.admin_service import AdminService
from accountkit.modules.users.services.billing_service import BillingService
from accountkit.modules.users.services.notification_service import NotificationService


class SteppingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


class InMemoryUserStore:
    """Dict-backed store; set ``fail`` to make every call raise StorageError."""

    def __init__(self, clock=None):
        self.items = {}
        self.clock = clock or SteppingClock()
        self.fail = False
        self.writes = 0

    def _check(self):
        if self.fail:
            raise StorageError("store unavailable")

    async def get(self, user_id):
        self._check()
        item = self.items.get(user_id)
        return copy.deepcopy(item) if item else None

    async def query_by_email(self, email):
        self._check()
        return [copy.deepcopy(item) for item in self.items.values() if item.get("email") == email]

    async def put(self, item, overwrite=False):
        self._check()
        if not overwrite and item["id"] in self.items:
            raise AlreadyExistsError(item["id"])
        self.writes += 1
        self.items[item["id"]] = copy.deepcopy(item)

    async def partial_update(self, user_id, fields):
        self._check()
        if not fields:
            return False
        if user_id not in self.items:
            raise UserNotFoundError(user_id)
        self.writes += 1
        self.items[user_id].update(copy.deepcopy(fields))
        self.items[user_id]["updatedAt"] = self.clock().isoformat()
        return True

    async def delete(self, user_id):
        self._check()
        self.writes += 1
        self.items.pop(user_id, None)


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def repository(store):
    return UserRepository(store)


@pytest.fixture
def senders():
    """Mocked email / sms / push senders."""
    return {
        "email": AsyncMock(),
        "sms": AsyncMock(),
        "push": AsyncMock(),
    }


@pytest.fixture
def notification_service(repository, senders):
    return NotificationService(
        repository,
        email_sender=senders["email"],
        sms_sender=senders["sms"],
        push_sender=senders["push"],
    )


@pytest.fixture
def billing_service(repository):
    return BillingService(repository)


@pytest.fixture
def admin_service(repository, notification_service):
    return AdminService(repository, notification_service)


@pytest.fixture
def emitted_events():
    """Collects every event emitted through the audit manager during a test."""
    collected = []
    sink = collected.append
    audit_manager.add_sink(sink)
    yield collected
    audit_manager.remove_sink(sink)
