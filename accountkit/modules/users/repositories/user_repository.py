"""
User Repository

Façade mediating all store access for domain code.
"""
import logging
import uuid
from typing import Optional, List, Dict, Any

from accountkit.modules.audit_manager import audit_manager
from accountkit.modules.users.domain import events
from accountkit.modules.users.domain.errors import StorageError
from accountkit.modules.users.domain.user import (
    User,
    build_new_user,
    utc_now,
    validate_status,
    validate_updates,
)
from accountkit.modules.users.repositories.user_store import UserStore

logger = logging.getLogger("accountkit.users.repository")


class UserRepository:
    """Repository for user data access."""

    def __init__(self, store: Optional[UserStore] = None):
        self.store = store or UserStore()

    async def find_by_id(self, user_id: str) -> Optional[User]:
        """
        Get user by id.

        A storage failure is reported the same way as a missing user; the
        failure itself is only visible in the error log.
        """
        try:
            item = await self.store.get(user_id)
        except StorageError as e:
            logger.error(f"[UserRepository.find_by_id] storage failure for {user_id}: {e}")
            return None
        if not item:
            return None
        return User.from_dict(item)

    async def find_by_email(self, email: str) -> List[User]:
        """Get users by email (0 or 1 by convention)."""
        try:
            items = await self.store.query_by_email(email)
        except StorageError as e:
            logger.error(f"[UserRepository.find_by_email] storage failure for {email}: {e}")
            return []
        return [User.from_dict(item) for item in items]

    async def create(self, user_data: Dict[str, Any]) -> User:
        """Create a user, applying defaults for omitted fields."""
        user_id = user_data.get("id") or uuid.uuid4().hex
        user = build_new_user(user_data, user_id=str(user_id), now=utc_now())
        logger.debug(f"[UserRepository.create] id={user.id}, email={user.email}")

        await self.store.put(user.to_dict())
        audit_manager.log_event(
            events.USER_CREATED,
            user.id,
            {"email": user.email, "status": user.status, "billingPlan": user.billing_plan},
        )
        return user

    async def update(self, user_id: str, updates: Dict[str, Any]) -> None:
        """Apply a validated partial update."""
        attributes = validate_updates(updates)
        logger.debug(f"[UserRepository.update] user_id={user_id}, fields={list(attributes.keys())}")

        written = await self.store.partial_update(user_id, attributes)
        if written:
            audit_manager.log_event(events.USER_UPDATED, user_id, {"fields": list(attributes.keys())})

    async def update_status(self, user_id: str, status: str) -> None:
        validate_status(status)
        await self.update(user_id, {"status": status})
        audit_manager.log_event(events.USER_STATUS_CHANGED, user_id, {"status": status})

    async def delete(self, user_id: str) -> None:
        """Hard delete: the record is removed from the store."""
        await self.store.delete(user_id)
        audit_manager.log_event(events.USER_DELETED, user_id)
