"""
Admin Service

Lifecycle transitions over user status: suspend, reactivate, delete.

    any        --suspend-->          suspended
    suspended  --reactivate-->       active
    any        --delete(soft)-->     inactive
    any        --delete(hard)-->     (record removed)
"""
import logging
import math
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from accountkit.modules.audit_manager import audit_manager
from accountkit.modules.users.domain import events
from accountkit.modules.users.domain.errors import InvalidTransitionError, UserNotFoundError
from accountkit.modules.users.domain.user import User, utc_now
from accountkit.modules.users.repositories.user_repository import UserRepository
from accountkit.modules.users.services.notification_service import (
    NotificationOverrides,
    NotificationService,
)

logger = logging.getLogger("accountkit.users.admin")

SECONDS_PER_DAY = 86400
REACTIVATION_MESSAGE = "Your account has been reactivated. Welcome back!"


def suspension_message(reason: str) -> str:
    return f"Your account has been suspended. Reason: {reason}"


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class AdminService:
    """Service for administrative user lifecycle operations."""

    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        notification_service: Optional[NotificationService] = None
    ):
        self.repository = repository or UserRepository()
        self.notification_service = notification_service or NotificationService(self.repository)

    async def _require_user(self, user_id: str) -> User:
        user = await self.repository.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        return user

    async def suspend_user(self, user_id: str, reason: str, notify_user: bool = True) -> None:
        await self._require_user(user_id)

        await self.repository.update_status(user_id, "suspended")
        audit_manager.log_event(events.USER_SUSPENDED, user_id, {"reason": reason, "notify": notify_user})

        if notify_user:
            await self.notification_service.notify(
                user_id,
                suspension_message(reason),
                NotificationOverrides(force_email=True),
            )

    async def reactivate_user(self, user_id: str) -> None:
        user = await self._require_user(user_id)

        if user.status != "suspended":
            raise InvalidTransitionError(
                f"User {user_id} is not suspended (status: {user.status})"
            )

        await self.repository.update_status(user_id, "active")
        audit_manager.log_event(events.USER_REACTIVATED, user_id)
        await self.notification_service.notify(
            user_id,
            REACTIVATION_MESSAGE,
            NotificationOverrides(force_email=True),
        )

    async def delete_user_account(
        self,
        user_id: str,
        hard_delete: bool = False,
        reason: Optional[str] = None
    ) -> None:
        await self._require_user(user_id)

        if hard_delete:
            await self.repository.delete(user_id)
            logger.info(f"[AdminService.delete_user_account] User {user_id} permanently deleted")
        else:
            await self.repository.update_status(user_id, "inactive")
            audit_manager.log_event(events.USER_SOFT_DELETED, user_id, {"reason": reason})
            logger.info(f"[AdminService.delete_user_account] User {user_id} soft deleted")

        if reason:
            logger.info(f"[AdminService.delete_user_account] Deletion reason for {user_id}: {reason}")

    async def analyze_user_activity(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Read-only activity snapshot.

        accountAge is in whole days since creation; lastActivity is the
        user's last update timestamp.
        """
        user = await self._require_user(user_id)
        now = now or utc_now()

        account_age = 0
        if user.created_at:
            elapsed = (now - _parse_timestamp(user.created_at)).total_seconds()
            account_age = math.floor(elapsed / SECONDS_PER_DAY)

        return {
            "userId": user.id,
            "status": user.status,
            "billingPlan": user.billing_plan,
            "accountAge": account_age,
            "lastActivity": user.updated_at,
        }
