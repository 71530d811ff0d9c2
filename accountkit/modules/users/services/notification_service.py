"""
Notification Service

Fans a message out to the channels a user has enabled, or that the caller
forces on.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from accountkit.modules.audit_manager import audit_manager
from accountkit.modules.users.domain import events
from accountkit.modules.users.domain.errors import UserNotFoundError
from accountkit.modules.users.domain.user import User, validate_notification_settings
from accountkit.modules.users.repositories.user_repository import UserRepository
from accountkit.tools.communication import SystemEmailSender, SystemPushSender, SystemSMSSender

logger = logging.getLogger("accountkit.users.notifications")


@dataclass
class NotificationOverrides:
    """Channels forced on regardless of the user's stored settings."""
    force_email: bool = False
    force_sms: bool = False
    force_push: bool = False

    def forces(self, channel: str) -> bool:
        return bool(getattr(self, f"force_{channel}"))


class NotificationService:
    """Service for user notifications."""

    def __init__(
        self,
        repository: Optional[UserRepository] = None,
        email_sender: Optional[SystemEmailSender] = None,
        sms_sender: Optional[SystemSMSSender] = None,
        push_sender: Optional[SystemPushSender] = None
    ):
        self.repository = repository or UserRepository()
        self.email_sender = email_sender or SystemEmailSender()
        self.sms_sender = sms_sender or SystemSMSSender()
        self.push_sender = push_sender or SystemPushSender()

    def _channel_sends(self, user: User, message: str) -> Dict[str, Callable[[], Awaitable[Any]]]:
        return {
            "email": lambda: self.email_sender.send(user.email, user.name, message),
            "sms": lambda: self.sms_sender.send(user.id, message),
            "push": lambda: self.push_sender.send(user.id, message),
        }

    async def _send(self, channel: str, user_id: str, send) -> Any:
        try:
            result = await send()
        except Exception as e:
            audit_manager.log_event(events.NOTIFICATION_FAILED, user_id, {"channel": channel, "error": str(e)})
            raise
        audit_manager.log_event(events.NOTIFICATION_SENT, user_id, {"channel": channel})
        return result

    async def notify(
        self,
        user_id: str,
        message: str,
        overrides: Optional[NotificationOverrides] = None
    ) -> List[str]:
        """
        Send a message on every eligible channel.

        Channel sends run concurrently; all of them are awaited before the
        first failure (in email, sms, push order) is re-raised.

        Returns:
            The channels that were attempted.
        """
        overrides = overrides or NotificationOverrides()
        user = await self.repository.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        sends = self._channel_sends(user, message)
        eligible: List[Tuple[str, Any]] = [
            (channel, send)
            for channel, send in sends.items()
            if user.notification_settings.get(channel) or overrides.forces(channel)
        ]
        logger.debug(f"[NotificationService.notify] user_id={user_id}, channels={[c for c, _ in eligible]}")

        results = await asyncio.gather(
            *(self._send(channel, user_id, send) for channel, send in eligible),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

        return [channel for channel, _ in eligible]

    async def update_notification_settings(
        self,
        user_id: str,
        settings: Dict[str, bool]
    ) -> Dict[str, bool]:
        """Merge the supplied flags into the stored settings; others are kept."""
        validate_notification_settings(settings, partial=True)
        user = await self.repository.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        merged = {**user.notification_settings, **settings}
        await self.repository.update(user_id, {"notification_settings": merged})
        return merged
