"""
User Event Domain Model

Represents a significant transition emitted through the audit manager.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

USER_CREATED = "user.created"
USER_UPDATED = "user.updated"
USER_STATUS_CHANGED = "user.status_changed"
USER_DELETED = "user.deleted"
USER_SUSPENDED = "user.suspended"
USER_REACTIVATED = "user.reactivated"
USER_SOFT_DELETED = "user.soft_deleted"
NOTIFICATION_SENT = "notification.sent"
NOTIFICATION_FAILED = "notification.failed"
BILLING_RECORDED = "billing.recorded"
BILLING_PLAN_CHANGED = "billing.plan_changed"


@dataclass
class UserEvent:
    """A transition on a single user, consumed by external sinks."""
    event_type: str
    user_id: str
    details: Dict[str, Any] = field(default_factory=dict)
    occurred_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "eventType": self.event_type,
            "userId": self.user_id,
            "details": self.details,
            "occurredAt": self.occurred_at,
        }
