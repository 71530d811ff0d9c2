"""
User Domain Model

Pure data model representing a user entity, plus the schema rules used to
validate creates and partial updates before they reach the store.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from accountkit.modules.users.domain.errors import ValidationError

USER_STATUSES = ("active", "inactive", "suspended")
BILLING_PLANS = ("free", "standard", "premium")
NOTIFICATION_CHANNELS = ("email", "sms", "push")

DEFAULT_STATUS = "active"
DEFAULT_BILLING_PLAN = "free"
DEFAULT_NOTIFICATION_SETTINGS = {"email": True, "sms": False, "push": False}

# Python field name -> stored attribute name
FIELD_ATTRIBUTES = {
    "id": "id",
    "email": "email",
    "name": "name",
    "status": "status",
    "billing_plan": "billingPlan",
    "last_billing_date": "lastBillingDate",
    "last_billing_amount": "lastBillingAmount",
    "notification_settings": "notificationSettings",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}
ATTRIBUTE_FIELDS = {attr: name for name, attr in FIELD_ATTRIBUTES.items()}

# Never accepted in a partial update
READ_ONLY_FIELDS = ("id", "created_at", "updated_at")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _from_number(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


@dataclass
class User:
    """User domain model."""
    id: str
    email: str
    name: str
    status: str = DEFAULT_STATUS
    billing_plan: str = DEFAULT_BILLING_PLAN
    last_billing_date: Optional[str] = None
    last_billing_amount: Optional[float] = None
    notification_settings: Dict[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_NOTIFICATION_SETTINGS)
    )
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        """Create User from a stored item."""
        settings = dict(DEFAULT_NOTIFICATION_SETTINGS)
        settings.update(data.get("notificationSettings") or {})
        return cls(
            id=data["id"],
            email=data["email"],
            name=data["name"],
            status=data.get("status", DEFAULT_STATUS),
            billing_plan=data.get("billingPlan", DEFAULT_BILLING_PLAN),
            last_billing_date=data.get("lastBillingDate"),
            last_billing_amount=_from_number(data.get("lastBillingAmount")),
            notification_settings={k: bool(v) for k, v in settings.items()},
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_dict(self) -> dict:
        """Convert User to its stored (camelCase) representation."""
        item = {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "status": self.status,
            "billingPlan": self.billing_plan,
            "notificationSettings": dict(self.notification_settings),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
        if self.last_billing_date is not None:
            item["lastBillingDate"] = self.last_billing_date
        if self.last_billing_amount is not None:
            item["lastBillingAmount"] = self.last_billing_amount
        return item


def validate_status(status: Any) -> str:
    if status not in USER_STATUSES:
        raise ValidationError(f"Invalid status '{status}'; expected one of {', '.join(USER_STATUSES)}")
    return status


def validate_billing_plan(plan: Any) -> str:
    if plan not in BILLING_PLANS:
        raise ValidationError(f"Invalid billing plan '{plan}'; expected one of {', '.join(BILLING_PLANS)}")
    return plan


def validate_notification_settings(settings: Any, partial: bool = False) -> Dict[str, bool]:
    """Check a settings mapping; a full mapping must name all three channels."""
    if not isinstance(settings, dict):
        raise ValidationError("notification settings must be a mapping")
    unknown = set(settings) - set(NOTIFICATION_CHANNELS)
    if unknown:
        raise ValidationError(f"Unknown notification channels: {', '.join(sorted(unknown))}")
    for channel, enabled in settings.items():
        if not isinstance(enabled, bool):
            raise ValidationError(f"Notification setting '{channel}' must be a boolean")
    if not partial:
        missing = set(NOTIFICATION_CHANNELS) - set(settings)
        if missing:
            raise ValidationError(f"Missing notification channels: {', '.join(sorted(missing))}")
    return dict(settings)


def _validate_value(name: str, value: Any) -> Any:
    if name == "status":
        return validate_status(value)
    if name == "billing_plan":
        return validate_billing_plan(value)
    if name == "notification_settings":
        return validate_notification_settings(value)
    if name in ("email", "name"):
        if not isinstance(value, str) or not value:
            raise ValidationError(f"'{name}' must be a non-empty string")
        return value
    if name == "last_billing_date":
        if value is not None and not isinstance(value, str):
            raise ValidationError("'last_billing_date' must be a date string")
        return value
    if name == "last_billing_amount":
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float, Decimal))):
            raise ValidationError("'last_billing_amount' must be numeric")
        return value
    return value


def _field_name(key: str) -> str:
    if key in FIELD_ATTRIBUTES:
        return key
    if key in ATTRIBUTE_FIELDS:
        return ATTRIBUTE_FIELDS[key]
    raise ValidationError(f"Unknown user field: {key}")


def validate_updates(updates: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a partial update against the user schema.

    Accepts Python (snake_case) or stored (camelCase) field names and returns
    a mapping keyed by stored attribute name.
    """
    if not isinstance(updates, dict):
        raise ValidationError("updates must be a mapping of field name to value")

    attributes = {}
    for key, value in updates.items():
        name = _field_name(key)
        if name in READ_ONLY_FIELDS:
            raise ValidationError(f"Field '{name}' cannot be updated")
        attributes[FIELD_ATTRIBUTES[name]] = _validate_value(name, value)
    return attributes


def build_new_user(fields: Dict[str, Any], user_id: str, now: datetime) -> User:
    """Apply defaults to a partial user and stamp server-assigned timestamps."""
    if not isinstance(fields, dict):
        raise ValidationError("user data must be a mapping")

    values = {}
    for key, value in fields.items():
        name = _field_name(key)
        if name in ("created_at", "updated_at"):
            raise ValidationError(f"Field '{name}' is server-assigned")
        if name == "id":
            continue
        if name == "notification_settings":
            # Missing channels fall back to their defaults on create
            values[name] = validate_notification_settings(value, partial=True)
            continue
        values[name] = _validate_value(name, value)

    for required in ("email", "name"):
        if required not in values:
            raise ValidationError(f"Field '{required}' is required")

    settings = dict(DEFAULT_NOTIFICATION_SETTINGS)
    if "notification_settings" in values:
        settings.update(values.pop("notification_settings"))

    timestamp = now.isoformat()
    return User(
        id=user_id,
        notification_settings=settings,
        created_at=timestamp,
        updated_at=timestamp,
        **values,
    )
