"""
Business Logic Services

Services contain business logic and orchestrate repository calls.
"""

from .billing_service import BillingService, BillingResult, calculate_billing
from .notification_service import NotificationService, NotificationOverrides
from .admin_service import AdminService

__all__ = [
    "BillingService",
    "BillingResult",
    "calculate_billing",
    "NotificationService",
    "NotificationOverrides",
    "AdminService",
]
