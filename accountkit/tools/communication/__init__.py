from .system_email_sender import SystemEmailSender
from .system_sms_sender import SystemSMSSender
from .system_push_sender import SystemPushSender

__all__ = [
    "SystemEmailSender",
    "SystemSMSSender",
    "SystemPushSender",
]
