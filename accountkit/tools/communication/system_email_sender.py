"""
System Email Sender - Sends notification emails from the system address via SES.
"""
from typing import Any, Dict, Optional
from datetime import datetime, timezone
import asyncio
import logging

from botocore.exceptions import BotoCoreError, ClientError

from accountkit.modules import aws
from accountkit.modules.users.domain.errors import TransportError

logger = logging.getLogger("accountkit.tools.system_email")

EMAIL_SUBJECT = "Notification from Your App"


class SystemEmailSender:
    """
    Sends emails from the system address (EMAIL_SENDER) through the shared SES client.
    """

    channel = "email"

    def __init__(self, ses_client: Any = None, sender: Optional[str] = None):
        self._client = ses_client
        self.sender = sender or aws.EMAIL_SENDER

    @property
    def client(self) -> Any:
        return self._client if self._client is not None else aws.get_ses_client()

    @staticmethod
    def format_body(name: str, message: str) -> str:
        return f"Hello {name},\n\n{message}\n\nBest regards,\nYour App Team"

    async def send(self, to: str, name: str, message: str) -> Dict[str, Any]:
        """
        Sends a plain-text email.

        Args:
            to: Recipient email address
            name: Recipient display name used in the greeting
            message: Email body content

        Returns:
            Dict with send status and message details
        """
        try:
            response = await asyncio.to_thread(
                self.client.send_email,
                Source=self.sender,
                Destination={"ToAddresses": [to]},
                Message={
                    "Subject": {"Data": EMAIL_SUBJECT},
                    "Body": {"Text": {"Data": self.format_body(name, message)}},
                },
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            raise TransportError(self.channel, str(e)) from e

        logger.info(f"Email sent to {to}, message_id: {response.get('MessageId')}")
        return {
            "message_id": response.get("MessageId"),
            "from": self.sender,
            "to": to,
            "subject": EMAIL_SUBJECT,
            "sent_at": datetime.now(timezone.utc).isoformat(),
            "status": "sent",
            "method": "ses",
        }
