"""
System SMS Sender - Queues SMS notifications on the SMS relay topic (SNS).
The relay resolves the phone number from the userId attribute.
"""
import asyncio
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from botocore.exceptions import BotoCoreError, ClientError

from accountkit.modules import aws
from accountkit.modules.users.domain.errors import TransportError

logger = logging.getLogger("accountkit.tools.system_sms_sender")


def user_attributes(user_id: str) -> Dict[str, Any]:
    return {"userId": {"DataType": "String", "StringValue": user_id}}


class SystemSMSSender:
    """
    Publishes SMS requests to SMS_TOPIC_ARN through the shared SNS client.
    """

    channel = "sms"

    def __init__(self, sns_client: Any = None, topic_arn: Optional[str] = None):
        self._client = sns_client
        self.topic_arn = topic_arn or aws.SMS_TOPIC_ARN

    @property
    def client(self) -> Any:
        return self._client if self._client is not None else aws.get_sns_client()

    async def send(self, user_id: str, message: str) -> Dict[str, Any]:
        if not self.topic_arn:
            raise TransportError(self.channel, "SMS topic not configured (SMS_TOPIC_ARN)")

        try:
            response = await asyncio.to_thread(
                self.client.publish,
                TopicArn=self.topic_arn,
                Message=message,
                MessageAttributes=user_attributes(user_id),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to queue SMS for user {user_id}: {e}")
            raise TransportError(self.channel, str(e)) from e

        logger.info(f"SMS notification queued for user {user_id}")
        return {
            "message_id": response.get("MessageId"),
            "user_id": user_id,
            "message_length": len(message),
            "sent_at": datetime.now(timezone.utc).isoformat(),
            "status": "queued",
            "method": "sns",
        }
