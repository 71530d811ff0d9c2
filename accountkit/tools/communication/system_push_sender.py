"""
System Push Sender - Publishes push notifications to the push relay topic (SNS).
"""
import asyncio
import json
import logging
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from botocore.exceptions import BotoCoreError, ClientError

from accountkit.modules import aws
from accountkit.modules.users.domain.errors import TransportError
from accountkit.tools.communication.system_sms_sender import user_attributes

logger = logging.getLogger("accountkit.tools.system_push_sender")

PUSH_TITLE = "New Notification"


def build_push_payload(message: str) -> str:
    """Per-platform SNS message structure; GCM carries the notification block."""
    return json.dumps({
        "default": message,
        "GCM": json.dumps({
            "notification": {
                "title": PUSH_TITLE,
                "body": message,
            },
        }),
    })


class SystemPushSender:
    """
    Publishes push requests to PUSH_TOPIC_ARN through the shared SNS client.
    """

    channel = "push"

    def __init__(self, sns_client: Any = None, topic_arn: Optional[str] = None):
        self._client = sns_client
        self.topic_arn = topic_arn or aws.PUSH_TOPIC_ARN

    @property
    def client(self) -> Any:
        return self._client if self._client is not None else aws.get_sns_client()

    async def send(self, user_id: str, message: str) -> Dict[str, Any]:
        if not self.topic_arn:
            raise TransportError(self.channel, "Push topic not configured (PUSH_TOPIC_ARN)")

        try:
            response = await asyncio.to_thread(
                self.client.publish,
                TopicArn=self.topic_arn,
                Message=build_push_payload(message),
                MessageStructure="json",
                MessageAttributes=user_attributes(user_id),
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to send push notification for user {user_id}: {e}")
            raise TransportError(self.channel, str(e)) from e

        logger.info(f"Push notification sent for user {user_id}")
        return {
            "message_id": response.get("MessageId"),
            "user_id": user_id,
            "sent_at": datetime.now(timezone.utc).isoformat(),
            "status": "sent",
            "method": "sns",
        }
