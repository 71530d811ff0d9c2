import os
import logging
from typing import Any, Dict, Optional

import boto3
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("accountkit.aws")

USERS_TABLE = os.getenv("USERS_TABLE", "users")
USERS_EMAIL_INDEX = os.getenv("USERS_EMAIL_INDEX", "emailIndex")
SMS_TOPIC_ARN = os.getenv("SMS_TOPIC_ARN")
PUSH_TOPIC_ARN = os.getenv("PUSH_TOPIC_ARN")
EMAIL_SENDER = os.getenv("EMAIL_SENDER", "noreply@example.com")
AWS_REGION = os.getenv("AWS_REGION")
AWS_ENDPOINT_URL = os.getenv("AWS_ENDPOINT_URL")

# Shared clients, created once per process
_resources: Dict[str, Any] = {}


def connect_to_aws(region: Optional[str] = None, endpoint_url: Optional[str] = None) -> None:
    """Create the shared DynamoDB table, SNS and SES clients (idempotent)."""
    if _resources:
        return

    session_kwargs = {}
    if region or AWS_REGION:
        session_kwargs["region_name"] = region or AWS_REGION
    session = boto3.Session(**session_kwargs)

    client_kwargs = {}
    if endpoint_url or AWS_ENDPOINT_URL:
        client_kwargs["endpoint_url"] = endpoint_url or AWS_ENDPOINT_URL

    dynamodb = session.resource("dynamodb", **client_kwargs)
    _resources["session"] = session
    _resources["users_table"] = dynamodb.Table(USERS_TABLE)
    _resources["sns"] = session.client("sns", **client_kwargs)
    _resources["ses"] = session.client("ses", **client_kwargs)

    logger.info(f"AWS clients initialized: table={USERS_TABLE}, region={session.region_name}")


def disconnect_from_aws() -> None:
    _resources.clear()


def _get(name: str) -> Any:
    try:
        return _resources[name]
    except KeyError:
        raise RuntimeError("AWS clients not initialized; call connect_to_aws() first")


def get_users_table() -> Any:
    return _get("users_table")


def get_sns_client() -> Any:
    return _get("sns")


def get_ses_client() -> Any:
    return _get("ses")
