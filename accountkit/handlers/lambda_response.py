"""
Lambda response wrapping shared by the function handlers.
"""
import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict

from accountkit.modules.aws import connect_to_aws

logger = logging.getLogger("accountkit.handlers")

Operation = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


def run_operation(name: str, operation: Operation, event: Any) -> Dict[str, Any]:
    """Run an entry point for a Lambda event and wrap it as {statusCode, body}."""
    logger.info(f"{name} - Event: {json.dumps(event, default=str)}")

    # Reused across warm invocations
    connect_to_aws()
    result = asyncio.run(operation(event if isinstance(event, dict) else {}))

    return {
        "statusCode": 200 if result.get("status") == "success" else 500,
        "body": json.dumps(result, default=str),
    }
