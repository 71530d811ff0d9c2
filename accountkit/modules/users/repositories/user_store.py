"""
User Store

Key-value persistence for user items in DynamoDB, keyed by id with an
email global secondary index.
"""
import asyncio
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Key
from botocore.exceptions import BotoCoreError, ClientError

from accountkit.modules import aws
from accountkit.modules.users.domain.errors import AlreadyExistsError, StorageError, UserNotFoundError
from accountkit.modules.users.domain.user import utc_now

logger = logging.getLogger("accountkit.users.store")


def _to_dynamo(value: Any) -> Any:
    """Convert floats (nested too) to Decimal for the DynamoDB number type."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value


class UserStore:
    """Store for user items."""

    def __init__(self, table: Any = None, email_index: Optional[str] = None):
        self._table = table
        self.email_index = email_index or aws.USERS_EMAIL_INDEX

    @property
    def table(self) -> Any:
        return self._table if self._table is not None else aws.get_users_table()

    async def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get user item by id, None when absent."""
        try:
            result = await asyncio.to_thread(self.table.get_item, Key={"id": user_id})
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to get user {user_id}: {e}") from e
        return result.get("Item")

    async def query_by_email(self, email: str) -> List[Dict[str, Any]]:
        """Query user items by email through the secondary index."""
        try:
            result = await asyncio.to_thread(
                self.table.query,
                IndexName=self.email_index,
                KeyConditionExpression=Key("email").eq(email),
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to query users by email: {e}") from e
        return result.get("Items", [])

    async def put(self, item: Dict[str, Any], overwrite: bool = False) -> None:
        """
        Write a whole user item.

        Unless ``overwrite`` is set the write is conditional on the id being
        unused, and a taken id raises AlreadyExistsError.
        """
        kwargs = {"Item": _to_dynamo(item)}
        if not overwrite:
            kwargs["ConditionExpression"] = "attribute_not_exists(id)"
        try:
            await asyncio.to_thread(self.table.put_item, **kwargs)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise AlreadyExistsError(item.get("id")) from e
            raise StorageError(f"Failed to put user {item.get('id')}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to put user {item.get('id')}: {e}") from e

    async def partial_update(self, user_id: str, fields: Dict[str, Any]) -> bool:
        """
        Set only the supplied attributes and stamp updatedAt.

        An empty fieldset performs no write and returns False. The update is
        conditional on the item existing so a missing id never creates a
        partial record.
        """
        if not fields:
            return False

        set_clauses = []
        names = {"#updatedAt": "updatedAt"}
        values = {":updatedAt": utc_now().isoformat()}

        for index, (attribute, value) in enumerate(fields.items()):
            set_clauses.append(f"#attr{index} = :val{index}")
            names[f"#attr{index}"] = attribute
            values[f":val{index}"] = _to_dynamo(value)
        set_clauses.append("#updatedAt = :updatedAt")

        try:
            await asyncio.to_thread(
                self.table.update_item,
                Key={"id": user_id},
                UpdateExpression=f"SET {', '.join(set_clauses)}",
                ConditionExpression="attribute_exists(id)",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise UserNotFoundError(user_id) from e
            raise StorageError(f"Failed to update user {user_id}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to update user {user_id}: {e}") from e
        return True

    async def delete(self, user_id: str) -> None:
        try:
            await asyncio.to_thread(self.table.delete_item, Key={"id": user_id})
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete user {user_id}: {e}") from e
