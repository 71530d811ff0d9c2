"""
Tests for the DynamoDB user store.
"""
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from accountkit.modules.users.domain.errors import AlreadyExistsError, StorageError, UserNotFoundError
from accountkit.modules.users.repositories.user_store import UserStore


def client_error(code, operation="UpdateItem"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


@pytest.fixture
def table():
    return MagicMock()


@pytest.fixture
def user_store(table):
    return UserStore(table=table, email_index="emailIndex")


@pytest.mark.asyncio
async def test_get_returns_item(user_store, table):
    table.get_item.return_value = {"Item": {"id": "u1", "email": "a@example.com"}}

    item = await user_store.get("u1")

    assert item == {"id": "u1", "email": "a@example.com"}
    table.get_item.assert_called_once_with(Key={"id": "u1"})


@pytest.mark.asyncio
async def test_get_missing_returns_none(user_store, table):
    table.get_item.return_value = {}

    assert await user_store.get("missing") is None


@pytest.mark.asyncio
async def test_get_client_error_is_storage_error(user_store, table):
    table.get_item.side_effect = client_error("ProvisionedThroughputExceededException", "GetItem")

    with pytest.raises(StorageError):
        await user_store.get("u1")


@pytest.mark.asyncio
async def test_query_by_email_uses_index(user_store, table):
    table.query.return_value = {"Items": [{"id": "u1"}]}

    items = await user_store.query_by_email("a@example.com")

    assert items == [{"id": "u1"}]
    assert table.query.call_args.kwargs["IndexName"] == "emailIndex"


@pytest.mark.asyncio
async def test_partial_update_empty_fieldset_is_noop(user_store, table):
    written = await user_store.partial_update("u1", {})

    assert written is False
    table.update_item.assert_not_called()


@pytest.mark.asyncio
async def test_partial_update_sets_only_supplied_fields_and_stamps_updated_at(user_store, table):
    written = await user_store.partial_update("u1", {"status": "suspended"})

    assert written is True
    kwargs = table.update_item.call_args.kwargs
    assert kwargs["Key"] == {"id": "u1"}
    assert kwargs["ConditionExpression"] == "attribute_exists(id)"
    assert kwargs["UpdateExpression"] == "SET #attr0 = :val0, #updatedAt = :updatedAt"
    assert kwargs["ExpressionAttributeNames"] == {"#attr0": "status", "#updatedAt": "updatedAt"}
    assert kwargs["ExpressionAttributeValues"][":val0"] == "suspended"
    assert ":updatedAt" in kwargs["ExpressionAttributeValues"]


@pytest.mark.asyncio
async def test_partial_update_converts_floats_to_decimal(user_store, table):
    await user_store.partial_update("u1", {"lastBillingAmount": 10.5})

    values = table.update_item.call_args.kwargs["ExpressionAttributeValues"]
    assert values[":val0"] == Decimal("10.5")


@pytest.mark.asyncio
async def test_partial_update_missing_user(user_store, table):
    table.update_item.side_effect = client_error("ConditionalCheckFailedException")

    with pytest.raises(UserNotFoundError):
        await user_store.partial_update("missing", {"name": "x"})


@pytest.mark.asyncio
async def test_partial_update_failure_is_storage_error(user_store, table):
    table.update_item.side_effect = client_error("InternalServerError")

    with pytest.raises(StorageError):
        await user_store.partial_update("u1", {"name": "x"})


@pytest.mark.asyncio
async def test_put_and_delete(user_store, table):
    await user_store.put({"id": "u1", "lastBillingAmount": 1.25, "notificationSettings": {"email": True}})
    await user_store.delete("u1")

    item = table.put_item.call_args.kwargs["Item"]
    assert item["lastBillingAmount"] == Decimal("1.25")
    assert item["notificationSettings"] == {"email": True}
    table.delete_item.assert_called_once_with(Key={"id": "u1"})


@pytest.mark.asyncio
async def test_put_is_conditional_on_new_id(user_store, table):
    await user_store.put({"id": "u1", "email": "a@example.com"})

    kwargs = table.put_item.call_args.kwargs
    assert kwargs["ConditionExpression"] == "attribute_not_exists(id)"


@pytest.mark.asyncio
async def test_put_existing_id_is_already_exists(user_store, table):
    table.put_item.side_effect = client_error("ConditionalCheckFailedException", "PutItem")

    with pytest.raises(AlreadyExistsError) as exc_info:
        await user_store.put({"id": "u1", "email": "a@example.com"})
    assert exc_info.value.user_id == "u1"


@pytest.mark.asyncio
async def test_put_overwrite_skips_condition(user_store, table):
    await user_store.put({"id": "u1"}, overwrite=True)

    assert "ConditionExpression" not in table.put_item.call_args.kwargs


@pytest.mark.asyncio
async def test_put_failure_is_storage_error(user_store, table):
    table.put_item.side_effect = client_error("ProvisionedThroughputExceededException", "PutItem")

    with pytest.raises(StorageError):
        await user_store.put({"id": "u1"})


@pytest.mark.asyncio
async def test_delete_failure_is_storage_error(user_store, table):
    table.delete_item.side_effect = client_error("ResourceNotFoundException", "DeleteItem")

    with pytest.raises(StorageError):
        await user_store.delete("u1")


def test_table_requires_connected_clients():
    from accountkit.modules import aws

    aws.disconnect_from_aws()
    with pytest.raises(RuntimeError):
        UserStore().table
