"""DynamoDB implementation of the short link store.

boto3 is synchronous, so every table call is pushed to a worker thread
with ``asyncio.to_thread``. Access counts are incremented with an atomic
``ADD`` update expression and expiry is mirrored into a native DynamoDB TTL
attribute so the table reaps expired items on its own.
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import StorageError
from .base import ShortLinkStoreBase
from .models import ShortLink


AWS_ERRORS = (BotoCoreError, ClientError)

TTL_ATTRIBUTE = "expires_at"


class DynamoDBShortLinkStore(ShortLinkStoreBase):
    """DynamoDB implementation for short link storage operations."""

    backend_name = "dynamodb"

    def __init__(
        self,
        table_name: str,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        timeout_seconds: float = 10,
        logger: Optional[logging.Logger] = None,
        debug: bool = False,
        resource=None,
    ):
        """Initialize DynamoDB table handle.

        Args:
            table_name: Name of the table holding short links
            region: AWS region
            endpoint_url: Optional custom endpoint (e.g. DynamoDB Local)
            timeout_seconds: botocore connect and read timeout
            logger: Optional logger instance
            debug: Log swallowed failures
            resource: Optional boto3 DynamoDB resource to reuse (useful in tests)
        """
        super().__init__(logger=logger, debug=debug)

        self.table_name = table_name
        self.region = region
        self.endpoint_url = endpoint_url

        if resource is None:
            resource_kwargs: Dict[str, Any] = {
                "region_name": region,
                "config": BotoConfig(
                    connect_timeout=timeout_seconds,
                    read_timeout=timeout_seconds,
                    retries={"max_attempts": 3},
                ),
            }
            if endpoint_url:
                # DynamoDB Local accepts any static credentials
                resource_kwargs.update(
                    endpoint_url=endpoint_url,
                    aws_access_key_id="dummy",
                    aws_secret_access_key="dummy",
                )
                self.logger.info(f"Using custom DynamoDB endpoint: {endpoint_url}")
            resource = boto3.resource("dynamodb", **resource_kwargs)

        self._resource = resource
        self._table = resource.Table(table_name)

    async def ensure_tables(self) -> None:
        """Create the table with TTL on expires_at if it doesn't exist."""
        client = self._resource.meta.client
        try:
            await asyncio.to_thread(client.describe_table, TableName=self.table_name)
            self.logger.info(f"Connected to DynamoDB table: {self.table_name}")
            return
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != "ResourceNotFoundException":
                raise StorageError(f"failed to describe table: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"failed to describe table: {e}") from e

        self.logger.info(f"Table {self.table_name} doesn't exist, creating...")
        try:
            await asyncio.to_thread(
                client.create_table,
                TableName=self.table_name,
                KeySchema=[{"AttributeName": "id", "KeyType": "HASH"}],
                AttributeDefinitions=[{"AttributeName": "id", "AttributeType": "S"}],
                BillingMode="PAY_PER_REQUEST",
            )
            waiter = client.get_waiter("table_exists")
            await asyncio.to_thread(waiter.wait, TableName=self.table_name)
            await asyncio.to_thread(
                client.update_time_to_live,
                TableName=self.table_name,
                TimeToLiveSpecification={"Enabled": True, "AttributeName": TTL_ATTRIBUTE},
            )
        except AWS_ERRORS as e:
            raise StorageError(f"failed to create table: {e}") from e

        self.logger.info(f"Table {self.table_name} created successfully")

    async def put(self, key: str, target_url: str, expires_at: Optional[int] = None) -> ShortLink:
        link = self._new_link(key, target_url, expires_at)
        try:
            await asyncio.to_thread(self._table.put_item, Item=link.to_item())
        except AWS_ERRORS as e:
            raise StorageError(f"failed to put item: {e}") from e

        self.logger.debug(f"Stored short link: {key} -> {target_url}")
        return link

    async def put_if_absent(
        self,
        key: str,
        target_url: str,
        expires_at: Optional[int] = None,
    ) -> Optional[ShortLink]:
        link = self._new_link(key, target_url, expires_at)
        try:
            await asyncio.to_thread(
                self._table.put_item,
                Item=link.to_item(),
                ConditionExpression="attribute_not_exists(id)",
            )
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                self.logger.warning(f"Short key already exists: {key}")
                return None
            raise StorageError(f"failed to put item: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"failed to put item: {e}") from e

        self.logger.debug(f"Stored short link: {key} -> {target_url}")
        return link

    async def delete(self, key: str) -> None:
        try:
            await asyncio.to_thread(self._table.delete_item, Key={"id": key})
        except AWS_ERRORS as e:
            raise StorageError(f"failed to delete item: {e}") from e

    async def _fetch(self, key: str) -> Optional[Mapping[str, Any]]:
        try:
            result = await asyncio.to_thread(self._table.get_item, Key={"id": key})
        except AWS_ERRORS as e:
            raise StorageError(f"failed to get item: {e}") from e

        return result.get("Item")

    async def _increment_access_count(self, key: str) -> None:
        await asyncio.to_thread(
            self._table.update_item,
            Key={"id": key},
            UpdateExpression="ADD access_count :one",
            ExpressionAttributeValues={":one": 1},
        )

    async def _scan_items(self) -> List[Mapping[str, Any]]:
        items: List[Mapping[str, Any]] = []
        scan_kwargs: Dict[str, Any] = {}
        try:
            while True:
                result = await asyncio.to_thread(self._table.scan, **scan_kwargs)
                items.extend(result.get("Items", []))
                last_key = result.get("LastEvaluatedKey")
                if not last_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_key
        except AWS_ERRORS as e:
            raise StorageError(f"failed to scan table: {e}") from e

        return items

    async def health_check(self) -> bool:
        """Check that the table is reachable.

        Returns:
            True if healthy, False otherwise
        """
        try:
            await asyncio.to_thread(self._table.load)
            return True
        except AWS_ERRORS as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await asyncio.to_thread(self._resource.meta.client.close)

    def describe(self) -> Dict[str, Any]:
        return {
            **super().describe(),
            "table": self.table_name,
            "region": self.region,
            "endpoint": self.endpoint_url,
        }
