"""Thin DynamoDB adapter wrapping boto3 table operations."""

from typing import Any, Protocol, cast

import boto3

from core.config import Config, get_config


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def query(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Repository-facing adapter protocol."""

    table_name: str

    def put_item(
        self, *, item: dict[str, Any], condition_expression: str | None = None
    ) -> dict[str, Any]: ...
    def get_item(self, *, key: dict[str, Any], consistent_read: bool = False) -> dict[str, Any]: ...
    def query(self, **kwargs: Any) -> dict[str, Any]: ...
    def transact_write(self, *, items: list[dict[str, Any]]) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 DynamoDB resource for a single table
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, table_name: str, config: Config | None = None) -> None:
        """Initialize DynamoDB table from injected configuration."""
        if not table_name:
            raise RuntimeError("DynamoDB table name is not configured")

        config = config or get_config()

        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=config.endpoint_url,
            region_name=config.aws_region,
        )

        self.table_name = table_name
        self.table: DynamoDBTable = cast(
            DynamoDBTable,
            dynamodb.Table(table_name),
        )
        # The resource client serializes attribute values itself
        self._client = dynamodb.meta.client

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """Insert item into DynamoDB.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Item": item}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.put_item(**kwargs)

    def get_item(self, *, key: dict[str, Any], consistent_read: bool = False) -> dict[str, Any]:
        """Retrieve item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.get_item(Key=key, ConsistentRead=consistent_read)

    def query(self, **kwargs: Any) -> dict[str, Any]:
        """Execute DynamoDB query.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.query(**kwargs)

    def transact_write(self, *, items: list[dict[str, Any]]) -> dict[str, Any]:
        """Execute a TransactWriteItems call against this table.

        Each entry is `{"Put" | "Update" | "Delete" | "ConditionCheck": {...}}`
        written with plain Python values; the table name is filled in.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.transact_write_items(
            TransactItems=[self._with_table_name(entry) for entry in items]
        )

    def _with_table_name(self, entry: dict[str, Any]) -> dict[str, Any]:
        return {
            operation: {"TableName": self.table_name, **params}
            for operation, params in entry.items()
        }
