"""
Pytest configuration and fixtures for trip-sharing tests.
Provides environment, AWS mocking, DynamoDB and S3 fixtures with proper cleanup.
"""

import base64
import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("TRIPS_TABLE_NAME", "trip-sharing-trips-test")
os.environ.setdefault("USERS_TABLE_NAME", "trip-sharing-users-test")
os.environ.setdefault("TRIP_IMAGES_BUCKET_NAME", "trip-sharing-images-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "trip-sharing")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "TripSharing")

from core.config import _reset_config  # noqa: E402

TRIPS_TABLE = os.environ["TRIPS_TABLE_NAME"]
USERS_TABLE = os.environ["USERS_TABLE_NAME"]
IMAGES_BUCKET = os.environ["TRIP_IMAGES_BUCKET_NAME"]


@pytest.fixture(autouse=True)
def reset_config():
    """Every test builds its configuration from the current environment."""
    _reset_config()
    yield
    _reset_config()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


def _create_trips_table(dynamodb_resource):
    """Helper to create the single trips table with its listing GSI."""
    return dynamodb_resource.create_table(
        TableName=TRIPS_TABLE,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[
            {"AttributeName": "trip_id", "KeyType": "HASH"},
            {"AttributeName": "sort_key", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "trip_id", "AttributeType": "S"},
            {"AttributeName": "sort_key", "AttributeType": "S"},
            {"AttributeName": "entity_type", "AttributeType": "S"},
            {"AttributeName": "created_at", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "entity-created-index",
                "KeySchema": [
                    {"AttributeName": "entity_type", "KeyType": "HASH"},
                    {"AttributeName": "created_at", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )


@pytest.fixture(scope="function")
def trips_table(dynamodb_resource):
    """
    Create the trips table for testing.

    moto discards the table when the mock context exits.
    """
    table = _create_trips_table(dynamodb_resource)
    table.wait_until_exists()
    yield table


@pytest.fixture(scope="function")
def users_table(dynamodb_resource):
    table = dynamodb_resource.create_table(
        TableName=USERS_TABLE,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "user_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "user_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    yield table


@pytest.fixture
def create_user(users_table) -> Callable[[str], dict[str, Any]]:
    """
    Helper to register a user in the users table.

    Usage:
        create_user("u1")
    """

    def _create(user_id: str) -> dict[str, Any]:
        item = {"user_id": user_id, "name": f"User {user_id}"}
        users_table.put_item(Item=item)
        return item

    return _create


@pytest.fixture
def trip_rows(trips_table) -> Callable[[str], list[dict[str, Any]]]:
    """
    Helper returning every stored row of a trip partition.

    Usage:
        rows = trip_rows("trip_123")
    """

    def _rows(trip_id: str) -> list[dict[str, Any]]:
        response = trips_table.query(
            KeyConditionExpression="trip_id = :trip_id",
            ExpressionAttributeValues={":trip_id": trip_id},
            ConsistentRead=True,
        )
        items: list[dict[str, Any]] = response.get("Items", [])
        return items

    return _rows


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the image bucket for testing."""
    s3_client.create_bucket(Bucket=IMAGES_BUCKET)
    yield s3_client


@pytest.fixture
def s3_get_object(s3_client) -> Callable[[str], bytes]:
    """
    Helper to get an object from S3.

    Usage:
        content = s3_get_object("trips/trip_1/img_1.jpg")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_client.get_object(Bucket=IMAGES_BUCKET, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_keys(s3_client) -> Callable[[], list[str]]:
    """Helper listing every key in the image bucket."""

    def _keys() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=IMAGES_BUCKET)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _keys


@pytest.fixture
def aws_env(trips_table, users_table, s3_bucket):
    """All AWS resources the service needs, inside one moto context."""
    return {"trips_table": trips_table, "users_table": users_table, "s3": s3_bucket}


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )


def build_multipart(
    *,
    fields: dict[str, str] | None = None,
    file: tuple[str, str, bytes] | None = None,
    boundary: str = "test-boundary-7MA4YWxk",
) -> tuple[bytes, str]:
    """
    Build a multipart/form-data body.

    Args:
        fields: Text fields
        file: (file_name, content_type, data) for the `file` part

    Returns:
        (body bytes, Content-Type header value)
    """
    parts: list[bytes] = []

    for name, value in (fields or {}).items():
        parts.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
            f"{value}\r\n".encode()
        )

    if file is not None:
        file_name, content_type, data = file
        parts.append(
            f"--{boundary}\r\n"
            f'Content-Disposition: form-data; name="file"; filename="{file_name}"\r\n'
            f"Content-Type: {content_type}\r\n\r\n".encode()
            + data
            + b"\r\n"
        )

    body = b"".join(parts) + f"--{boundary}--\r\n".encode()
    return body, f"multipart/form-data; boundary={boundary}"


@pytest.fixture
def multipart_body() -> Callable[..., tuple[bytes, str]]:
    return build_multipart
