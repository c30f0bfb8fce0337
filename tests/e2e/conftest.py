"""Fixtures for end-to-end tests against a LocalStack deployment."""

import base64

import boto3
import pytest
from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from e2e_api_client import E2EAPIClient

logger = Logger(service="e2e", UTC=True)

USERS_TABLE_NAME = "trip-sharing-users-snd"
ENDPOINT_BASE_URL = "http://localhost:4566"
STAGE = "snd"

E2E_USER_ID = "e2e-user"


@pytest.fixture(scope="session")
def api_details():
    """Get API Gateway details from LocalStack"""
    try:
        apigateway = boto3.client("apigateway", endpoint_url=ENDPOINT_BASE_URL)

        apis = apigateway.get_rest_apis()
        api = next(api for api in apis["items"] if "trip-sharing" in api["name"])
        api_id = api["id"]

        endpoint = f"{ENDPOINT_BASE_URL}/restapis/{api_id}/{STAGE}/_user_request_"

        return {"api_id": api_id, "endpoint": endpoint, "stage": STAGE}
    except Exception as e:
        logger.warning("Could not get API details from LocalStack", extra={"error": str(e)})
        pytest.skip(f"Could not get API details from LocalStack: {e}")


@pytest.fixture(scope="session")
def api_headers():
    return {"Content-Type": "application/json"}


@pytest.fixture
def api_client(api_details, api_headers):
    """HTTP client wrapper for E2E API testing"""
    return E2EAPIClient(api_details["endpoint"], api_headers)


@pytest.fixture(scope="session")
def e2e_user(api_details):
    """Register the test user in the users table owned by the auth service."""
    users = boto3.resource("dynamodb", endpoint_url=ENDPOINT_BASE_URL).Table(USERS_TABLE_NAME)

    try:
        users.put_item(Item={"user_id": E2E_USER_ID, "name": "E2E User"})
    except ClientError as err:
        pytest.skip(f"Users table is not available: {err}")

    return E2E_USER_ID


@pytest.fixture
def created_trips(api_client):
    """Collects trip ids created by a test and deletes the survivors afterwards."""
    trip_ids: list[str] = []
    yield trip_ids

    for trip_id in trip_ids:
        response = api_client.delete(f"/trips/{trip_id}")
        if response.status_code not in (200, 404):
            logger.error(
                "Failed to cleanup trip",
                extra={"trip_id": trip_id, "status": response.status_code},
            )


SAMPLE_JPEG_BASE64 = "/9j/4AAQSkZJRgABAQEAYABgAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8UHRofHh0aHBwgJC4nICIsIxwcKDcpLDAxNDQ0Hyc5PTgyPC4zNDL/2wBDAQkJCQwLDBgNDRgyIRwhMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjIyMjL/wAARCAABAAEDASIAAhEBAxEB/8QAFQABAQAAAAAAAAAAAAAAAAAAAAv/xAAUEAEAAAAAAAAAAAAAAAAAAAAA/8VAFQEBAQAAAAAAAAAAAAAAAAAAAAX/xAAUEQEAAAAAAAAAAAAAAAAAAAAA/9oADAMBAAIRAxEAPwCwAA8A/9k="


@pytest.fixture
def sample_jpeg() -> bytes:
    return base64.b64decode(SAMPLE_JPEG_BASE64)
