import base64
import json
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def create_trip_event() -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/trips",
        "body": json.dumps({"title": "Paris", "userId": "u1"}),
        "headers": {"Content-Type": "application/json"},
    }


@pytest.fixture
def list_trips_event() -> dict[str, Any]:
    return {"httpMethod": "GET", "path": "/trips", "headers": {}}


@pytest.fixture
def get_trip_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/trips/trip_abc123",
        "pathParameters": {"trip_id": "trip_abc123"},
        "headers": {},
    }


@pytest.fixture
def list_trip_images_event() -> dict[str, Any]:
    return {
        "httpMethod": "GET",
        "path": "/trips/trip_abc123/images",
        "pathParameters": {"trip_id": "trip_abc123"},
        "headers": {},
    }


@pytest.fixture
def delete_trip_event() -> dict[str, Any]:
    return {
        "httpMethod": "DELETE",
        "path": "/trips/trip_abc123",
        "pathParameters": {"trip_id": "trip_abc123"},
        "headers": {},
    }


@pytest.fixture
def upload_event(multipart_body, sample_jpeg_binary):
    """Builds an API Gateway upload event with a base64-encoded multipart body."""

    def _event(
        trip_id: str = "trip_abc123",
        *,
        fields: dict[str, str] | None = None,
        file: tuple[str, str, bytes] | None = None,
        include_file: bool = True,
    ) -> dict[str, Any]:
        if include_file and file is None:
            file = ("eiffel.jpg", "image/jpeg", sample_jpeg_binary)

        body, content_type = multipart_body(
            fields={"caption": "Eiffel at dusk"} if fields is None else fields,
            file=file if include_file else None,
        )

        return {
            "httpMethod": "POST",
            "path": f"/trips/{trip_id}",
            "pathParameters": {"trip_id": trip_id},
            "headers": {"content-type": content_type},
            "body": base64.b64encode(body).decode("ascii"),
            "isBase64Encoded": True,
        }

    return _event
