"""
Lambda handler responsible for trip creation.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import TripServiceError
from core.models.trip import TripView
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request, validation_error_response

from .models import CreateTripRequest, CreateTripResponse
from .service import CreateTripService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle trip creation requests.

    Expected API Gateway event structure:
    {
        "body": "{\"title\": \"Paris\", \"userId\": \"u1\"}"
    }

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the created trip
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received trip create request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
            "remaining_time_ms": context.get_remaining_time_in_millis()
            if hasattr(context, "get_remaining_time_in_millis")
            else None,
        },
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request("Invalid JSON body", request_id=request_id)

    try:
        request = validate_request(CreateTripRequest, body)
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return validation_error_response(exc, request_id=request_id)

    service = CreateTripService()

    try:
        trip = service.create_trip(title=request.title, user_id=request.user_id)
    except TripServiceError as exc:
        logger.exception(
            "Trip creation failed",
            extra={"user_id": request.user_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.from_error(exc, request_id=request_id)

    response = CreateTripResponse(trip=TripView.from_trip(trip))
    return ResponseBuilder.created(response.model_dump(by_alias=True))
