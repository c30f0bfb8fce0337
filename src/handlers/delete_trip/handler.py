"""
Lambda handler responsible for deleting a trip and its images.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import TripServiceError
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request, validation_error_response

from .models import DeleteTripRequest, DeleteTripResponse
from .service import DeleteTripService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle trip deletion requests.

    This function:
    - Extracts the trip identifier from API Gateway path parameters
    - Validates the request
    - Delegates the cascade delete to the service layer
    - Translates domain errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received trip delete request",
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

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            DeleteTripRequest,
            {"trip_id": path_params.get("trip_id")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return validation_error_response(exc, request_id=request_id)

    service = DeleteTripService()

    try:
        deleted = service.delete_trip(request.trip_id)
    except TripServiceError as exc:
        logger.exception(
            "Deletion failed",
            extra={"trip_id": request.trip_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.from_error(exc, request_id=request_id)

    response = DeleteTripResponse(deleted=deleted)
    return ResponseBuilder.ok(response.model_dump())
