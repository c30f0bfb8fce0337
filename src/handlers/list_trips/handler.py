"""
Lambda handler for listing trips.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import TripServiceError
from core.models.trip import TripView
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .models import ListTripsResponse
from .service import ListTripsService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    List all trips, newest first.

    Returns:
        API Gateway-compatible HTTP response with `{"trips": [...]}`
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received trip list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
        },
    )

    service = ListTripsService()

    try:
        trips = service.list_trips()
    except TripServiceError as exc:
        logger.exception("Listing trips failed", extra={"error_code": exc.error_code})
        return ResponseBuilder.from_error(exc, request_id=request_id)

    response = ListTripsResponse(trips=[TripView.from_trip(trip) for trip in trips])
    return ResponseBuilder.ok(response.model_dump(by_alias=True))
