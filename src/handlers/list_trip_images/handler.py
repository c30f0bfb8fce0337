"""
Lambda handler for listing the images of a trip.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import TripServiceError
from core.models.trip import ImageView
from core.utils.constants import METRICS_NAMESPACE
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request, validation_error_response

from .models import ListTripImagesRequest, ListTripImagesResponse
from .service import ListTripImagesService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    List images attached to a trip, in attach order.

    Returns:
        API Gateway-compatible HTTP response with `{"images": [...]}`
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received trip images request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": request_id,
            "function_name": getattr(context, "function_name", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    try:
        request = validate_request(
            ListTripImagesRequest,
            {"trip_id": path_params.get("trip_id")},
        )
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return validation_error_response(exc, message="Invalid request params", request_id=request_id)

    service = ListTripImagesService()

    try:
        images = service.list_images(request.trip_id)
    except TripServiceError as exc:
        logger.exception(
            "Listing trip images failed",
            extra={"trip_id": request.trip_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.from_error(exc, request_id=request_id)

    response = ListTripImagesResponse(images=[ImageView.from_image(image) for image in images])
    return ResponseBuilder.ok(response.model_dump(by_alias=True))
