"""
Lambda handler responsible for attaching an image to a trip.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.errors import TripServiceError
from core.models.trip import ImageView
from core.utils.constants import (
    METRICS_NAMESPACE,
    UPLOAD_CAPTION_FIELD,
    UPLOAD_FILE_FIELD,
    UPLOAD_TAG_FIELDS,
)
from core.utils.decorators import api_gateway_handler
from core.utils.multipart import MultipartForm, decode_body, get_header, parse_multipart
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request, validation_error_response

from .models import UploadImageRequest, UploadImageResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE)


def read_upload_form(event: dict[str, Any], service: UploadService, trip_id: str) -> MultipartForm:
    """Parse the upload form; an unknown trip is reported ahead of an unreadable body."""
    try:
        return parse_multipart(decode_body(event), get_header(event, "Content-Type"))
    except TripServiceError:
        service.ensure_trip_exists(trip_id)
        raise


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle image upload requests.

    The body is a multipart/form-data form with a single `file` part plus
    `caption` and optional `tag1`..`tag3` text fields. API Gateway delivers
    it base64-encoded when binary media types are enabled.

    Expected API Gateway event structure:
    {
        "pathParameters": {"trip_id": "trip_..."},
        "headers": {"Content-Type": "multipart/form-data; boundary=..."},
        "body": "...",
        "isBase64Encoded": true
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload form
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the asset location
    """
    request_id = getattr(context, "aws_request_id", None)

    logger.info(
        "Received image upload request",
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
        request = validate_request(UploadImageRequest, {"trip_id": path_params.get("trip_id")})
    except ValidationError as exc:
        logger.error(
            "Request validation failed",
            extra={"errors": exc.errors()},
        )
        return validation_error_response(exc, message="Invalid request params", request_id=request_id)

    try:
        service = UploadService()
        form = read_upload_form(event, service, request.trip_id)

        upload = form.files.get(UPLOAD_FILE_FIELD)

        image = service.attach_image(
            trip_id=request.trip_id,
            file_data=upload.data if upload else None,
            file_name=upload.file_name if upload else None,
            mime_type=upload.content_type if upload else None,
            caption=form.fields.get(UPLOAD_CAPTION_FIELD),
            tags=[form.fields.get(name) for name in UPLOAD_TAG_FIELDS],
        )

    except TripServiceError as exc:
        logger.exception(
            "Image upload failed",
            extra={"trip_id": request.trip_id, "error_code": exc.error_code},
        )
        return ResponseBuilder.from_error(exc, request_id=request_id)

    metrics.add_metric(name="ImagesAttached", unit=MetricUnit.Count, value=1)

    response = UploadImageResponse(
        message=f"File uploaded successfully. URL: {image.location}",
        location=image.location,
        image=ImageView.from_image(image),
    )

    return ResponseBuilder.created(response.model_dump(by_alias=True))
