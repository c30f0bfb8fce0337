"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import TripServiceError
from core.utils.constants import ERROR_CODE_VALIDATION_FAILED
from core.utils.response import JsonDict, ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

# Messages raised by our own code that are safe to show as-is
CLIENT_SAFE_PREFIXES = ("Invalid", "Missing", "Required", "Trip", "Caption", "File")

GENERIC_CLIENT_MESSAGES: dict[type[Exception], str] = {
    KeyError: "A required field is missing. Please ensure all required fields are provided.",
    TypeError: "The data format is incorrect. Please check the request format.",
    ValueError: "The provided data is invalid. Please check your input and try again.",
}


def client_message(exc: Exception) -> str:
    """Message shown to the caller for a bad-input exception that escaped a handler."""
    text = str(exc)
    if isinstance(exc, ValueError) and text.startswith(CLIENT_SAFE_PREFIXES):
        return text

    for exc_type, message in GENERIC_CLIENT_MESSAGES.items():
        if isinstance(exc, exc_type):
            return message

    return GENERIC_CLIENT_MESSAGES[ValueError]


def _log_failure(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    unexpected: bool = False,
) -> None:
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if unexpected:
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Answers CORS preflight requests without calling the handler, renders
    trip service errors that escape the handler body, and turns anything
    else into a 400 (bad input) or an opaque 500 carrying the request id.

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"trips": []})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except TripServiceError as exc:
            _log_failure(
                "Trip service error escaped handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.from_error(exc, request_id=request_id, cors_origin=cors_origin)

        except (ValueError, KeyError, TypeError) as exc:
            _log_failure(
                "Bad input reached handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                client_message(exc),
                error=ERROR_CODE_VALIDATION_FAILED,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            _log_failure(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                unexpected=True,
            )
            return ResponseBuilder.internal_error(
                "We're experiencing technical difficulties. Please try again in a few moments.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
