"""Request validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.utils.response import JsonDict, ResponseBuilder

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    - internal exception details
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        raw_msg = err.get("msg", "Invalid value")

        # Remove noisy prefixes
        msg = raw_msg.replace("Value error,", "").strip()

        msg_lower = msg.lower()
        if "field required" in msg_lower:
            msg = "This field is required"
        elif "extra inputs" in msg_lower:
            msg = "Unexpected field"
        elif "valid string" in msg_lower:
            msg = "Invalid value type"

        sanitized.append(
            {
                "field": field,
                "message": msg,
            }
        )

    return sanitized


def validate_request(model: type[ModelT], data: Any) -> ModelT:
    """Validate request data against a Pydantic model.

    Args:
        model: Pydantic model class
        data: Input data to validate (usually a decoded JSON body or path params)

    Returns:
        The validated model instance

    Raises:
        pydantic.ValidationError: If the data does not satisfy the model
    """
    return model.model_validate(data)


def validation_error_response(
    exc: ValidationError,
    *,
    message: str = "Invalid request payload",
    request_id: str | None = None,
    cors_origin: str | None = None,
) -> JsonDict:
    """Build the 400 response listing every schema violation."""
    return ResponseBuilder.bad_request(
        message,
        details={"errors": sanitize_validation_errors(list(exc.errors()))},
        request_id=request_id,
        cors_origin=cors_origin,
    )
