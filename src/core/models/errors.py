"""Custom exception classes for the trip service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_STORE_REJECTED,
    ERROR_CODE_STORE_UNAVAILABLE,
    ERROR_CODE_TRIP_CONFLICT,
    ERROR_CODE_TRIP_NOT_FOUND,
    ERROR_CODE_UPLOAD_FAILED,
    ERROR_CODE_VALIDATION_FAILED,
)


class TripServiceError(Exception):
    """
    Base exception for all trip service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(TripServiceError):
    """Raised when request input is missing or malformed."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class NotFoundError(TripServiceError):
    """Raised when a referenced trip does not exist."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_TRIP_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConflictError(TripServiceError):
    """Raised when the store rejects a write because the trip changed underneath it."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_TRIP_CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreUnavailableError(TripServiceError):
    """Raised when the blob store cannot be reached or refuses our credentials."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreRejectedError(TripServiceError):
    """Raised when the blob store refuses the payload (type or size)."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_STORE_REJECTED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class UploadFailedError(TripServiceError):
    """Raised when an image attach fails in the store or persistence step."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class PersistenceError(TripServiceError):
    """Raised when a DynamoDB operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_DYNAMODB,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
