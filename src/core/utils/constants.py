"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_MISSING_FILE = "MISSING_FILE"
ERROR_CODE_MISSING_CAPTION = "MISSING_CAPTION"
ERROR_CODE_MALFORMED_UPLOAD = "MALFORMED_UPLOAD"
ERROR_CODE_USER_NOT_FOUND = "USER_NOT_FOUND"

# Not Found Errors
ERROR_CODE_TRIP_NOT_FOUND = "TRIP_NOT_FOUND"

# Conflict Errors
ERROR_CODE_TRIP_CONFLICT = "TRIP_CONFLICT"
ERROR_CODE_TRIP_DELETE_CONFLICT = "TRIP_DELETE_CONFLICT"
ERROR_CODE_TRIP_IMAGE_LIMIT_REACHED = "TRIP_IMAGE_LIMIT_REACHED"

# Blob Store Errors
ERROR_CODE_STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
ERROR_CODE_STORE_REJECTED = "STORE_REJECTED"
ERROR_CODE_UPLOAD_FAILED = "UPLOAD_FAILED"
ERROR_CODE_PERSISTENCE_FAILED = "PERSISTENCE_FAILED"

# Persistence / DynamoDB Errors
ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_TRIP_CREATE_FAILED = "TRIP_CREATE_FAILED"
ERROR_CODE_TRIP_FETCH_FAILED = "TRIP_FETCH_FAILED"
ERROR_CODE_TRIP_LIST_FAILED = "TRIP_LIST_FAILED"
ERROR_CODE_TRIP_DELETE_FAILED = "TRIP_DELETE_FAILED"
ERROR_CODE_IMAGE_CREATE_FAILED = "IMAGE_CREATE_FAILED"
ERROR_CODE_USER_LOOKUP_FAILED = "USER_LOOKUP_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 4 * 1024 * 1024  # 4MB in bytes

MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

DEFAULT_ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

UPLOAD_FILE_FIELD = "file"
UPLOAD_CAPTION_FIELD = "caption"
UPLOAD_TAG_FIELDS: Final[tuple[str, ...]] = ("tag1", "tag2", "tag3")


# ============================================================================
# Trip / Image Constraints
# ============================================================================

TITLE_MAX_LENGTH = 200
CAPTION_MAX_LENGTH = 500
TAG_MAX_LENGTH = 50
MAX_TAGS = len(UPLOAD_TAG_FIELDS)
USER_ID_MAX_LENGTH = 128

# A trip row plus its image rows must fit in one DynamoDB transaction (100 items)
MAX_IMAGES_PER_TRIP = 99

TRIP_ID_PREFIX = "trip_"
IMAGE_ID_PREFIX = "img_"
STORAGE_KEY_PREFIX = "trips"


# ============================================================================
# DynamoDB Layout
# ============================================================================

ENTITY_TRIP = "TRIP"
ENTITY_IMAGE = "IMAGE"
TRIP_SORT_KEY = "TRIP"
IMAGE_SORT_KEY_PREFIX = "IMAGE#"
TRIPS_CREATED_INDEX = "entity-created-index"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

METRICS_NAMESPACE = "TripSharing"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_TRIP_IMAGES_BUCKET_NAME = "TRIP_IMAGES_BUCKET_NAME"
ENV_TRIPS_TABLE_NAME = "TRIPS_TABLE_NAME"
ENV_USERS_TABLE_NAME = "USERS_TABLE_NAME"
ENV_IMAGE_PUBLIC_BASE_URL = "IMAGE_PUBLIC_BASE_URL"
ENV_MAX_UPLOAD_BYTES = "MAX_UPLOAD_BYTES"
ENV_ALLOWED_IMAGE_MIME_TYPES = "ALLOWED_IMAGE_MIME_TYPES"
ENV_BLOB_STORE_CONNECT_TIMEOUT = "BLOB_STORE_CONNECT_TIMEOUT"
ENV_BLOB_STORE_READ_TIMEOUT = "BLOB_STORE_READ_TIMEOUT"
DEFAULT_AWS_REGION = "us-east-1"

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb(size_bytes: int = MAX_FILE_SIZE) -> int:
    """Get maximum file size in megabytes."""
    return size_bytes // (1024 * 1024)
