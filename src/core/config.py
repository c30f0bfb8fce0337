"""Runtime configuration resolved from the Lambda environment."""

from os import environ

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import (
    DEFAULT_ALLOWED_MIME_TYPES,
    DEFAULT_AWS_REGION,
    ENV_ALLOWED_IMAGE_MIME_TYPES,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_BLOB_STORE_CONNECT_TIMEOUT,
    ENV_BLOB_STORE_READ_TIMEOUT,
    ENV_IMAGE_PUBLIC_BASE_URL,
    ENV_MAX_UPLOAD_BYTES,
    ENV_TRIP_IMAGES_BUCKET_NAME,
    ENV_TRIPS_TABLE_NAME,
    ENV_USERS_TABLE_NAME,
    MAX_FILE_SIZE,
)


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str = DEFAULT_AWS_REGION
    endpoint_url: str | None = None

    images_bucket: str = Field(..., min_length=1)
    trips_table: str = Field(..., min_length=1)
    users_table: str = Field(..., min_length=1)

    public_base_url: str | None = None
    max_upload_bytes: int = Field(MAX_FILE_SIZE, gt=0)
    allowed_mime_types: frozenset[str] = DEFAULT_ALLOWED_MIME_TYPES

    connect_timeout: float = Field(5.0, gt=0)
    read_timeout: float = Field(30.0, gt=0)

    @field_validator("allowed_mime_types", mode="before")
    @classmethod
    def split_mime_types(cls, value: object) -> object:
        if isinstance(value, str):
            return frozenset(part.strip().lower() for part in value.split(",") if part.strip())
        return value

    @field_validator("public_base_url", "endpoint_url")
    @classmethod
    def strip_trailing_slash(cls, value: str | None) -> str | None:
        if not value:
            return None
        return value.rstrip("/")


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config, for tests only."""
    global _cached_config
    _cached_config = None


def _require(name: str) -> str:
    value = environ.get(name)
    if not value:
        raise RuntimeError(f"{name} environment variable is not set")
    return value


def get_config() -> Config:
    """Build the configuration once per execution environment."""
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get(ENV_AWS_REGION, DEFAULT_AWS_REGION),
        endpoint_url=environ.get(ENV_AWS_ENDPOINT_URL),
        images_bucket=_require(ENV_TRIP_IMAGES_BUCKET_NAME),
        trips_table=_require(ENV_TRIPS_TABLE_NAME),
        users_table=_require(ENV_USERS_TABLE_NAME),
        public_base_url=environ.get(ENV_IMAGE_PUBLIC_BASE_URL),
        max_upload_bytes=int(environ.get(ENV_MAX_UPLOAD_BYTES, str(MAX_FILE_SIZE))),
        allowed_mime_types=environ.get(
            ENV_ALLOWED_IMAGE_MIME_TYPES, ",".join(sorted(DEFAULT_ALLOWED_MIME_TYPES))
        ),
        connect_timeout=float(environ.get(ENV_BLOB_STORE_CONNECT_TIMEOUT, "5")),
        read_timeout=float(environ.get(ENV_BLOB_STORE_READ_TIMEOUT, "30")),
    )
    return _cached_config
