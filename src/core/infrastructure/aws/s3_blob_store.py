"""S3-backed implementation of BlobStore."""

from urllib.parse import quote

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.config import Config, get_config
from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import StoreRejectedError, StoreUnavailableError
from core.repositories.blob_store import BlobStore
from core.utils.constants import get_max_file_size_mb

logger = Logger(UTC=True)

# S3 error codes that mean "this payload will never be accepted", as opposed
# to transport, credential or throttling failures.
REJECTED_ERROR_CODES = frozenset(
    {
        "EntityTooLarge",
        "EntityTooSmall",
        "InvalidArgument",
        "InvalidRequest",
        "InvalidDigest",
        "KeyTooLongError",
        "MetadataTooLarge",
    }
)


class S3BlobStore(BlobStore):
    """Blob store backed by Amazon S3."""

    def __init__(
        self,
        adapter: S3AdapterProtocol | None = None,
        config: Config | None = None,
    ) -> None:
        """Create the store; configuration is injected, never read inside `put`."""
        self._config = config or get_config()
        self._s3: S3AdapterProtocol = adapter or S3Adapter(self._config)

    def put(self, *, key: str, body: bytes, content_type: str) -> str:
        """Upload bytes to S3 and return the public URL of the object."""
        self._check_limits(key=key, body=body, content_type=content_type)

        logger.debug(
            "Uploading object",
            extra={"key": key, "size": len(body), "content_type": content_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=body,
                content_type=content_type,
                metadata={},
            )

        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            logger.error("S3 upload failed", extra={"key": key, "s3_error_code": code})

            if code in REJECTED_ERROR_CODES:
                raise StoreRejectedError(
                    message="The image was rejected by storage",
                    details={"key": key},
                ) from exc

            raise StoreUnavailableError(
                message="Image storage is unavailable at this time",
                details={"key": key},
            ) from exc

        except BotoCoreError as exc:
            # Connection failures and connect/read timeouts
            logger.error(
                "S3 transport failure",
                extra={"key": key, "error_type": type(exc).__name__},
            )
            raise StoreUnavailableError(
                message="Image storage is unavailable at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading object")
            raise StoreUnavailableError(
                message="Image storage is unavailable at this time",
                details={"key": key},
            ) from exc

        location = self.location_for(key)
        logger.info("Object uploaded successfully", extra={"key": key})
        return location

    def location_for(self, key: str) -> str:
        """Return the resolvable URL for an object key."""
        quoted = quote(key, safe="/")

        if self._config.public_base_url:
            return f"{self._config.public_base_url}/{quoted}"

        if self._config.endpoint_url:
            return f"{self._config.endpoint_url}/{self._s3.bucket}/{quoted}"

        return f"https://{self._s3.bucket}.s3.{self._config.aws_region}.amazonaws.com/{quoted}"

    def _check_limits(self, *, key: str, body: bytes, content_type: str) -> None:
        if content_type.lower() not in self._config.allowed_mime_types:
            logger.warning(
                "Rejected content type",
                extra={"key": key, "content_type": content_type},
            )
            raise StoreRejectedError(
                message="Unsupported image type",
                details={
                    "content_type": content_type,
                    "allowed": sorted(self._config.allowed_mime_types),
                },
            )

        if len(body) > self._config.max_upload_bytes:
            logger.warning(
                "Rejected oversized payload",
                extra={"key": key, "size": len(body)},
            )
            raise StoreRejectedError(
                message=(
                    f"File size exceeds {get_max_file_size_mb(self._config.max_upload_bytes)}MB limit"
                ),
                details={"size": len(body), "max_size": self._config.max_upload_bytes},
            )
