"""Business logic for attaching an image to a trip.

The upload is two-phase with no atomic commit across both systems: the bytes
are stored first, then the reference record is persisted. A failure in the
second phase leaves an orphaned asset in the blob store, which is logged and
reported to the caller but never cleaned up or retried.
"""

import uuid
from collections.abc import Sequence

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_trips import DynamoDBTrips
from core.infrastructure.aws.s3_blob_store import S3BlobStore
from core.models.errors import (
    ConflictError,
    NotFoundError,
    StoreRejectedError,
    StoreUnavailableError,
    UploadFailedError,
    ValidationError,
)
from core.models.trip import Image
from core.repositories.blob_store import BlobStore
from core.repositories.trip_repository import TripRepository
from core.utils.constants import (
    CAPTION_MAX_LENGTH,
    ERROR_CODE_MALFORMED_UPLOAD,
    ERROR_CODE_MISSING_CAPTION,
    ERROR_CODE_MISSING_FILE,
    ERROR_CODE_PERSISTENCE_FAILED,
    IMAGE_ID_PREFIX,
    MAX_TAGS,
    MIME_TYPE_EXTENSION_MAP,
    STORAGE_KEY_PREFIX,
    TAG_MAX_LENGTH,
)
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - Validation of the uploaded form, before any external call
    - Uploading image content to the blob store
    - Persisting the image reference under its trip
    """

    def __init__(
        self,
        trips: TripRepository | None = None,
        store: BlobStore | None = None,
    ) -> None:
        """Initialize the upload service with required infrastructure dependencies."""
        self.trips = trips or DynamoDBTrips()
        self.store = store or S3BlobStore()

    @staticmethod
    def generate_image_id() -> str:
        """Generate a unique image identifier."""
        return f"{IMAGE_ID_PREFIX}{uuid.uuid4().hex}"

    @staticmethod
    def build_storage_key(*, trip_id: str, image_id: str, mime_type: str) -> str:
        """Build the blob key for an image.

        Keys are namespaced per trip and use the random image id, never the
        client file name, so two uploads cannot overwrite each other.
        """
        extension = MIME_TYPE_EXTENSION_MAP.get(mime_type.lower(), "bin")
        return f"{STORAGE_KEY_PREFIX}/{trip_id}/{image_id}.{extension}"

    @staticmethod
    def normalize_tags(tags: Sequence[str | None] | None) -> list[str]:
        """Drop blank tags and enforce the tag count and length limits."""
        cleaned = [tag.strip() for tag in tags or [] if tag and tag.strip()]

        if len(cleaned) > MAX_TAGS:
            raise ValidationError(
                message=f"Maximum {MAX_TAGS} tags allowed",
                details={"field": "tags"},
            )

        for index, tag in enumerate(cleaned, start=1):
            if len(tag) > TAG_MAX_LENGTH:
                raise ValidationError(
                    message=f"Tag must be at most {TAG_MAX_LENGTH} characters",
                    details={"field": f"tag{index}"},
                )

        return cleaned

    def ensure_trip_exists(self, trip_id: str) -> None:
        """Raise NotFoundError unless the trip exists."""
        if not self.trips.trip_exists(trip_id=trip_id):
            logger.info("Attach to unknown trip", extra={"trip_id": trip_id})
            raise NotFoundError(
                message="Trip not found",
                details={"trip_id": trip_id},
            )

    def attach_image(
        self,
        *,
        trip_id: str,
        file_data: bytes | None,
        file_name: str | None,
        mime_type: str | None,
        caption: str | None,
        tags: Sequence[str | None] | None = None,
    ) -> Image:
        """Upload an image and record it under its trip.

        The upload flow is:
        1. Validate trip, file, caption and form shape (first failure wins)
        2. Upload bytes to the blob store
        3. Persist the image record; the trip is re-checked inside that write

        Args:
            trip_id: Trip receiving the image
            file_data: Raw image bytes
            file_name: Original client file name
            mime_type: Declared content type of the file part
            caption: Image caption
            tags: Up to three optional tags

        Returns:
            The persisted image

        Raises:
            NotFoundError: If the trip does not exist, before or after upload
            ValidationError: If the form is incomplete or invalid
            ConflictError: If the trip reached its image limit concurrently
            UploadFailedError: If storage or persistence fails
        """
        logger.debug("Starting image attach", extra={"trip_id": trip_id})

        # Step 1: Validate, nothing external is called on failure
        self.ensure_trip_exists(trip_id)

        if not file_data:
            raise ValidationError(
                message="Missing file",
                error_code=ERROR_CODE_MISSING_FILE,
                details={"field": "file"},
            )

        caption = (caption or "").strip()
        if not caption:
            raise ValidationError(
                message="Missing caption",
                error_code=ERROR_CODE_MISSING_CAPTION,
                details={"field": "caption"},
            )

        file_name = (file_name or "").strip()
        mime_type = (mime_type or "").strip().lower()
        if not file_name or not mime_type:
            raise ValidationError(
                message="Malformed upload: file name and content type are required",
                error_code=ERROR_CODE_MALFORMED_UPLOAD,
                details={"field": "file"},
            )

        if len(caption) > CAPTION_MAX_LENGTH:
            raise ValidationError(
                message=f"Caption must be at most {CAPTION_MAX_LENGTH} characters",
                details={"field": "caption"},
            )

        tag_values = self.normalize_tags(tags)

        # Step 2: Store bytes
        image_id = self.generate_image_id()
        key = self.build_storage_key(trip_id=trip_id, image_id=image_id, mime_type=mime_type)

        try:
            location = self.store.put(key=key, body=file_data, content_type=mime_type)
        except (StoreUnavailableError, StoreRejectedError) as exc:
            logger.error(
                "Image upload to storage failed",
                extra={"trip_id": trip_id, "key": key, "cause": exc.error_code},
            )
            raise UploadFailedError(
                message="Unable to upload image",
                details={"trip_id": trip_id, "cause": exc.error_code},
            ) from exc

        # Step 3: Record reference
        padded = tag_values + [None] * (MAX_TAGS - len(tag_values))
        image = Image(
            image_id=image_id,
            trip_id=trip_id,
            location=location,
            caption=caption,
            file_name=file_name,
            tag1=padded[0],
            tag2=padded[1],
            tag3=padded[2],
            storage_key=key,
            mime_type=mime_type,
            file_size=len(file_data),
            created_at=utc_now_iso(),
        )

        try:
            saved = self.trips.add_image(trip_id=trip_id, image=image)
        except (NotFoundError, ConflictError) as exc:
            logger.warning(
                "Image record rejected after upload; stored asset is orphaned",
                extra={"trip_id": trip_id, "orphaned_key": key, "error_code": exc.error_code},
            )
            raise
        except Exception as exc:
            logger.warning(
                "Image record could not be saved; stored asset is orphaned",
                extra={"trip_id": trip_id, "orphaned_key": key},
            )
            raise UploadFailedError(
                message="Unable to save image record",
                details={
                    "trip_id": trip_id,
                    "image_id": image_id,
                    "cause": ERROR_CODE_PERSISTENCE_FAILED,
                },
            ) from exc

        logger.info(
            "Image attached successfully",
            extra={"trip_id": trip_id, "image_id": image_id, "key": key},
        )
        return saved
