"""DynamoDB-backed implementation of TripRepository.

Single-table layout: a trip and its images share the partition key
`trip_id`. The trip row has sort key `TRIP`; each image row has sort key
`IMAGE#<created_at>#<image_id>`, so a partition query returns images in
attach order. Trips are listed newest first through the
`entity-created-index` GSI (`entity_type`, `created_at`).
"""

import uuid
from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from core.config import Config, get_config
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.infrastructure.aws.dynamodb_users import DynamoDBUsers
from core.models.errors import (
    ConflictError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from core.models.trip import Image, Trip, TripDetail
from core.repositories.trip_repository import TripRepository
from core.repositories.user_repository import UserRepository
from core.utils.constants import (
    ENTITY_IMAGE,
    ENTITY_TRIP,
    ERROR_CODE_IMAGE_CREATE_FAILED,
    ERROR_CODE_TRIP_CREATE_FAILED,
    ERROR_CODE_TRIP_DELETE_CONFLICT,
    ERROR_CODE_TRIP_DELETE_FAILED,
    ERROR_CODE_TRIP_FETCH_FAILED,
    ERROR_CODE_TRIP_IMAGE_LIMIT_REACHED,
    ERROR_CODE_TRIP_LIST_FAILED,
    ERROR_CODE_USER_NOT_FOUND,
    IMAGE_SORT_KEY_PREFIX,
    MAX_IMAGES_PER_TRIP,
    TRIP_ID_PREFIX,
    TRIP_SORT_KEY,
    TRIPS_CREATED_INDEX,
)
from core.utils.time import utc_now_iso

Item = dict[str, Any]

logger = Logger(UTC=True)

TRANSACTION_CANCELED = "TransactionCanceledException"
MAX_TRANSACTION_ITEMS = 100

# Cancellation reasons that mean another writer got there first
CONTENTION_REASONS = frozenset({"ConditionalCheckFailed", "TransactionConflict"})


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


def _is_contention(exc: ClientError) -> bool:
    """True when a write was cancelled by a failed condition or a concurrent transaction.

    Any other reason (validation, throughput, internal errors) is a plain
    persistence failure and must not be reported as a conflict.
    """
    if _error_code(exc) != TRANSACTION_CANCELED:
        return False

    reasons = {
        reason.get("Code")
        for reason in exc.response.get("CancellationReasons", [])
        if reason.get("Code") not in (None, "None")
    }
    return reasons <= CONTENTION_REASONS


class DynamoDBTrips(TripRepository):
    """DynamoDB-backed trip storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(
        self,
        adapter: DynamoDBAdapterProtocol | None = None,
        users: UserRepository | None = None,
        config: Config | None = None,
    ) -> None:
        """Initialize with DynamoDB adapter and the user directory."""
        if adapter is None or users is None:
            config = config or get_config()
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(config.trips_table, config)
        self._users: UserRepository = users or DynamoDBUsers(config=config)

    @staticmethod
    def generate_trip_id() -> str:
        """Generate a unique trip identifier."""
        return f"{TRIP_ID_PREFIX}{uuid.uuid4().hex}"

    # ------------------------------------------------------------------
    # Trips
    # ------------------------------------------------------------------

    def create_trip(self, *, title: str, user_id: str) -> Trip:
        """Create a trip owned by an existing user.

        Raises:
            ValidationError: If the title is blank or the user is unknown
            PersistenceError: If creation fails
        """
        title = (title or "").strip()
        user_id = (user_id or "").strip()

        if not title:
            raise ValidationError(
                message="Trip title must not be empty",
                details={"field": "title"},
            )

        if not user_id or not self._users.user_exists(user_id=user_id):
            logger.info("Trip creation for unknown user", extra={"user_id": user_id})
            raise ValidationError(
                message="User does not exist",
                error_code=ERROR_CODE_USER_NOT_FOUND,
                details={"field": "userId"},
            )

        trip = Trip(
            trip_id=self.generate_trip_id(),
            title=title,
            user_id=user_id,
            created_at=utc_now_iso(),
            image_count=0,
        )

        logger.debug("Creating trip", extra={"trip_id": trip.trip_id, "user_id": user_id})

        try:
            self._db.put_item(
                item={
                    "trip_id": trip.trip_id,
                    "sort_key": TRIP_SORT_KEY,
                    "entity_type": ENTITY_TRIP,
                    "title": trip.title,
                    "user_id": trip.user_id,
                    "created_at": trip.created_at,
                    "image_count": 0,
                },
                condition_expression="attribute_not_exists(trip_id)",
            )
        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={"trip_id": trip.trip_id})
            raise PersistenceError(
                message="Unable to save trip at this time",
                error_code=ERROR_CODE_TRIP_CREATE_FAILED,
                details={"trip_id": trip.trip_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error creating trip")
            raise PersistenceError(
                message="Unable to save trip at this time",
                error_code=ERROR_CODE_TRIP_CREATE_FAILED,
                details={"trip_id": trip.trip_id},
            ) from exc

        logger.info("Trip created", extra={"trip_id": trip.trip_id, "user_id": user_id})
        return trip

    def find_all(self) -> list[Trip]:
        """List every trip, newest first.

        NOTE:
        - Reads the GSI, so a trip created a moment ago may be missing.
        - No pagination is exposed; all index pages are drained.
        """
        query_kwargs: dict[str, Any] = {
            "IndexName": TRIPS_CREATED_INDEX,
            "KeyConditionExpression": Key("entity_type").eq(ENTITY_TRIP),
            "ScanIndexForward": False,
        }

        try:
            items = self._drain_query(query_kwargs)
        except ClientError as exc:
            logger.error("DynamoDB query failed", extra={"index": TRIPS_CREATED_INDEX})
            raise PersistenceError(
                message="Unable to list trips",
                error_code=ERROR_CODE_TRIP_LIST_FAILED,
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error listing trips")
            raise PersistenceError(
                message="Unable to list trips",
                error_code=ERROR_CODE_TRIP_LIST_FAILED,
            ) from exc

        trips: list[Trip] = []
        for item in items:
            try:
                trips.append(self._to_trip(item))
            except Exception as exc:
                logger.warning(
                    "Skipping malformed trip item",
                    extra={"trip_id": item.get("trip_id")},
                    exc_info=exc,
                )

        logger.info("Trips listed", extra={"count": len(trips)})
        return trips

    def get_trip(self, *, trip_id: str) -> TripDetail:
        trip_item, image_items = self._load_trip(trip_id)

        if trip_item is None:
            raise self._not_found(trip_id)

        trip = self._to_trip(trip_item)
        return TripDetail(
            **trip.model_dump(),
            images=[self._to_image(item) for item in image_items],
        )

    def get_images(self, *, trip_id: str) -> list[Image]:
        trip_item, image_items = self._load_trip(trip_id)

        if trip_item is None:
            raise self._not_found(trip_id)

        return [self._to_image(item) for item in image_items]

    def trip_exists(self, *, trip_id: str) -> bool:
        return self._fetch_trip_item(trip_id) is not None

    def remove_trip(self, *, trip_id: str) -> None:
        """Delete the trip row and every image row in a single transaction.

        The trip delete is conditioned on `image_count` still matching what
        was read, so an image attached between the read and the write cancels
        the whole transaction instead of leaving an image without its trip.

        Raises:
            NotFoundError: If the trip does not exist
            ConflictError: If the transaction is cancelled while the trip still exists
            PersistenceError: If deletion fails
        """
        logger.debug("Removing trip", extra={"trip_id": trip_id})

        trip_item, image_items = self._load_trip(trip_id)
        if trip_item is None:
            raise self._not_found(trip_id)

        if len(image_items) + 1 > MAX_TRANSACTION_ITEMS:
            logger.error(
                "Trip has too many rows for a single delete transaction",
                extra={"trip_id": trip_id, "images": len(image_items)},
            )
            raise ConflictError(
                message="Trip cannot be deleted in a single transaction",
                error_code=ERROR_CODE_TRIP_DELETE_CONFLICT,
                details={"trip_id": trip_id},
            )

        operations: list[dict[str, Any]] = [
            {
                "Delete": {
                    "Key": {"trip_id": trip_id, "sort_key": TRIP_SORT_KEY},
                    "ConditionExpression": "attribute_exists(trip_id) AND image_count = :expected",
                    "ExpressionAttributeValues": {
                        ":expected": int(trip_item.get("image_count", 0)),
                    },
                }
            }
        ]
        operations.extend(
            {"Delete": {"Key": {"trip_id": trip_id, "sort_key": item["sort_key"]}}}
            for item in image_items
        )

        try:
            self._db.transact_write(items=operations)
        except ClientError as exc:
            if not _is_contention(exc):
                logger.error(
                    "DynamoDB delete transaction failed",
                    extra={"trip_id": trip_id, "reasons": exc.response.get("CancellationReasons")},
                )
                raise PersistenceError(
                    message="Unable to delete trip",
                    error_code=ERROR_CODE_TRIP_DELETE_FAILED,
                    details={"trip_id": trip_id},
                ) from exc

            logger.warning("Trip delete transaction cancelled", extra={"trip_id": trip_id})
            if self._fetch_trip_item(trip_id) is None:
                raise self._not_found(trip_id) from exc

            raise ConflictError(
                message="Trip was modified while it was being deleted",
                error_code=ERROR_CODE_TRIP_DELETE_CONFLICT,
                details={"trip_id": trip_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error deleting trip")
            raise PersistenceError(
                message="Unable to delete trip",
                error_code=ERROR_CODE_TRIP_DELETE_FAILED,
                details={"trip_id": trip_id},
            ) from exc

        logger.info(
            "Trip removed",
            extra={"trip_id": trip_id, "images_removed": len(image_items)},
        )

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def add_image(self, *, trip_id: str, image: Image) -> Image:
        """Record an image under its trip.

        The trip row's `image_count` is incremented in the same transaction,
        conditioned on the trip existing and having room, so a trip removed
        concurrently makes this fail instead of leaving an orphan row.
        """
        item: Item = {
            "trip_id": trip_id,
            "sort_key": f"{IMAGE_SORT_KEY_PREFIX}{image.created_at}#{image.image_id}",
            "entity_type": ENTITY_IMAGE,
            "image_id": image.image_id,
            "location": image.location,
            "caption": image.caption,
            "file_name": image.file_name,
            "tag1": image.tag1,
            "tag2": image.tag2,
            "tag3": image.tag3,
            "storage_key": image.storage_key,
            "mime_type": image.mime_type,
            "file_size": image.file_size,
            "created_at": image.created_at,
        }
        item = {key: value for key, value in item.items() if value is not None}

        logger.debug(
            "Adding image",
            extra={"trip_id": trip_id, "image_id": image.image_id},
        )

        operations: list[dict[str, Any]] = [
            {
                "Update": {
                    "Key": {"trip_id": trip_id, "sort_key": TRIP_SORT_KEY},
                    "UpdateExpression": "SET image_count = image_count + :one",
                    "ConditionExpression": "attribute_exists(trip_id) AND image_count < :max",
                    "ExpressionAttributeValues": {":one": 1, ":max": MAX_IMAGES_PER_TRIP},
                }
            },
            {
                "Put": {
                    "Item": item,
                    "ConditionExpression": "attribute_not_exists(sort_key)",
                }
            },
        ]

        try:
            self._db.transact_write(items=operations)
        except ClientError as exc:
            if not _is_contention(exc):
                logger.error(
                    "DynamoDB add image transaction failed",
                    extra={
                        "trip_id": trip_id,
                        "image_id": image.image_id,
                        "reasons": exc.response.get("CancellationReasons"),
                    },
                )
                raise PersistenceError(
                    message="Unable to save image record",
                    error_code=ERROR_CODE_IMAGE_CREATE_FAILED,
                    details={"trip_id": trip_id, "image_id": image.image_id},
                ) from exc

            logger.warning(
                "Add image transaction cancelled",
                extra={"trip_id": trip_id, "image_id": image.image_id},
            )
            trip_item = self._fetch_trip_item(trip_id)
            if trip_item is None:
                raise self._not_found(trip_id) from exc

            if int(trip_item.get("image_count", 0)) >= MAX_IMAGES_PER_TRIP:
                raise ConflictError(
                    message=f"Trip already has the maximum of {MAX_IMAGES_PER_TRIP} images",
                    error_code=ERROR_CODE_TRIP_IMAGE_LIMIT_REACHED,
                    details={"trip_id": trip_id},
                ) from exc

            raise ConflictError(
                message="Trip was modified while the image was being saved",
                details={"trip_id": trip_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error adding image")
            raise PersistenceError(
                message="Unable to save image record",
                error_code=ERROR_CODE_IMAGE_CREATE_FAILED,
                details={"trip_id": trip_id, "image_id": image.image_id},
            ) from exc

        logger.info(
            "Image record created",
            extra={"trip_id": trip_id, "image_id": image.image_id},
        )
        return image

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _drain_query(self, query_kwargs: dict[str, Any]) -> list[Item]:
        items: list[Item] = []
        last_evaluated_key: dict[str, Any] | None = None

        while True:
            if last_evaluated_key:
                query_kwargs["ExclusiveStartKey"] = last_evaluated_key

            response = self._db.query(**query_kwargs)
            items.extend(response.get("Items", []))

            last_evaluated_key = response.get("LastEvaluatedKey")
            if not last_evaluated_key:
                break

        return items

    def _load_trip(self, trip_id: str) -> tuple[Item | None, list[Item]]:
        """Read the trip row and its image rows with one consistent query."""
        logger.debug("Fetching trip partition", extra={"trip_id": trip_id})

        try:
            items = self._drain_query(
                {
                    "KeyConditionExpression": Key("trip_id").eq(trip_id),
                    "ConsistentRead": True,
                }
            )
        except ClientError as exc:
            logger.error("DynamoDB query failed", extra={"trip_id": trip_id})
            raise PersistenceError(
                message="Unable to retrieve trip",
                error_code=ERROR_CODE_TRIP_FETCH_FAILED,
                details={"trip_id": trip_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching trip")
            raise PersistenceError(
                message="Unable to retrieve trip",
                error_code=ERROR_CODE_TRIP_FETCH_FAILED,
                details={"trip_id": trip_id},
            ) from exc

        trip_item: Item | None = None
        image_items: list[Item] = []

        for item in items:
            if item.get("sort_key") == TRIP_SORT_KEY:
                trip_item = item
            elif str(item.get("sort_key", "")).startswith(IMAGE_SORT_KEY_PREFIX):
                image_items.append(item)

        # Query results are already ordered by sort key; keep it explicit
        image_items.sort(key=lambda item: item["sort_key"])
        return trip_item, image_items

    def _fetch_trip_item(self, trip_id: str) -> Item | None:
        try:
            response = self._db.get_item(
                key={"trip_id": trip_id, "sort_key": TRIP_SORT_KEY},
                consistent_read=True,
            )
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"trip_id": trip_id})
            raise PersistenceError(
                message="Unable to retrieve trip",
                error_code=ERROR_CODE_TRIP_FETCH_FAILED,
                details={"trip_id": trip_id},
            ) from exc
        except Exception as exc:
            logger.exception("Unexpected error fetching trip")
            raise PersistenceError(
                message="Unable to retrieve trip",
                error_code=ERROR_CODE_TRIP_FETCH_FAILED,
                details={"trip_id": trip_id},
            ) from exc

        item: Item | None = response.get("Item")
        return item

    @staticmethod
    def _not_found(trip_id: str) -> NotFoundError:
        logger.warning("Trip not found", extra={"trip_id": trip_id})
        return NotFoundError(
            message="Trip not found",
            details={"trip_id": trip_id},
        )

    @staticmethod
    def _to_trip(item: Item) -> Trip:
        return Trip(
            trip_id=item["trip_id"],
            title=item["title"],
            user_id=item["user_id"],
            created_at=item["created_at"],
            image_count=int(item.get("image_count", 0)),
        )

    @staticmethod
    def _to_image(item: Item) -> Image:
        return Image(
            image_id=item["image_id"],
            trip_id=item["trip_id"],
            location=item["location"],
            caption=item["caption"],
            file_name=item.get("file_name"),
            tag1=item.get("tag1"),
            tag2=item.get("tag2"),
            tag3=item.get("tag3"),
            storage_key=item["storage_key"],
            mime_type=item["mime_type"],
            file_size=int(item["file_size"]),
            created_at=item["created_at"],
        )
