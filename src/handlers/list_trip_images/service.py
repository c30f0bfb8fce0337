"""Business logic for listing the images attached to a trip."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_trips import DynamoDBTrips
from core.models.trip import Image
from core.repositories.trip_repository import TripRepository

logger = Logger(UTC=True)


class ListTripImagesService:
    def __init__(self, trips: TripRepository | None = None) -> None:
        self.trips = trips or DynamoDBTrips()

    def list_images(self, trip_id: str) -> list[Image]:
        """Return the trip's images, oldest attach first.

        Raises:
            NotFoundError: If the trip does not exist
        """
        images = self.trips.get_images(trip_id=trip_id)
        logger.info("Trip images retrieved", extra={"trip_id": trip_id, "count": len(images)})
        return images
