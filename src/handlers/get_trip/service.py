"""
Business logic for trip retrieval.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_trips import DynamoDBTrips
from core.models.trip import TripDetail
from core.repositories.trip_repository import TripRepository

logger = Logger(UTC=True)


class GetTripService:
    """Application service returning a trip with its images in attach order."""

    def __init__(self, trips: TripRepository | None = None) -> None:
        self.trips = trips or DynamoDBTrips()

    def get_trip(self, trip_id: str) -> TripDetail:
        """Retrieve a trip and its images.

        Raises:
            NotFoundError: If the trip does not exist
            PersistenceError: If the trip cannot be read
        """
        logger.debug("Fetching trip", extra={"trip_id": trip_id})

        detail = self.trips.get_trip(trip_id=trip_id)

        logger.info(
            "Trip retrieved",
            extra={"trip_id": trip_id, "images": len(detail.images)},
        )
        return detail
