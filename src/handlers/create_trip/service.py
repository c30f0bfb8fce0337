"""Business logic for trip creation."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_trips import DynamoDBTrips
from core.models.trip import Trip
from core.repositories.trip_repository import TripRepository

logger = Logger(UTC=True)


class CreateTripService:
    """Application service responsible for creating trips."""

    def __init__(self, trips: TripRepository | None = None) -> None:
        self.trips = trips or DynamoDBTrips()

    def create_trip(self, *, title: str, user_id: str) -> Trip:
        """Create a trip for an existing user.

        Raises:
            ValidationError: If the title is blank or the user does not exist
            PersistenceError: If the trip cannot be saved
        """
        logger.debug("Creating trip", extra={"user_id": user_id})

        trip = self.trips.create_trip(title=title, user_id=user_id)

        logger.info(
            "Trip created successfully",
            extra={"trip_id": trip.trip_id, "user_id": user_id},
        )
        return trip
