"""Business logic for listing trips."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_trips import DynamoDBTrips
from core.models.trip import Trip
from core.repositories.trip_repository import TripRepository

logger = Logger(UTC=True)


class ListTripsService:
    """Application service returning every trip, newest first."""

    def __init__(self, trips: TripRepository | None = None) -> None:
        self.trips = trips or DynamoDBTrips()

    def list_trips(self) -> list[Trip]:
        trips = self.trips.find_all()
        logger.info("Trips retrieved", extra={"count": len(trips)})
        return trips
