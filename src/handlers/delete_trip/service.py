"""
Business logic for trip deletion.

The trip row and all of its image rows are removed in one storage
transaction. Stored image assets are left in the blob store.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_trips import DynamoDBTrips
from core.repositories.trip_repository import TripRepository

logger = Logger(UTC=True)


class DeleteTripService:
    """Application service responsible for trip deletion."""

    def __init__(self, trips: TripRepository | None = None) -> None:
        self.trips = trips or DynamoDBTrips()

    def delete_trip(self, trip_id: str) -> str:
        """Delete a trip and cascade to its images.

        Returns:
            The identifier of the deleted trip

        Raises:
            NotFoundError: If the trip does not exist
            ConflictError: If the trip changed while being deleted
            PersistenceError: If deletion fails
        """
        logger.debug("Deleting trip", extra={"trip_id": trip_id})

        self.trips.remove_trip(trip_id=trip_id)

        logger.info("Trip deleted successfully", extra={"trip_id": trip_id})
        return trip_id
