"""Abstract contract for trip and image persistence."""

from abc import ABC, abstractmethod

from core.models.trip import Image, Trip, TripDetail


class TripRepository(ABC):
    """Contract for storing trips and the image records attached to them.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def create_trip(self, *, title: str, user_id: str) -> Trip:
        """Create a trip with a freshly generated identifier.

        Raises:
            ValidationError: If title is blank or user_id is not a known user
            PersistenceError: If creation fails
        """

    @abstractmethod
    def find_all(self) -> list[Trip]:
        """Return every trip, newest first.

        Raises:
            PersistenceError: If the listing fails
        """

    @abstractmethod
    def get_trip(self, *, trip_id: str) -> TripDetail:
        """Return a trip with its images in attach order.

        Raises:
            NotFoundError: If the trip does not exist
            PersistenceError: If the fetch fails
        """

    @abstractmethod
    def get_images(self, *, trip_id: str) -> list[Image]:
        """Return a trip's images in attach order.

        Raises:
            NotFoundError: If the trip does not exist
            PersistenceError: If the fetch fails
        """

    @abstractmethod
    def trip_exists(self, *, trip_id: str) -> bool:
        """Return whether the trip exists.

        Raises:
            PersistenceError: If the lookup fails
        """

    @abstractmethod
    def remove_trip(self, *, trip_id: str) -> None:
        """Delete a trip and all of its image records in one transaction.

        Raises:
            NotFoundError: If the trip does not exist
            ConflictError: If the store rejects the cascade
            PersistenceError: If deletion fails for other reasons
        """

    @abstractmethod
    def add_image(self, *, trip_id: str, image: Image) -> Image:
        """Persist an image record, re-checking that the trip still exists.

        Raises:
            NotFoundError: If the trip does not exist (including removal in flight)
            ConflictError: If the trip is full or changed concurrently
            PersistenceError: If the write fails for other reasons
        """
