"""Abstract contract for looking up users owned by the auth collaborator."""

from abc import ABC, abstractmethod


class UserRepository(ABC):
    """Read-only view of the user directory."""

    @abstractmethod
    def user_exists(self, *, user_id: str) -> bool:
        """Return whether a user with this identifier exists.

        Raises:
            PersistenceError: If the lookup fails
        """
