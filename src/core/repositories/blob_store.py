"""Abstract contract for binary asset storage."""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Contract for storing photo bytes under a key.

    Implementations could be S3, GCS, local disk, etc.
    Services depend on this interface, not the implementation.
    """

    @abstractmethod
    def put(self, *, key: str, body: bytes, content_type: str) -> str:
        """Store bytes under `key` and return a publicly resolvable location.

        The asset is durably retrievable at the returned location once this
        returns. There is no rollback: removing an asset whose reference was
        never recorded is up to the caller.

        Args:
            key: Storage key, unique per upload
            body: Binary content
            content_type: Declared MIME type (e.g. 'image/jpeg')

        Returns:
            Location URL of the stored asset

        Raises:
            StoreRejectedError: If the payload type or size is not accepted
            StoreUnavailableError: If the store cannot be reached or refuses access
        """
