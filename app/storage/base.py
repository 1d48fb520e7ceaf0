from abc import ABC, abstractmethod

from app.storage.models import StoredObject


class BaseObjectStore(ABC):
    """Contract for all object store backends."""

    @abstractmethod
    def ensure_bucket(self, container: str) -> None:
        """Create the container if it does not exist yet. Must be idempotent.

        Raises:
            StoreError: on any failure.
        """

    @abstractmethod
    def put_object(self, container: str, key: str, data: bytes, content_type: str) -> None:
        """Write bytes under the given key, replacing nothing else.

        Raises:
            ObjectExistsError: if the key already holds an object.
            AccessDeniedError: if the backend rejects the credentials.
            StoreTransportError: on any other failure.
        """

    @abstractmethod
    def get_object(self, container: str, key: str) -> StoredObject:
        """Read the object stored under the given key.

        Raises:
            ObjectNotFoundError: if no object exists under the key.
            AccessDeniedError: if the backend rejects the credentials.
            StoreTransportError: on any other failure.
        """
