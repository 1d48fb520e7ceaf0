"""In-process object store.

No network calls. Useful for local development and tests.
"""

import threading

from app.storage.base import BaseObjectStore
from app.storage.exceptions import ObjectExistsError, ObjectNotFoundError
from app.storage.models import StoredObject


class MemoryObjectStore(BaseObjectStore):
    """Keeps objects in a dict keyed by (container, key)."""

    def __init__(self) -> None:
        self._containers: dict[str, dict[str, tuple[bytes, str]]] = {}
        self._lock = threading.Lock()

    def ensure_bucket(self, container: str) -> None:
        with self._lock:
            self._containers.setdefault(container, {})

    def put_object(self, container: str, key: str, data: bytes, content_type: str) -> None:
        with self._lock:
            objects = self._containers.setdefault(container, {})
            if key in objects:
                raise ObjectExistsError(
                    f"Object '{key}' already exists in container '{container}'"
                )
            objects[key] = (bytes(data), content_type)

    def get_object(self, container: str, key: str) -> StoredObject:
        with self._lock:
            entry = self._containers.get(container, {}).get(key)
        if entry is None:
            raise ObjectNotFoundError(f"Object '{key}' not found in container '{container}'")
        data, content_type = entry
        return StoredObject(key=key, content_type=content_type, chunks=[data])
