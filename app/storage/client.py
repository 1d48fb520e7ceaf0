import os
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from app.logging.logger import Log
from app.storage.base import BaseObjectStore
from app.storage.models import Bucket, StoredObject, StoredObjectHandle

RESULT_EXTENSION = ".docx"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ObjectStoreClient:
    """Puts and gets byte streams in the inbound and outbound buckets.

    Holds no state beyond the backend and container names, so one instance
    is shared by all in-flight uploads.
    """

    def __init__(
        self,
        backend: BaseObjectStore,
        *,
        inbound_container: str,
        outbound_container: str,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._backend = backend
        self._containers = {
            Bucket.INBOUND: inbound_container,
            Bucket.OUTBOUND: outbound_container,
        }
        self._clock = clock

    def container_for(self, bucket: Bucket) -> str:
        return self._containers[bucket]

    def put(
        self,
        bucket: Bucket,
        key_hint: str,
        data: bytes,
        content_type: str,
    ) -> StoredObjectHandle:
        """Ensure the bucket exists, write the bytes under a fresh key and return its handle."""
        container = self.container_for(bucket)
        self._backend.ensure_bucket(container)
        key = self._make_key(bucket, key_hint)
        Log.info(f"Writing {len(data)} bytes to {container}/{key}")
        self._backend.put_object(container, key, data, content_type)
        return StoredObjectHandle(bucket=bucket, key=key)

    def get(self, bucket: Bucket, handle: StoredObjectHandle | str) -> StoredObject:
        key = handle.key if isinstance(handle, StoredObjectHandle) else handle
        return self._backend.get_object(self.container_for(bucket), key)

    def _make_key(self, bucket: Bucket, key_hint: str) -> str:
        name = os.path.basename(key_hint)
        if bucket is Bucket.INBOUND:
            return f"{uuid.uuid4()}_{name}"
        stem = os.path.splitext(name)[0]
        stamp = self._clock().strftime("%Y%m%d%H%M%S")
        return f"{stem}_{stamp}{RESULT_EXTENSION}"
