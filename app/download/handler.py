from app.logging.logger import Log
from app.rendering.models import DOCX_CONTENT_TYPE
from app.storage.client import ObjectStoreClient
from app.storage.exceptions import AccessDeniedError, ObjectNotFoundError, StoreError
from app.storage.models import Bucket, StoredObject


class DownloadHandler:
    """Resolves a retrieval handle to a stored result document.

    Every store failure is reported to the caller as ObjectNotFoundError;
    access-denied failures are only told apart in the logs.
    """

    def __init__(self, store: ObjectStoreClient) -> None:
        self._store = store

    def resolve(self, handle: str | None) -> StoredObject:
        if not handle:
            raise ObjectNotFoundError("No file requested")
        try:
            stored = self._store.get(Bucket.OUTBOUND, handle)
        except AccessDeniedError as exc:
            Log.error(
                f"Access denied when downloading {handle}. Check that the identity has "
                f"'Storage Blob Data Contributor' on the storage account: {exc}"
            )
            raise ObjectNotFoundError(f"File '{handle}' not found") from exc
        except StoreError as exc:
            Log.error(f"Error downloading file {handle}: {exc}")
            raise ObjectNotFoundError(f"File '{handle}' not found") from exc

        if not stored.content_type:
            stored.content_type = DOCX_CONTENT_TYPE
        Log.info(f"Serving {handle} ({stored.content_type})")
        return stored
