from azure.core.credentials import TokenCredential
from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from azure.identity import DefaultAzureCredential
from azure.storage.blob import BlobServiceClient, ContentSettings

from app.logging.logger import Log
from app.storage.base import BaseObjectStore
from app.storage.exceptions import (
    AccessDeniedError,
    ObjectExistsError,
    ObjectNotFoundError,
    StoreError,
    StoreTransportError,
)
from app.storage.models import StoredObject


def account_url(account_name: str) -> str:
    return f"https://{account_name}.blob.core.windows.net"


class AzureBlobObjectStore(BaseObjectStore):
    """Object store backed by Azure Blob Storage, authenticated with an identity token."""

    def __init__(
        self,
        *,
        account_name: str,
        credential: TokenCredential | None = None,
        service_client: BlobServiceClient | None = None,
    ) -> None:
        if not account_name:
            raise ValueError("storage_account_name is required for storage_backend=azure_blob")
        self._account_name = account_name
        if service_client is None:
            service_client = BlobServiceClient(
                account_url(account_name),
                credential=credential or DefaultAzureCredential(),
            )
        self._service = service_client
        Log.info(f"Blob store initialized for account {account_name}")

    def ensure_bucket(self, container: str) -> None:
        try:
            self._service.get_container_client(container).create_container()
            Log.info(f"Created container {container} in account {self._account_name}")
        except ResourceExistsError:
            pass
        except AzureError as exc:
            raise self._map_error(exc, f"create container '{container}'") from exc

    def put_object(self, container: str, key: str, data: bytes, content_type: str) -> None:
        blob = self._service.get_blob_client(container=container, blob=key)
        try:
            blob.upload_blob(
                data,
                overwrite=False,
                content_settings=ContentSettings(content_type=content_type),
            )
        except AzureError as exc:
            raise self._map_error(exc, f"upload '{key}' to '{container}'") from exc
        Log.info(f"Uploaded {len(data)} bytes to {container}/{key}")

    def get_object(self, container: str, key: str) -> StoredObject:
        blob = self._service.get_blob_client(container=container, blob=key)
        try:
            downloader = blob.download_blob()
        except AzureError as exc:
            raise self._map_error(exc, f"download '{key}' from '{container}'") from exc
        content_type = downloader.properties.content_settings.content_type
        return StoredObject(key=key, content_type=content_type, chunks=downloader.chunks())

    def _map_error(self, exc: AzureError, action: str) -> StoreError:
        if isinstance(exc, ResourceExistsError) or _status_code(exc) == 409:
            Log.error(f"Key already taken while trying to {action}: {exc}")
            return ObjectExistsError(f"Failed to {action}: an object with that key already exists")
        if isinstance(exc, ResourceNotFoundError) or _status_code(exc) == 404:
            Log.error(f"Not found while trying to {action}: {exc}")
            return ObjectNotFoundError(f"Failed to {action}: not found")
        if isinstance(exc, ClientAuthenticationError) or _status_code(exc) in (401, 403):
            Log.error(
                f"Access denied while trying to {action} in account {self._account_name}: {exc}"
            )
            return AccessDeniedError(
                f"Failed to {action} in storage account '{self._account_name}'. "
                "The identity does not have the required permissions."
            )
        Log.error(f"Storage error while trying to {action}: {exc}")
        return StoreTransportError(f"Failed to {action}: {exc}")


def _status_code(exc: AzureError) -> int | None:
    if isinstance(exc, HttpResponseError):
        return exc.status_code
    return None
