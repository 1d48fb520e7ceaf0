from app.config.settings import Settings
from app.storage.azure_blob_adapter import AzureBlobObjectStore
from app.storage.base import BaseObjectStore
from app.storage.client import ObjectStoreClient
from app.storage.memory_adapter import MemoryObjectStore


class ObjectStoreFactory:
    """Creates the configured object store backend and wraps it in a client."""

    BACKENDS = ("azure_blob", "memory")

    @classmethod
    def create(cls, settings: Settings) -> ObjectStoreClient:
        return ObjectStoreClient(
            cls.create_backend(settings),
            inbound_container=settings.storage_inbound_container,
            outbound_container=settings.storage_outbound_container,
        )

    @classmethod
    def create_backend(cls, settings: Settings) -> BaseObjectStore:
        backend = settings.storage_backend.lower()
        if backend == "memory":
            return MemoryObjectStore()
        if backend == "azure_blob":
            return AzureBlobObjectStore(account_name=settings.storage_account_name)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
