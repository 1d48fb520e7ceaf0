from app.storage.client import ObjectStoreClient
from app.storage.factory import ObjectStoreFactory
from app.storage.models import Bucket, StoredObject, StoredObjectHandle

__all__ = [
    "Bucket",
    "ObjectStoreClient",
    "ObjectStoreFactory",
    "StoredObject",
    "StoredObjectHandle",
]
