from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class Bucket(str, Enum):
    """Logical partitions of the object store."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


@dataclass(frozen=True)
class StoredObjectHandle:
    """Opaque reference to bytes written into a bucket."""

    bucket: Bucket
    key: str


@dataclass
class StoredObject:
    """Bytes read back from the store, as a stream of chunks."""

    key: str
    content_type: str | None
    chunks: Iterable[bytes]

    def read(self) -> bytes:
        return b"".join(self.chunks)
