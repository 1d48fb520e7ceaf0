class StoreError(Exception):
    """Base exception for all object store errors."""


class AccessDeniedError(StoreError):
    """Raised when the store rejects the caller's credentials or permissions."""


class ObjectNotFoundError(StoreError):
    """Raised when the requested object does not exist."""


class StoreTransportError(StoreError):
    """Raised when the store call fails for any other transport reason."""


class ObjectExistsError(StoreError):
    """Raised when a write targets a key that already holds an object."""
