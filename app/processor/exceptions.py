class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class UploadValidationError(ProcessorError):
    """Raised when an upload is rejected before any remote call is made."""


class InvalidTransitionError(ProcessorError):
    """Raised when a pipeline step moves an upload into a state it cannot reach."""
