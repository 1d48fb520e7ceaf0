class RenderError(Exception):
    """Raised when the result document cannot be built."""
