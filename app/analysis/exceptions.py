PERMISSION_PROPAGATION_HINT = (
    "Please wait 5-10 minutes for role assignments to propagate and try again."
)


class AnalysisError(Exception):
    """Base exception for all document analysis errors."""

    hint: str | None = None


class AnalysisHttpError(AnalysisError):
    """Raised when the analysis service answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        if status_code == 403:
            self.hint = PERMISSION_PROPAGATION_HINT


class AnalysisProtocolError(AnalysisError):
    """Raised when a response does not follow the expected submit protocol."""


class AnalysisParseError(AnalysisError):
    """Raised when a job status payload cannot be interpreted."""


class AnalysisAuthError(AnalysisError):
    """Raised when an identity token cannot be acquired."""

    hint = PERMISSION_PROPAGATION_HINT


class AnalysisJobFailedError(AnalysisError):
    """Raised when the remote job reaches the failed state."""

    def __init__(self, message: str, detail: str = "") -> None:
        super().__init__(message)
        self.detail = detail


class AnalysisTimeoutError(AnalysisError):
    """Raised when the job is still running after the last allowed status request."""


class AnalysisCancelledError(AnalysisError):
    """Raised when the enclosing request is cancelled while waiting on the job."""
