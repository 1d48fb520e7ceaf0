from dataclasses import dataclass
from enum import Enum


class JobStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not JobStatus.PENDING


@dataclass(frozen=True)
class AnalysisJob:
    """State of one long-running remote analysis job."""

    location: str
    status: JobStatus = JobStatus.PENDING
    attempts: int = 0
    text: str = ""
    error_detail: str = ""
