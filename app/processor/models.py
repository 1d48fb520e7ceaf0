from dataclasses import dataclass
from enum import Enum


class UploadState(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    STORED_ORIGINAL = "stored_original"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    RENDERED = "rendered"
    STORED_RESULT = "stored_result"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (UploadState.DONE, UploadState.FAILED)


TRANSITIONS: dict[UploadState, UploadState] = {
    UploadState.RECEIVED: UploadState.VALIDATED,
    UploadState.VALIDATED: UploadState.STORED_ORIGINAL,
    UploadState.STORED_ORIGINAL: UploadState.ANALYZING,
    UploadState.ANALYZING: UploadState.ANALYZED,
    UploadState.ANALYZED: UploadState.RENDERED,
    UploadState.RENDERED: UploadState.STORED_RESULT,
    UploadState.STORED_RESULT: UploadState.DONE,
}


@dataclass(frozen=True)
class UploadedArtifact:
    """A validated upload, alive for the duration of one request."""

    filename: str
    data: bytes
    content_type: str


@dataclass
class UploadOutcome:
    """What the caller of the processor gets back, success or failure."""

    state: UploadState
    filename: str
    message: str
    handle: str | None = None
    download_link: str | None = None
    analysis_text: str | None = None
    error: Exception | None = None
    hint: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is UploadState.DONE
