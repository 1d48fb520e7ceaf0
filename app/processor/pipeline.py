import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.analysis.poll import CancelToken
from app.processor.exceptions import InvalidTransitionError
from app.processor.models import TRANSITIONS, UploadedArtifact, UploadState
from app.rendering.models import RenderedArtifact
from app.storage.models import StoredObjectHandle


@dataclass(slots=True)
class PipelineContext:
    filename: str
    raw_bytes: bytes
    cancel: CancelToken = field(default_factory=threading.Event)
    state: UploadState = UploadState.RECEIVED
    upload: UploadedArtifact | None = None
    original_handle: StoredObjectHandle | None = None
    extracted_text: str = ""
    rendered: RenderedArtifact | None = None
    result_handle: StoredObjectHandle | None = None

    def transition(self, target: UploadState) -> None:
        """Move to `target`; only the next state in line or FAILED is reachable."""
        if self.state.is_terminal:
            raise InvalidTransitionError(f"Upload already in terminal state {self.state.value}")
        if target is not UploadState.FAILED and TRANSITIONS.get(self.state) is not target:
            raise InvalidTransitionError(
                f"Cannot move upload from {self.state.value} to {target.value}"
            )
        self.state = target


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
