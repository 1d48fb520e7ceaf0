import threading
from urllib.parse import quote

from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.exceptions import (
    PERMISSION_PROPAGATION_HINT,
    AnalysisCancelledError,
    AnalysisError,
)
from app.analysis.factory import DocumentAnalyzerFactory
from app.analysis.poll import CancelToken
from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.exceptions import UploadValidationError
from app.processor.models import UploadOutcome, UploadState
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    AnalyzeStep,
    RenderStep,
    StoreOriginalStep,
    StoreResultStep,
    ValidateUploadStep,
)
from app.rendering.base import BaseRenderer
from app.rendering.exceptions import RenderError
from app.rendering.factory import RendererFactory
from app.storage.client import ObjectStoreClient
from app.storage.exceptions import AccessDeniedError, StoreError
from app.storage.factory import ObjectStoreFactory


def download_link(handle: str) -> str:
    return f"/download?file={quote(handle, safe='')}"


class Processor:
    """Orchestrates one upload through the pipeline.

    Pipeline: validate -> store original -> analyze -> render -> store result.
    Each step runs once; any error ends the upload in the FAILED state and is
    reported through the returned UploadOutcome.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(
        self,
        filename: str,
        data: bytes,
        cancel: CancelToken | None = None,
    ) -> UploadOutcome:
        """Run the full pipeline for one uploaded file."""
        context = PipelineContext(
            filename=filename,
            raw_bytes=data,
            cancel=cancel if cancel is not None else threading.Event(),
        )
        Log.info(f"File upload initiated: {filename} ({len(data)} bytes)")

        step_name = ""
        try:
            for step in self._steps:
                step_name = type(step).__name__
                context = step.run(context)
            if context.result_handle is None:
                raise RuntimeError("Pipeline finished without storing a result")
            context.transition(UploadState.DONE)
        except Exception as exc:
            return self._fail(context, step_name, exc)

        handle = context.result_handle.key
        Log.info(f"Upload {filename} done, result stored as {handle}")
        return UploadOutcome(
            state=context.state,
            filename=filename,
            message="File processed successfully.",
            handle=handle,
            download_link=download_link(handle),
            analysis_text=context.extracted_text,
        )

    def _fail(self, context: PipelineContext, step_name: str, exc: Exception) -> UploadOutcome:
        if not context.state.is_terminal:
            context.transition(UploadState.FAILED)
        message, hint = self._describe(exc)

        if isinstance(exc, UploadValidationError):
            Log.warning(f"Upload {context.filename} rejected: {exc}")
        elif isinstance(exc, (StoreError, AnalysisError)):
            Log.error(
                f"Error processing file {context.filename} in step {step_name}. "
                f"Exception type: {type(exc).__name__}: {exc}"
            )
            if exc.__cause__ is not None:
                Log.error(f"Inner exception: {exc.__cause__}")
        else:
            Log.exception(f"Defect while processing file {context.filename} in step {step_name}")

        return UploadOutcome(
            state=context.state,
            filename=context.filename,
            message=message,
            error=exc,
            hint=hint,
        )

    @staticmethod
    def _describe(exc: Exception) -> tuple[str, str | None]:
        """User-facing message and optional remediation hint for an error."""
        if isinstance(exc, UploadValidationError):
            return str(exc), None
        if isinstance(exc, AccessDeniedError):
            return f"Authorization error: {exc}", PERMISSION_PROPAGATION_HINT
        if isinstance(exc, StoreError):
            return f"Storage error: {exc}", None
        if isinstance(exc, AnalysisCancelledError):
            return str(exc), None
        if isinstance(exc, AnalysisError):
            return f"Analysis error: {exc}", exc.hint
        if isinstance(exc, RenderError):
            return "An error occurred while building the result document.", None
        return "An unexpected error occurred while processing the file.", None


def build_processor(
    settings: Settings,
    store: ObjectStoreClient | None = None,
    analyzer: BaseDocumentAnalyzer | None = None,
    renderer: BaseRenderer | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    store = store if store is not None else ObjectStoreFactory.create(settings)
    analyzer = analyzer if analyzer is not None else DocumentAnalyzerFactory.create(settings)
    renderer = renderer if renderer is not None else RendererFactory.create(settings)
    return Processor(
        steps=[
            ValidateUploadStep(),
            StoreOriginalStep(store),
            AnalyzeStep(store, analyzer),
            RenderStep(renderer),
            StoreResultStep(store),
        ]
    )
