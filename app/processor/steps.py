from app.analysis.base import BaseDocumentAnalyzer
from app.logging.logger import Log
from app.processor.models import UploadState
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.validation import validate_upload
from app.rendering.base import BaseRenderer
from app.storage.client import ObjectStoreClient
from app.storage.models import Bucket


class ValidateUploadStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        context.upload = validate_upload(context.filename, context.raw_bytes)
        context.transition(UploadState.VALIDATED)
        Log.info(
            f"Validated upload {context.upload.filename} "
            f"({len(context.upload.data)} bytes, {context.upload.content_type})"
        )
        return context


class StoreOriginalStep(PipelineStep):
    def __init__(self, store: ObjectStoreClient) -> None:
        self._store = store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before storing the original")
        context.original_handle = self._store.put(
            Bucket.INBOUND,
            context.upload.filename,
            context.upload.data,
            context.upload.content_type,
        )
        context.transition(UploadState.STORED_ORIGINAL)
        Log.info(f"File uploaded to blob storage: {context.original_handle.key}")
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, store: ObjectStoreClient, analyzer: BaseDocumentAnalyzer) -> None:
        self._store = store
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None or context.original_handle is None:
            raise ValueError("PipelineContext.original_handle must be set before analysis")
        context.transition(UploadState.ANALYZING)
        stored = self._store.get(Bucket.INBOUND, context.original_handle)
        context.extracted_text = self._analyzer.analyze(
            stored.read(),
            context.upload.content_type,
            context.cancel,
        )
        context.transition(UploadState.ANALYZED)
        Log.info(
            f"Analysis of {context.upload.filename} completed: "
            f"{len(context.extracted_text)} chars"
        )
        return context


class RenderStep(PipelineStep):
    def __init__(self, renderer: BaseRenderer) -> None:
        self._renderer = renderer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.upload is None:
            raise ValueError("PipelineContext.upload must be set before rendering")
        context.rendered = self._renderer.render(context.extracted_text, context.upload.filename)
        context.transition(UploadState.RENDERED)
        return context


class StoreResultStep(PipelineStep):
    def __init__(self, store: ObjectStoreClient) -> None:
        self._store = store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.rendered is None:
            raise ValueError("PipelineContext.rendered must be set before storing the result")
        context.result_handle = self._store.put(
            Bucket.OUTBOUND,
            context.rendered.filename,
            context.rendered.data,
            context.rendered.content_type,
        )
        context.transition(UploadState.STORED_RESULT)
        Log.info(f"Processed file uploaded: {context.result_handle.key}")
        return context
