import asyncio
import contextlib
import threading
from datetime import datetime, timezone
from urllib.parse import quote

from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, StreamingResponse
from starlette.concurrency import run_in_threadpool

from app.analysis.exceptions import AnalysisCancelledError, AnalysisError
from app.download.handler import DownloadHandler
from app.logging.logger import Log
from app.processor.exceptions import UploadValidationError
from app.processor.models import UploadOutcome
from app.processor.processor import Processor
from app.processor.validation import check_upload_size
from app.storage.exceptions import ObjectNotFoundError, StoreError
from app.web.schemas import ErrorResponse, HealthResponse, UploadResponse

router = APIRouter()

DISCONNECT_CHECK_SECONDS = 0.5
CLIENT_CLOSED_REQUEST = 499

UPLOAD_FORM = """<!doctype html>
<html>
  <head><title>Upload a document</title></head>
  <body>
    <form action="/upload" method="post" enctype="multipart/form-data">
      <input type="file" name="file">
      <button type="submit">Analyze</button>
    </form>
  </body>
</html>
"""


def _processor(request: Request) -> Processor:
    return request.app.state.processor


def _download_handler(request: Request) -> DownloadHandler:
    return request.app.state.download_handler


async def _watch_disconnect(request: Request, cancel: threading.Event) -> None:
    """Set `cancel` once the client goes away."""
    while not cancel.is_set():
        if await request.is_disconnected():
            Log.warning("Client disconnected, cancelling upload processing")
            cancel.set()
            return
        await asyncio.sleep(DISCONNECT_CHECK_SECONDS)


def _status_code_for(outcome: UploadOutcome) -> int:
    if isinstance(outcome.error, UploadValidationError):
        return 400
    if isinstance(outcome.error, AnalysisCancelledError):
        return CLIENT_CLOSED_REQUEST
    if isinstance(outcome.error, (StoreError, AnalysisError)):
        return 502
    return 500


@router.get("/", include_in_schema=False)
def index() -> RedirectResponse:
    return RedirectResponse(url="/upload")


@router.get("/upload", response_class=HTMLResponse, include_in_schema=False)
def upload_form() -> str:
    return UPLOAD_FORM


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse},
        CLIENT_CLOSED_REQUEST: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def upload(request: Request, file: UploadFile | None = File(default=None)) -> JSONResponse:
    """Store, analyze and render one document; answer with its download link."""
    filename = (file.filename or "") if file is not None else ""
    if file is not None and file.size is not None:
        try:
            check_upload_size(file.size)
        except UploadValidationError as exc:
            Log.warning(f"Upload {filename} rejected before reading: {exc}")
            error = ErrorResponse(message=str(exc))
            return JSONResponse(error.model_dump(), status_code=400)
    data = await file.read() if file is not None else b""

    cancel = threading.Event()
    watcher = asyncio.create_task(_watch_disconnect(request, cancel))
    try:
        outcome = await run_in_threadpool(_processor(request).process, filename, data, cancel)
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher

    if outcome.succeeded:
        body = UploadResponse(
            message=outcome.message,
            handle=outcome.handle or "",
            download_link=outcome.download_link or "",
            analysis_result=outcome.analysis_text or "",
        )
        return JSONResponse(body.model_dump())

    error = ErrorResponse(message=outcome.message, hint=outcome.hint)
    return JSONResponse(error.model_dump(), status_code=_status_code_for(outcome))


@router.get("/download")
def download(request: Request, file: str | None = Query(default=None)) -> StreamingResponse:
    """Stream a stored result document back to the client."""
    try:
        stored = _download_handler(request).resolve(file)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail="File not found") from exc
    return StreamingResponse(
        iter(stored.chunks),
        media_type=stored.content_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(stored.key)}"},
    )


@router.get("/healthz", response_model=HealthResponse)
def healthz(request: Request) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version=request.app.state.settings.app_version,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
