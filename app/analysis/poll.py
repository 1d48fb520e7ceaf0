"""Poll loop for long-running analysis jobs.

`advance` is the pure decision step: it folds one status payload into the
job. `poll_until_terminal` owns the waiting, the attempt ceiling and
cancellation.
"""

import json
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Protocol

from app.analysis.exceptions import (
    AnalysisCancelledError,
    AnalysisParseError,
    AnalysisTimeoutError,
)
from app.analysis.extraction import extract_text
from app.analysis.models import AnalysisJob, JobStatus
from app.logging.logger import Log

_PENDING_STATUSES = frozenset({"notStarted", "running"})
_FAILED_STATUSES = frozenset({"failed", "canceled"})


class CancelToken(Protocol):
    """Anything with `threading.Event.wait` semantics: True means cancelled."""

    def wait(self, timeout: float | None = None) -> bool: ...


def advance(job: AnalysisJob, payload: Any) -> AnalysisJob:
    """Return the job after observing one status payload.

    Terminal jobs are returned unchanged.

    Raises:
        AnalysisParseError: if the payload is not a recognizable status document.
    """
    if job.status.is_terminal:
        return job
    if not isinstance(payload, dict):
        raise AnalysisParseError("Status payload must be a JSON object")

    attempts = job.attempts + 1
    status = payload.get("status")
    if status in _PENDING_STATUSES:
        return replace(job, attempts=attempts)
    if status == "succeeded":
        analyze_result = payload.get("analyzeResult")
        if not isinstance(analyze_result, dict):
            raise AnalysisParseError("Succeeded status payload has no analyzeResult object")
        return replace(
            job,
            status=JobStatus.SUCCEEDED,
            attempts=attempts,
            text=extract_text(analyze_result),
        )
    if status in _FAILED_STATUSES:
        return replace(
            job,
            status=JobStatus.FAILED,
            attempts=attempts,
            error_detail=_describe_error(payload.get("error")),
        )
    raise AnalysisParseError(f"Unrecognized job status: {status!r}")


def poll_until_terminal(
    job: AnalysisJob,
    fetch_status: Callable[[str], Any],
    *,
    cancel: CancelToken,
    interval_seconds: float,
    max_attempts: int,
) -> AnalysisJob:
    """Wait, fetch, advance until the job is terminal.

    At most `max_attempts` status requests are issued in total.

    Raises:
        AnalysisCancelledError: if `cancel` fires while waiting.
        AnalysisTimeoutError: if the job is still pending after the last request.
    """
    while not job.status.is_terminal:
        if job.attempts >= max_attempts:
            Log.error(f"Analysis job {job.location} still running after {job.attempts} polls")
            raise AnalysisTimeoutError("Analysis timeout. Please try again.")
        if cancel.wait(interval_seconds):
            Log.warning(f"Polling of analysis job {job.location} cancelled")
            raise AnalysisCancelledError("Analysis was cancelled before it completed.")
        job = advance(job, fetch_status(job.location))
        Log.info(f"Analysis status after poll {job.attempts}: {job.status.value}")
    return job


def _describe_error(error: Any) -> str:
    if error is None:
        return ""
    if isinstance(error, str):
        return error
    return json.dumps(error, sort_keys=True)
