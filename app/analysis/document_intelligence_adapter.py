from typing import Any

import httpx

from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.exceptions import (
    AnalysisHttpError,
    AnalysisJobFailedError,
    AnalysisParseError,
    AnalysisProtocolError,
)
from app.analysis.models import AnalysisJob, JobStatus
from app.analysis.poll import CancelToken, poll_until_terminal
from app.logging.logger import Log

OPERATION_LOCATION_HEADER = "Operation-Location"


class DocumentIntelligenceAnalyzer(BaseDocumentAnalyzer):
    """Runs the Azure Document Intelligence analyze operation over raw bytes."""

    def __init__(
        self,
        *,
        endpoint: str,
        auth: httpx.Auth,
        model_id: str = "prebuilt-document",
        api_version: str = "2023-07-31",
        timeout_seconds: int = 30,
        poll_interval_seconds: float = 1.0,
        max_poll_attempts: int = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not endpoint:
            raise ValueError(
                "analysis_endpoint is required for analysis_provider=document_intelligence"
            )
        self._analyze_url = (
            f"{endpoint.rstrip('/')}/formrecognizer/documentModels/{model_id}:analyze"
        )
        self._api_version = api_version
        self._client = httpx.Client(auth=auth, timeout=timeout_seconds, transport=transport)
        self._poll_interval_seconds = poll_interval_seconds
        self._max_poll_attempts = max_poll_attempts

    def analyze(self, data: bytes, content_type: str, cancel: CancelToken) -> str:
        Log.info(f"Submitting {len(data)} bytes ({content_type}) to {self._analyze_url}")
        response = self._send(
            "POST",
            self._analyze_url,
            params={"api-version": self._api_version},
            content=data,
            headers={"Content-Type": content_type},
        )

        if response.status_code == 202:
            location = response.headers.get(OPERATION_LOCATION_HEADER)
            if not location:
                Log.error("Accepted analysis response has no Operation-Location header")
                raise AnalysisProtocolError("No Operation-Location header found.")
            Log.info(f"Document analysis started. Polling results from {location}")
            return self._await_job(AnalysisJob(location=location), cancel)

        body = response.text
        if not body.strip():
            Log.error("Analysis service returned an empty response")
            raise AnalysisProtocolError("Empty response from the analysis service.")
        return body

    def _await_job(self, job: AnalysisJob, cancel: CancelToken) -> str:
        job = poll_until_terminal(
            job,
            self._fetch_status,
            cancel=cancel,
            interval_seconds=self._poll_interval_seconds,
            max_attempts=self._max_poll_attempts,
        )
        if job.status is JobStatus.FAILED:
            Log.error(f"Analysis failed: {job.error_detail}")
            raise AnalysisJobFailedError(
                f"Analysis failed. {job.error_detail}".strip(), detail=job.error_detail
            )
        return job.text

    def _fetch_status(self, location: str) -> Any:
        response = self._send("GET", location)
        try:
            return response.json()
        except ValueError as exc:
            Log.error(f"Failed to parse polling response: {exc}")
            raise AnalysisParseError("Failed to parse polling response.") from exc

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            Log.error(f"Analysis request {method} {url} failed: {exc}")
            raise AnalysisHttpError(f"Analysis service request failed: {exc}") from exc
        if response.is_success:
            return response
        Log.error(
            f"Analysis request {method} {url} failed with status {response.status_code}: "
            f"{response.text}"
        )
        if response.status_code == 403:
            raise AnalysisHttpError(
                "Access forbidden (403). The identity may not have the required permissions yet.",
                status_code=403,
            )
        raise AnalysisHttpError(
            f"Unable to analyze file. Status: {response.status_code}",
            status_code=response.status_code,
        )
