import json
import threading
from collections.abc import Callable

import httpx
import pytest

from app.analysis.auth import KeyAuth
from app.analysis.document_intelligence_adapter import DocumentIntelligenceAnalyzer
from app.analysis.exceptions import (
    AnalysisHttpError,
    AnalysisJobFailedError,
    AnalysisParseError,
    AnalysisProtocolError,
    AnalysisTimeoutError,
)

ENDPOINT = "https://svc.cognitiveservices.azure.com/"
OPERATION_URL = "https://svc.cognitiveservices.azure.com/operations/42"


def _make_analyzer(
    handler: Callable[[httpx.Request], httpx.Response],
    max_poll_attempts: int = 30,
) -> DocumentIntelligenceAnalyzer:
    return DocumentIntelligenceAnalyzer(
        endpoint=ENDPOINT,
        auth=KeyAuth("secret"),
        poll_interval_seconds=0,
        max_poll_attempts=max_poll_attempts,
        transport=httpx.MockTransport(handler),
    )


def _accepted() -> httpx.Response:
    return httpx.Response(202, headers={"Operation-Location": OPERATION_URL})


def _status(payload: dict[str, object]) -> httpx.Response:
    return httpx.Response(200, json=payload)


class _Recorder:
    """Replays canned responses and keeps every request it saw."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)


class TestSubmit:
    def test_posts_bytes_with_content_type_and_key(self) -> None:
        recorder = _Recorder(httpx.Response(200, text="sync body"))
        analyzer = _make_analyzer(recorder)

        analyzer.analyze(b"%PDF", "application/pdf", threading.Event())

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/formrecognizer/documentModels/prebuilt-document:analyze"
        assert request.url.params["api-version"] == "2023-07-31"
        assert request.headers["Content-Type"] == "application/pdf"
        assert request.headers["Ocp-Apim-Subscription-Key"] == "secret"
        assert request.content == b"%PDF"

    def test_synchronous_body_is_returned(self) -> None:
        analyzer = _make_analyzer(_Recorder(httpx.Response(200, text="Invoice Total: $42")))

        assert analyzer.analyze(b"x", "application/pdf", threading.Event()) == "Invoice Total: $42"

    def test_empty_synchronous_body_raises(self) -> None:
        analyzer = _make_analyzer(_Recorder(httpx.Response(200, text="  ")))

        with pytest.raises(AnalysisProtocolError, match="Empty response"):
            analyzer.analyze(b"x", "application/pdf", threading.Event())

    def test_accepted_without_location_raises(self) -> None:
        analyzer = _make_analyzer(_Recorder(httpx.Response(202)))

        with pytest.raises(AnalysisProtocolError, match="Operation-Location"):
            analyzer.analyze(b"x", "application/pdf", threading.Event())

    def test_error_status_maps_to_http_error(self) -> None:
        analyzer = _make_analyzer(_Recorder(httpx.Response(500, text="boom")))

        with pytest.raises(AnalysisHttpError) as exc_info:
            analyzer.analyze(b"x", "application/pdf", threading.Event())

        assert exc_info.value.status_code == 500
        assert exc_info.value.hint is None

    def test_forbidden_carries_permission_hint(self) -> None:
        analyzer = _make_analyzer(_Recorder(httpx.Response(403, text="denied")))

        with pytest.raises(AnalysisHttpError) as exc_info:
            analyzer.analyze(b"x", "application/pdf", threading.Event())

        assert exc_info.value.status_code == 403
        assert exc_info.value.hint is not None

    def test_network_failure_maps_to_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        analyzer = _make_analyzer(handler)

        with pytest.raises(AnalysisHttpError, match="request failed") as exc_info:
            analyzer.analyze(b"x", "application/pdf", threading.Event())

        assert exc_info.value.status_code is None

    def test_requires_endpoint(self) -> None:
        with pytest.raises(ValueError, match="analysis_endpoint"):
            DocumentIntelligenceAnalyzer(endpoint="", auth=KeyAuth("k"))


class TestPolling:
    def test_polls_operation_location_until_succeeded(self) -> None:
        recorder = _Recorder(
            _accepted(),
            _status({"status": "running"}),
            _status({"status": "running"}),
            _status(
                {
                    "status": "succeeded",
                    "analyzeResult": {
                        "content": "Hello",
                        "keyValuePairs": [
                            {"key": {"content": "Name"}, "value": {"content": "Bob"}}
                        ],
                    },
                }
            ),
        )
        analyzer = _make_analyzer(recorder)

        text = analyzer.analyze(b"x", "image/png", threading.Event())

        status_requests = recorder.requests[1:]
        assert len(status_requests) == 3
        assert all(str(r.url) == OPERATION_URL for r in status_requests)
        assert all(r.method == "GET" for r in status_requests)
        assert all(r.headers["Ocp-Apim-Subscription-Key"] == "secret" for r in status_requests)
        assert "Hello" in text
        assert "Name: Bob" in text

    def test_failed_job_surfaces_remote_detail(self) -> None:
        error = {"code": "InvalidContent", "message": "corrupt file"}
        recorder = _Recorder(_accepted(), _status({"status": "failed", "error": error}))
        analyzer = _make_analyzer(recorder)

        with pytest.raises(AnalysisJobFailedError) as exc_info:
            analyzer.analyze(b"x", "application/pdf", threading.Event())

        assert json.loads(exc_info.value.detail) == error
        assert "corrupt file" in str(exc_info.value)

    def test_times_out_after_ceiling(self) -> None:
        recorder = _Recorder(_accepted(), *[_status({"status": "running"}) for _ in range(3)])
        analyzer = _make_analyzer(recorder, max_poll_attempts=3)

        with pytest.raises(AnalysisTimeoutError):
            analyzer.analyze(b"x", "application/pdf", threading.Event())

        assert len(recorder.requests) == 4

    def test_non_json_status_raises_parse_error(self) -> None:
        analyzer = _make_analyzer(_Recorder(_accepted(), httpx.Response(200, text="<html>")))

        with pytest.raises(AnalysisParseError):
            analyzer.analyze(b"x", "application/pdf", threading.Event())

    def test_error_status_while_polling_raises_http_error(self) -> None:
        analyzer = _make_analyzer(_Recorder(_accepted(), httpx.Response(404)))

        with pytest.raises(AnalysisHttpError) as exc_info:
            analyzer.analyze(b"x", "application/pdf", threading.Event())

        assert exc_info.value.status_code == 404
