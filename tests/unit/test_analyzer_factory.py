from unittest.mock import patch

import pytest

from app.analysis.auth import KeyAuth, TokenAuth
from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.example_adapter import ExampleAnalyzer
from app.analysis.factory import DocumentAnalyzerFactory
from app.config.settings import Settings


class TestDocumentAnalyzerFactory:
    def test_creates_example_adapter(self) -> None:
        analyzer = DocumentAnalyzerFactory.create(Settings(analysis_provider="example"))
        assert isinstance(analyzer, ExampleAnalyzer)
        assert "Example analysis result" in analyzer.analyze(b"x", "application/pdf", None)

    def test_creates_document_intelligence_adapter(self) -> None:
        settings = Settings(
            analysis_provider="document_intelligence",
            analysis_endpoint="https://svc/",
            analysis_key="k",
            analysis_model_id="prebuilt-read",
            analysis_api_version="2024-11-30",
            analysis_timeout_seconds=12,
            analysis_poll_interval_seconds=0.5,
            analysis_max_poll_attempts=7,
        )
        with patch("app.analysis.factory.DocumentIntelligenceAnalyzer") as mock_adapter:
            analyzer = DocumentAnalyzerFactory.create(settings)

        assert analyzer is mock_adapter.return_value
        kwargs = mock_adapter.call_args.kwargs
        assert kwargs["endpoint"] == "https://svc/"
        assert isinstance(kwargs["auth"], KeyAuth)
        assert kwargs["model_id"] == "prebuilt-read"
        assert kwargs["api_version"] == "2024-11-30"
        assert kwargs["timeout_seconds"] == 12
        assert kwargs["poll_interval_seconds"] == 0.5
        assert kwargs["max_poll_attempts"] == 7

    def test_real_adapter_is_a_base_analyzer(self) -> None:
        settings = Settings(analysis_endpoint="https://svc/", analysis_key="k")
        assert isinstance(DocumentAnalyzerFactory.create(settings), BaseDocumentAnalyzer)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown analysis provider 'textract'"):
            DocumentAnalyzerFactory.create(Settings(analysis_provider="textract"))


class TestAuthSelection:
    def test_key_selects_key_auth(self) -> None:
        assert isinstance(DocumentAnalyzerFactory.create_auth(Settings(analysis_key="k")), KeyAuth)

    def test_missing_key_selects_token_auth(self) -> None:
        with patch("app.analysis.factory.DefaultAzureCredential") as mock_credential:
            auth = DocumentAnalyzerFactory.create_auth(Settings(analysis_key=""))
        assert isinstance(auth, TokenAuth)
        mock_credential.assert_called_once_with()

    def test_blank_key_selects_token_auth(self) -> None:
        with patch("app.analysis.factory.DefaultAzureCredential"):
            auth = DocumentAnalyzerFactory.create_auth(Settings(analysis_key="   "))
        assert isinstance(auth, TokenAuth)
