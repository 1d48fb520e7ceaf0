import httpx
from azure.identity import DefaultAzureCredential

from app.analysis.auth import KeyAuth, TokenAuth
from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.document_intelligence_adapter import DocumentIntelligenceAnalyzer
from app.analysis.example_adapter import ExampleAnalyzer
from app.config.settings import Settings
from app.logging.logger import Log


class DocumentAnalyzerFactory:
    """Creates the configured document analysis adapter."""

    PROVIDERS = ("document_intelligence", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentAnalyzer:
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ExampleAnalyzer()
        if provider == "document_intelligence":
            return DocumentIntelligenceAnalyzer(
                endpoint=settings.analysis_endpoint,
                auth=cls.create_auth(settings),
                model_id=settings.analysis_model_id,
                api_version=settings.analysis_api_version,
                timeout_seconds=settings.analysis_timeout_seconds,
                poll_interval_seconds=settings.analysis_poll_interval_seconds,
                max_poll_attempts=settings.analysis_max_poll_attempts,
            )
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @classmethod
    def create_auth(cls, settings: Settings) -> httpx.Auth:
        """Static key when one is configured, identity token otherwise."""
        key = settings.analysis_key.strip()
        if key:
            Log.info("Using API key for analysis authentication")
            return KeyAuth(key)
        Log.info("Using managed identity for analysis authentication")
        return TokenAuth(DefaultAzureCredential())
