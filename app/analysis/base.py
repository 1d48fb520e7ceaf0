from abc import ABC, abstractmethod

from app.analysis.poll import CancelToken


class BaseDocumentAnalyzer(ABC):
    """Contract for all document analysis adapters."""

    @abstractmethod
    def analyze(self, data: bytes, content_type: str, cancel: CancelToken) -> str:
        """Run remote analysis over a document and return its extracted text.

        Args:
            data: Raw document bytes.
            content_type: Declared MIME type of the document.
            cancel: Cancellation signal of the enclosing request.

        Returns:
            Extracted text.

        Raises:
            AnalysisError: on any failure.
        """
