"""Example analysis adapter.

Returns a fixed text with no network calls. Useful for local development
and as a template for new providers: implement BaseDocumentAnalyzer and
register it in DocumentAnalyzerFactory.
"""

from typing import ClassVar

from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.poll import CancelToken


class ExampleAnalyzer(BaseDocumentAnalyzer):
    DEFAULT_TEXT: ClassVar[str] = "=== Document Content ===\nExample analysis result\n"

    def analyze(self, data: bytes, content_type: str, cancel: CancelToken) -> str:
        _ = data, content_type, cancel
        return self.DEFAULT_TEXT
