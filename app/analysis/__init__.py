from app.analysis.base import BaseDocumentAnalyzer
from app.analysis.document_intelligence_adapter import DocumentIntelligenceAnalyzer
from app.analysis.factory import DocumentAnalyzerFactory

__all__ = ["BaseDocumentAnalyzer", "DocumentAnalyzerFactory", "DocumentIntelligenceAnalyzer"]
