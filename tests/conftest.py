import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.config.settings import Settings
from app.storage.client import ObjectStoreClient
from app.storage.memory_adapter import MemoryObjectStore


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Invoice Total: $42")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def memory_backend() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture()
def memory_store(memory_backend: MemoryObjectStore) -> ObjectStoreClient:
    return ObjectStoreClient(
        memory_backend,
        inbound_container="uploads",
        outbound_container="downloads",
    )


@pytest.fixture()
def local_settings() -> Settings:
    """Settings that need no network: in-memory store and example analyzer."""
    return Settings(storage_backend="memory", analysis_provider="example")

