from dataclasses import dataclass

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass(frozen=True)
class RenderedArtifact:
    """A generated result document ready to be stored."""

    data: bytes
    content_type: str
    filename: str
