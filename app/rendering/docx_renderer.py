import io
import os
import re
from datetime import datetime

from docx import Document
from docx.shared import Pt

from app.rendering.base import BaseRenderer
from app.rendering.exceptions import RenderError
from app.rendering.models import DOCX_CONTENT_TYPE, RenderedArtifact

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

# Control characters XML 1.0 cannot carry; tab, LF and CR are allowed.
_XML_INVALID_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def split_lines(text: str) -> list[str]:
    """Split on CRLF, CR and LF, keeping empty lines."""
    return _LINE_BREAK_RE.split(text)


def xml_safe(text: str) -> str:
    """Drop control characters that cannot appear in a .docx part."""
    return _XML_INVALID_RE.sub("", text)


class DocxRenderer(BaseRenderer):
    """Renders extracted text into a Word document with python-docx."""

    TITLE_SIZE = Pt(16)

    def render(
        self,
        text: str,
        original_filename: str,
        generated_at: datetime | None = None,
    ) -> RenderedArtifact:
        generated_at = generated_at or datetime.now()
        try:
            document = Document()
            title = document.add_paragraph().add_run(
                xml_safe(f"Analysis Results - {original_filename}")
            )
            title.bold = True
            title.font.size = self.TITLE_SIZE
            document.add_paragraph(f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}")
            document.add_paragraph()
            for line in split_lines(xml_safe(text)):
                document.add_paragraph(line)
            document.core_properties.created = generated_at
            document.core_properties.modified = generated_at

            buffer = io.BytesIO()
            document.save(buffer)
        except (ValueError, TypeError) as exc:
            raise RenderError(f"Failed to render result document: {exc}") from exc

        stem = os.path.splitext(os.path.basename(original_filename))[0]
        return RenderedArtifact(
            data=buffer.getvalue(),
            content_type=DOCX_CONTENT_TYPE,
            filename=f"{stem}.docx",
        )
