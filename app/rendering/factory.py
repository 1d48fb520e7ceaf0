from app.config.settings import Settings
from app.rendering.base import BaseRenderer
from app.rendering.docx_renderer import DocxRenderer


class RendererFactory:
    """Creates the result document renderer."""

    @classmethod
    def create(cls, settings: Settings) -> BaseRenderer:
        _ = settings  # only .docx output is produced
        return DocxRenderer()
