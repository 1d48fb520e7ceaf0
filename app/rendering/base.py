from abc import ABC, abstractmethod
from datetime import datetime

from app.rendering.models import RenderedArtifact


class BaseRenderer(ABC):
    """Contract for all result document renderers."""

    @abstractmethod
    def render(
        self,
        text: str,
        original_filename: str,
        generated_at: datetime | None = None,
    ) -> RenderedArtifact:
        """Build a downloadable document from extracted text.

        Args:
            text: Extracted text; each line becomes one paragraph.
            original_filename: Name of the uploaded file, used in the title.
            generated_at: Timestamp printed under the title. Defaults to now.

        Raises:
            RenderError: if the document cannot be produced.
        """
