from fastapi import FastAPI

from app.config.settings import Settings
from app.download.handler import DownloadHandler
from app.processor.processor import Processor
from app.web.routes import router


def create_app(
    settings: Settings,
    processor: Processor,
    download_handler: DownloadHandler,
) -> FastAPI:
    """Build the HTTP application around long-lived, already wired collaborators."""
    app = FastAPI(
        title="Document analysis service",
        description="Uploads documents, analyzes them and serves the results as .docx",
        version=settings.app_version,
    )
    app.state.settings = settings
    app.state.processor = processor
    app.state.download_handler = download_handler
    app.include_router(router)
    return app
