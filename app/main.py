import uvicorn
from fastapi import FastAPI

from app.config.settings import Settings
from app.download.handler import DownloadHandler
from app.logging.logger import Log
from app.processor.processor import build_processor
from app.storage.factory import ObjectStoreFactory
from app.web.app import create_app


def build_app(settings: Settings) -> FastAPI:
    """Wire long-lived clients once and hand them to the HTTP layer."""
    store = ObjectStoreFactory.create(settings)
    processor = build_processor(settings, store=store)
    return create_app(settings, processor, DownloadHandler(store))


def main() -> None:
    """Entry point: load settings -> configure logging -> build app -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(f"Starting document analysis service ({settings.app_env})")
    uvicorn.run(
        build_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
