"""
RapRecord - paste a video link, get playable audio, cached locally
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from raprecord.config import Settings
from raprecord.downloaders.base import Downloader
from raprecord.exceptions import MissingURLError, RapRecordError
from raprecord.messages import friendly_message

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "message": friendly_message(error)},
    )


def create_app(
    settings: Optional[Settings] = None,
    downloader: Optional[Downloader] = None,
) -> FastAPI:
    from raprecord.config import settings as default_settings
    from raprecord.downloaders.ytdlp_downloader import YtdlpDownloader
    from raprecord.routers import audio
    from raprecord.services.download_service import DownloadService
    from raprecord.storage.download_store import DownloadStore

    settings = settings or default_settings
    store = DownloadStore(settings.downloads_dir)
    store.init()

    if downloader is None:
        downloader = YtdlpDownloader(
            executable=settings.ytdlp_path,
            extra_tool_dir=settings.extra_tool_dir,
            probe_timeout=settings.probe_timeout,
            extract_timeout=settings.extract_timeout,
        )

    app = FastAPI(
        title="RapRecord",
        description="Submit a video URL, get its audio as mp3; repeat requests are served from cache",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.download_service = DownloadService(store, downloader)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RapRecordError)
    async def app_error_handler(request: Request, exc: RapRecordError):
        if exc.status_code >= 500:
            logger.error(f"[API] {request.url.path} failed: {exc}")
        return _error_response(exc.status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, str(MissingURLError()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"[API] {request.url.path} crashed: {exc}", exc_info=True)
        return _error_response(500, str(exc) or "Failed to download audio")

    app.include_router(audio.router, prefix="/api")
    return app
