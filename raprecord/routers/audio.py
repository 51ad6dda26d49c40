"""
Audio API routes

  1. POST /api/download      — resolve, serve from cache or extract with yt-dlp
  2. GET  /api/audio/{id}    — stream a stored mp3 (byte ranges supported)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import FileResponse

from raprecord.models.download import DownloadRequest, DownloadResponse, ErrorResponse
from raprecord.services.audio_delivery import MEDIA_TYPE, open_artifact
from raprecord.services.download_service import DownloadService
from raprecord.storage.download_store import DownloadStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["audio"])


def get_download_service(request: Request) -> DownloadService:
    return request.app.state.download_service


def get_store(request: Request) -> DownloadStore:
    return request.app.state.store


# ==================== API Endpoints ====================


@router.post(
    "/download",
    summary="Download audio",
    response_model=DownloadResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid URL"},
        500: {"model": ErrorResponse, "description": "yt-dlp or storage failure"},
    },
)
async def download_audio(
    req: Optional[DownloadRequest] = Body(None),
    service: DownloadService = Depends(get_download_service),
):
    """
    Extract a video's audio, or return it straight from the cache

    Errors are rendered by the handlers registered in create_app()
    """
    result = await service.download(req.url if req else None)
    return DownloadResponse(id=result.id, title=result.title, cached=result.cached)


@router.get(
    "/audio/{video_id}",
    summary="Stream audio",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse, "description": "Audio file not found"}},
)
def get_audio(video_id: str, store: DownloadStore = Depends(get_store)):
    """Stream the stored mp3; Range requests get 206 / 416"""
    artifact = open_artifact(store, video_id)
    logger.debug(f"[Audio] serving {artifact.path.name} ({artifact.size} bytes)")
    return FileResponse(
        artifact.path,
        media_type=MEDIA_TYPE,
        headers={"Accept-Ranges": "bytes"},
    )
