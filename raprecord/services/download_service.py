"""
Download service

Resolve id -> cache gate -> (hit) cached title, or (miss) one shared
extraction per video id -> DownloadResult
"""
import asyncio
import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from raprecord.downloaders.base import Downloader
from raprecord.exceptions import ExtractionError, InvalidURLError, MissingURLError
from raprecord.models.download import CacheHit, DownloadResult, ExtractionOutcome
from raprecord.resolver import resolve_video_id
from raprecord.services.extraction import ExtractionPipeline
from raprecord.storage.download_store import DownloadStore

logger = logging.getLogger(__name__)


class DownloadService:
    """
    Download orchestration with a local cache

    Concurrent requests for the same uncached video share a single
    extraction task instead of each spawning yt-dlp.
    """

    def __init__(self, store: DownloadStore, downloader: Downloader):
        self.store = store
        self.pipeline = ExtractionPipeline(downloader, store)
        self._in_flight: dict[str, asyncio.Task] = {}

    async def lookup(self, video_id: str) -> Optional[CacheHit]:
        """Hit only when the artifact AND its metadata entry both exist"""
        return await run_in_threadpool(self._lookup, video_id)

    def _lookup(self, video_id: str) -> Optional[CacheHit]:
        if not self.store.has_artifact(video_id):
            return None
        title = self.store.metadata.get(video_id)
        if title is None:
            return None
        return CacheHit(title=title)

    async def download(self, url: Optional[str]) -> DownloadResult:
        """
        Serve a video's audio from cache or extract it

        :param url: video URL or bare id
        :return: DownloadResult, cached=True on a cache hit
        :raises MissingURLError: url empty
        :raises InvalidURLError: no video id in url
        :raises ExtractionError: title probe or audio extraction failed
        """
        url = (url or "").strip()
        if not url:
            raise MissingURLError()

        video_id = resolve_video_id(url)
        if not video_id:
            raise InvalidURLError()

        task = self._in_flight.get(video_id)
        if task is None:
            hit = await self.lookup(video_id)
            if hit:
                logger.info(f"[Download] cache hit for {video_id}: {hit.title}")
                return DownloadResult(id=video_id, title=hit.title, cached=True)
            # re-check: another request may have registered while we were reading
            task = self._in_flight.get(video_id)

        if task is None:
            logger.info(f"[Download] request for: {url} (videoId: {video_id})")
            task = asyncio.ensure_future(self.pipeline.run(url, video_id))
            self._in_flight[video_id] = task
            task.add_done_callback(lambda t: self._release(video_id, t))
        else:
            logger.info(f"[Download] joining in-flight extraction for {video_id}")

        outcome: ExtractionOutcome = await asyncio.shield(task)
        if not outcome.ok:
            raise ExtractionError(outcome.error)
        return DownloadResult(id=video_id, title=outcome.title, cached=False)

    def _release(self, video_id: str, task: asyncio.Task) -> None:
        if self._in_flight.get(video_id) is task:
            del self._in_flight[video_id]

    def in_flight(self) -> list[str]:
        """Video ids currently being extracted"""
        return list(self._in_flight)
