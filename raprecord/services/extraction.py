"""
Extraction pipeline

PROBING_TITLE -> EXTRACTING_AUDIO -> DONE, or FAILED at either stage.
Each stage consumes the previous stage's result; failures come back as an
ExtractionOutcome instead of an exception.
"""
import logging

from fastapi.concurrency import run_in_threadpool

from raprecord.downloaders.base import Downloader
from raprecord.exceptions import StorageError
from raprecord.models.download import ExtractionOutcome, ExtractionStage
from raprecord.storage.download_store import DownloadStore

logger = logging.getLogger(__name__)

UNTITLED = "Untitled"


class ExtractionPipeline:
    """Title probe, audio extraction, metadata write; strictly in that order"""

    def __init__(self, downloader: Downloader, store: DownloadStore):
        self.downloader = downloader
        self.store = store

    async def run(self, source_url: str, video_id: str) -> ExtractionOutcome:
        stage = ExtractionStage.PROBING_TITLE
        logger.info(f"[Extract] {video_id}: {stage.value}")
        probe = await self.downloader.fetch_title(source_url)
        if probe.timed_out:
            return self._fail(video_id, stage, "timeout")
        if not probe.ok:
            detail = probe.stderr or "Unknown error"
            logger.error(f"[Extract] yt-dlp title error: {detail}")
            return self._fail(video_id, stage, f"Failed to get video info: {detail}")
        title = probe.stdout.strip() or UNTITLED

        stage = ExtractionStage.EXTRACTING_AUDIO
        logger.info(f"[Extract] {video_id}: {stage.value} ({title})")
        output_path = self.store.artifact_path(video_id)
        extraction = await self.downloader.extract_audio(source_url, output_path)
        if not extraction.ok:
            reason = "timeout" if extraction.timed_out else f"yt-dlp failed: {extraction.stderr}"
            try:
                await run_in_threadpool(self.store.remove_partial, video_id)
            except OSError as e:
                logger.error(f"[Extract] cleanup of {video_id} failed: {e}")
                reason = f"{reason} (cleanup failed: {e})"
            return self._fail(video_id, stage, reason)

        try:
            await self.store.metadata.upsert(video_id, title)
        except StorageError as e:
            return self._fail(video_id, stage, str(e))
        logger.info(f"[Extract] downloaded {video_id}: {title}")
        return ExtractionOutcome(stage=ExtractionStage.DONE, title=title)

    @staticmethod
    def _fail(video_id: str, stage: ExtractionStage, error: str) -> ExtractionOutcome:
        logger.warning(f"[Extract] {video_id} failed during {stage.value}: {error}")
        return ExtractionOutcome(stage=ExtractionStage.FAILED, error=error, failed_at=stage)
