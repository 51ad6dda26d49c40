"""
Downloads directory: one <id>.mp3 per video plus metadata.json
"""
import logging
from pathlib import Path

from raprecord.storage.metadata_store import MetadataStore

logger = logging.getLogger(__name__)

AUDIO_FORMAT = "mp3"
METADATA_FILENAME = "metadata.json"


class DownloadStore:
    """
    Explicit handle on the shared downloads directory

    init() runs once at startup; every component receives this object
    instead of reaching for module-level paths.
    """

    def __init__(self, downloads_dir: Path):
        self.downloads_dir = Path(downloads_dir)
        self.metadata = MetadataStore(self.downloads_dir / METADATA_FILENAME)

    def init(self) -> None:
        """Create the downloads directory if absent"""
        self.downloads_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"[Store] downloads dir: {self.downloads_dir}")

    def artifact_path(self, video_id: str) -> Path:
        return self.downloads_dir / f"{video_id}.{AUDIO_FORMAT}"

    def has_artifact(self, video_id: str) -> bool:
        return self.artifact_path(video_id).is_file()

    def remove_partial(self, video_id: str) -> None:
        """Delete whatever a failed extraction left behind"""
        # <id>.mp3, .part, .part-Frag*, .ytdl, <id>.temp.mp3 ...
        for leftover in self.downloads_dir.glob(f"{video_id}.*"):
            if leftover.is_file():
                leftover.unlink()
                logger.info(f"[Store] removed partial file {leftover.name}")
