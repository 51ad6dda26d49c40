"""
Metadata document: video id -> {"title": ...}

The whole JSON document is read on every access and rewritten on every save.
Writes from this process go through upsert(), which holds a lock across the
read-modify-write so concurrent downloads never drop each other's entries.
File I/O in the async entry points runs in the threadpool.
"""
import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from raprecord.exceptions import StorageError

logger = logging.getLogger(__name__)


class MetadataStore:
    """JSON-file backed mapping of video id to metadata entry"""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._write_lock = asyncio.Lock()

    def load(self) -> dict[str, dict]:
        """Read the whole document; empty when it does not exist yet"""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read metadata: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(
                f"Failed to read metadata: expected an object, got {type(data).__name__}"
            )
        for video_id, entry in data.items():
            if not isinstance(entry, dict) or not isinstance(entry.get("title"), str):
                raise StorageError(f"Failed to read metadata: bad entry for {video_id}")
        return data

    def save(self, metadata: dict[str, dict]) -> None:
        """Overwrite the whole document (temp file + rename, never half-written)"""
        tmp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=".metadata-", suffix=".json"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(metadata, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageError(f"Failed to write metadata: {e}") from e

    def get(self, video_id: str) -> Optional[str]:
        """Title recorded for video_id, from a fresh load"""
        entry = self.load().get(video_id)
        return entry["title"] if entry else None

    async def upsert(self, video_id: str, title: str) -> None:
        """Record a title, serialised against other writers in this process"""
        async with self._write_lock:
            await run_in_threadpool(self._upsert, video_id, title)
        logger.debug(f"[Metadata] saved {video_id}: {title}")

    def _upsert(self, video_id: str, title: str) -> None:
        metadata = self.load()
        metadata[video_id] = {"title": title}
        self.save(metadata)
