"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from raprecord import create_app
from raprecord.config import Settings
from raprecord.downloaders.base import Downloader
from raprecord.models.tool import ToolResult
from raprecord.storage.download_store import DownloadStore

VIDEO_ID = "abc12345678"
AUDIO_BYTES = b"ID3" + bytes(range(256)) * 8


class FakeDownloader(Downloader):
    """Records every call and writes AUDIO_BYTES where yt-dlp would."""

    def __init__(
        self,
        title: str = "Test Track",
        probe: ToolResult | None = None,
        extract: ToolResult | None = None,
        partial: bytes | None = None,
        delay: float = 0,
    ) -> None:
        self.title = title
        self.probe = probe
        self.extract = extract
        self.partial = partial
        self.delay = delay
        self.calls: list[tuple] = []

    async def fetch_title(self, video_url: str) -> ToolResult:
        self.calls.append(("title", video_url))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.probe or ToolResult(returncode=0, stdout=f"{self.title}\n")

    async def extract_audio(self, video_url: str, output_path: Path) -> ToolResult:
        self.calls.append(("extract", video_url, Path(output_path)))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.extract is not None:
            if self.partial is not None:
                Path(output_path).write_bytes(self.partial)
            return self.extract
        Path(output_path).write_bytes(AUDIO_BYTES)
        return ToolResult(returncode=0)


@pytest.fixture
def store(tmp_path: Path) -> DownloadStore:
    """Initialised store rooted in a temporary downloads directory."""
    download_store = DownloadStore(tmp_path / "downloads")
    download_store.init()
    return download_store


@pytest.fixture
def cached_store(store: DownloadStore) -> DownloadStore:
    """Store that already holds VIDEO_ID's artifact and metadata entry."""
    store.artifact_path(VIDEO_ID).write_bytes(AUDIO_BYTES)
    store.metadata.save({VIDEO_ID: {"title": "Cached Track"}})
    return store


@pytest.fixture
def fake_downloader() -> FakeDownloader:
    return FakeDownloader()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    return Settings(downloads_dir=tmp_path / "downloads")


@pytest.fixture
def client(test_settings: Settings, fake_downloader: FakeDownloader) -> TestClient:
    app = create_app(settings=test_settings, downloader=fake_downloader)
    return TestClient(app)
