"""
Downloader abstract base class
Every extraction backend subclasses this and implements both steps
"""
from abc import ABC, abstractmethod
from pathlib import Path

from raprecord.models.tool import ToolResult


class Downloader(ABC):
    """Two-step audio downloader: title probe, then audio extraction"""

    @abstractmethod
    async def fetch_title(self, video_url: str) -> ToolResult:
        """
        Probe the video title only

        :param video_url: source video URL
        :return: run result, title on stdout
        """
        ...

    @abstractmethod
    async def extract_audio(self, video_url: str, output_path: Path) -> ToolResult:
        """
        Extract the audio track as mp3 straight to output_path

        :param video_url: source video URL
        :param output_path: deterministic artifact path
        :return: run result, diagnostics on stderr
        """
        ...
