"""
yt-dlp subprocess downloader
Drives the yt-dlp executable through its CLI, one child process per step
"""
import asyncio
import logging
import os
import signal
from pathlib import Path
from typing import Optional

from raprecord.downloaders.base import Downloader
from raprecord.models.tool import ToolResult

logger = logging.getLogger(__name__)


def build_tool_env(extra_tool_dir: Optional[str]) -> dict[str, str]:
    """Process environment with extra_tool_dir prepended to PATH"""
    env = dict(os.environ)
    if extra_tool_dir:
        env["PATH"] = f"{extra_tool_dir}{os.pathsep}{env.get('PATH', '')}"
    return env


def _kill_process_group(proc: asyncio.subprocess.Process) -> None:
    """Kill yt-dlp and the ffmpeg children it spawned"""
    try:
        if hasattr(os, "killpg"):
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        pass


class YtdlpDownloader(Downloader):
    """
    yt-dlp CLI downloader

    The executable and its environment are fixed at construction time and
    shared by every request.
    """

    AUDIO_FORMAT = "mp3"

    def __init__(
        self,
        executable: str = "yt-dlp",
        extra_tool_dir: Optional[str] = None,
        probe_timeout: Optional[float] = 60,
        extract_timeout: Optional[float] = 900,
    ):
        self.executable = executable
        self.env = build_tool_env(extra_tool_dir)
        self.probe_timeout = probe_timeout
        self.extract_timeout = extract_timeout
        logger.info(f"[yt-dlp] executable={executable}, extra PATH={extra_tool_dir}")

    async def fetch_title(self, video_url: str) -> ToolResult:
        return await self._run(["--get-title", video_url], self.probe_timeout)

    async def extract_audio(self, video_url: str, output_path: Path) -> ToolResult:
        args = [
            "-x",
            "--audio-format", self.AUDIO_FORMAT,
            "-o", str(output_path),
            video_url,
        ]
        return await self._run(args, self.extract_timeout)

    async def _run(self, args: list[str], timeout: Optional[float]) -> ToolResult:
        """Spawn yt-dlp, wait for exit, kill it if it outlives timeout"""
        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self.env,
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f"[yt-dlp] failed to start {self.executable}: {e}")
            return ToolResult(returncode=-1, stderr=str(e))

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            _kill_process_group(proc)
            await proc.wait()
            logger.warning(f"[yt-dlp] killed after {timeout}s: {args[0]}")
            return ToolResult(returncode=proc.returncode, timed_out=True)

        return ToolResult(
            returncode=proc.returncode,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )
