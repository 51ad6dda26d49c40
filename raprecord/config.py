"""
RapRecord configuration
Loads every setting from the environment (and .env), exposes the global `settings`
"""
import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass
class Settings:
    """Global configuration"""

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))

    # Storage: audio artifacts and metadata.json live here
    downloads_dir: Path = BASE_DIR / os.getenv("DOWNLOADS_DIR", "downloads")

    # yt-dlp executable and the tool directory prepended to its PATH
    ytdlp_path: str = os.getenv("YTDLP_PATH", "yt-dlp")
    extra_tool_dir: str = os.path.expanduser(os.getenv("EXTRA_TOOL_DIR", "~/.deno/bin"))

    # Subprocess timeouts (seconds)
    probe_timeout: float = float(os.getenv("PROBE_TIMEOUT", "60"))
    extract_timeout: float = float(os.getenv("EXTRACT_TIMEOUT", "900"))


settings = Settings()
