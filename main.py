"""
RapRecord — video URL in, cached mp3 out

Start with:
    python main.py
    or
    uvicorn main:app --host 0.0.0.0 --port 3001 --reload
"""
import logging

import uvicorn

from raprecord import create_app
from raprecord.config import settings

# Logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-7s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("raprecord")

app = create_app()

if __name__ == "__main__":
    logger.info(f"🚀 RapRecord starting on http://{settings.host}:{settings.port}")
    logger.info(f"📖 API docs: http://127.0.0.1:{settings.port}/docs")
    logger.info(f"📁 Downloads: {settings.downloads_dir}")
    logger.info(f"🎵 yt-dlp: {settings.ytdlp_path}")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        reload=False,
    )
