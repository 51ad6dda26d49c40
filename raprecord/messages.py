"""
User-facing error text

Known yt-dlp failures get a friendlier message; everything else is shown as-is.
"""

FRIENDLY_MESSAGES: list[tuple[str, str]] = [
    ("Sign in to confirm", "This video is blocked by YouTube bot detection. Try a different video."),
    ("Video unavailable", "Video unavailable or private."),
    ("Invalid YouTube URL", "Invalid YouTube URL. Please check and try again."),
]


def friendly_message(error: str) -> str:
    for needle, message in FRIENDLY_MESSAGES:
        if needle in error:
            return message
    return error
