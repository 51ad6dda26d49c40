"""
Video identifier resolution

Pure string matching: pulls the canonical 11-character YouTube id out of any
supported URL shape, or accepts a bare id. Never touches the network.
"""
import re
from typing import Optional

_ID = r"[A-Za-z0-9_-]{11}"

# Order matters: URL shapes are tried before the bare id.
URL_PATTERNS: list[re.Pattern] = [
    re.compile(rf"youtube\.com/watch\?v=({_ID})"),
    re.compile(rf"youtu\.be/({_ID})"),
    re.compile(rf"youtube\.com/embed/({_ID})"),
    re.compile(rf"youtube\.com/v/({_ID})"),
]

BARE_ID_PATTERN = re.compile(_ID)


def resolve_video_id(value: str) -> Optional[str]:
    """
    Extract the video id from a URL or bare id

    :param value: watch / short-link / embed / v URL, or an 11-character id
    :return: the id, or None when nothing matches
    """
    for pattern in URL_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)

    if BARE_ID_PATTERN.fullmatch(value):
        return value
    return None


def is_video_id(value: str) -> bool:
    """True only for a bare 11-character id (safe to use as a filename stem)"""
    return BARE_ID_PATTERN.fullmatch(value) is not None
