"""
Audio delivery: locate a stored artifact for streaming
"""
from dataclasses import dataclass
from pathlib import Path

from raprecord.exceptions import ArtifactNotFoundError
from raprecord.resolver import is_video_id
from raprecord.storage.download_store import DownloadStore

MEDIA_TYPE = "audio/mpeg"


@dataclass
class AudioArtifact:
    path: Path
    size: int


def open_artifact(store: DownloadStore, video_id: str) -> AudioArtifact:
    """Artifact for video_id; metadata is not consulted"""
    if not is_video_id(video_id):
        raise ArtifactNotFoundError()
    path = store.artifact_path(video_id)
    if not path.is_file():
        raise ArtifactNotFoundError()
    return AudioArtifact(path=path, size=path.stat().st_size)
