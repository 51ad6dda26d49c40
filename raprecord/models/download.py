"""
Download request / result models
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel


# -------- API request / response models (Pydantic) --------

class DownloadRequest(BaseModel):
    """Body of POST /api/download"""
    url: Optional[str] = None                  # video URL or bare id


class DownloadResponse(BaseModel):
    """Successful download (fresh or cached)"""
    id: str
    title: str
    cached: bool


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint"""
    error: str                                 # raw error text
    message: str = ""                          # friendlier rendering for display


# -------- Internal data models (dataclass) --------

@dataclass
class DownloadResult:
    """Outward-facing result of a download request"""
    id: str
    title: str
    cached: bool


@dataclass
class CacheHit:
    """Artifact and metadata entry both present"""
    title: str


class ExtractionStage(str, Enum):
    PROBING_TITLE = "probing_title"
    EXTRACTING_AUDIO = "extracting_audio"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ExtractionOutcome:
    """Terminal state of one extraction pipeline run"""
    stage: ExtractionStage
    title: Optional[str] = None
    error: Optional[str] = None
    failed_at: Optional[ExtractionStage] = None  # stage that failed

    @property
    def ok(self) -> bool:
        return self.stage == ExtractionStage.DONE
