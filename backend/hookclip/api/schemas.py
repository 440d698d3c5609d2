"""Pydantic schemas for API requests and responses."""
from typing import Any, List, Optional
from pydantic import BaseModel, Field

from hookclip.pipeline.config import (
    MAX_CLIP_COUNT,
    MAX_CLIP_LENGTH_SECONDS,
    MIN_CLIP_COUNT,
    MIN_CLIP_LENGTH_SECONDS,
)


# =============================================================================
# Analysis Schemas
# =============================================================================

class Thumbnail(BaseModel):
    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class VideoMetadata(BaseModel):
    """Descriptive metadata supplied by the caller and echoed back."""
    id: Optional[str] = None
    title: Optional[str] = None
    author: Optional[str] = None
    length_seconds: Optional[float] = None
    thumbnails: List[Thumbnail] = Field(default_factory=list)
    description: Optional[str] = None
    upload_date: Optional[str] = None


class AnalyzeRequest(BaseModel):
    """Request to analyze a transcript.

    Segments are kept untyped, including non-object entries; malformed ones
    are skipped by the pipeline instead of failing the request.
    """
    segments: List[Any] = Field(..., description="Caption segments with text, start and duration/end")
    clip_length_seconds: Optional[float] = Field(
        None, ge=MIN_CLIP_LENGTH_SECONDS, le=MAX_CLIP_LENGTH_SECONDS,
        description="Target clip length in seconds"
    )
    clip_count: Optional[int] = Field(
        None, ge=MIN_CLIP_COUNT, le=MAX_CLIP_COUNT,
        description="Maximum number of highlights"
    )
    language: Optional[str] = Field(None, description="Transcript language tag, e.g. 'en' or 'es-MX'")
    metadata: Optional[VideoMetadata] = None


class CaptionColors(BaseModel):
    background: str
    foreground: str
    accent: str


class CaptionStyleResponse(BaseModel):
    preset: str
    animation: str
    colors: CaptionColors


class HighlightResponse(BaseModel):
    """A highlight clip."""
    id: str
    start: float
    end: float
    hook: str
    summary: str
    caption_style: CaptionStyleResponse
    hashtags: List[str]
    keywords: List[str]
    b_roll_ideas: List[str]
    call_to_action: str
    confidence: float


class InsightsResponse(BaseModel):
    bullet_points: List[str]
    key_topics: List[str]
    tone: str


class AnalyzeResponse(BaseModel):
    """Analysis response."""
    metadata: Optional[VideoMetadata] = None
    insights: InsightsResponse
    highlights: List[HighlightResponse]


# =============================================================================
# System Schemas
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    languages: List[str]
