"""API routes."""
import logging

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool

from hookclip.config import settings
from hookclip.pipeline import ConfigurationError, __version__, analyze_transcript
from hookclip.pipeline.lexicons import LEXICONS
from hookclip.api.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    HealthResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


# =============================================================================
# Health & System
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Check API health."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        languages=sorted(LEXICONS),
    )


# =============================================================================
# Analysis
# =============================================================================

@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(data: AnalyzeRequest):
    """Find highlight clips and transcript insights.

    The transcript is supplied by the caller; nothing is fetched here.
    """
    if not data.segments:
        raise HTTPException(status_code=422, detail="Transcript is not available for this video.")

    segments = data.segments[:settings.max_transcript_segments]
    if len(data.segments) > len(segments):
        logger.info(f"Truncated transcript from {len(data.segments)} to {len(segments)} segments")

    try:
        result = await run_in_threadpool(
            analyze_transcript,
            segments,
            clip_length_seconds=data.clip_length_seconds or settings.default_clip_length_seconds,
            clip_count=data.clip_count or settings.default_clip_count,
            language=data.language or settings.default_language,
            debug_dir=settings.debug_dir if settings.write_debug_json else None,
        )
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Transcript analysis failed")
        raise HTTPException(status_code=500, detail="Unable to process transcript. Please try another one.")

    if result.is_empty:
        raise HTTPException(status_code=422, detail="Transcript is not available for this video.")

    payload = result.to_dict()
    return AnalyzeResponse(
        metadata=data.metadata,
        insights=payload["insights"],
        highlights=payload["highlights"],
    )
