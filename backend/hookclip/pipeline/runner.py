"""Highlight pipeline runner.

Composes the stages in a fixed order:
sentences -> signals -> candidate windows -> selection -> content, plus
insights from the full sentence set.
"""
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Optional, Tuple

from .config import HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .content import Highlight, build_highlights
from .debug_artifacts import debug_file_name, write_debug_json
from .insights import TranscriptInsights, build_insights
from .lexicons import get_lexicon
from .selection import select_highlights
from .sentences import build_sentences, total_duration
from .signals import score_sentences
from .windows import build_candidates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightResult:
    """Result of one transcript analysis."""
    highlights: Tuple[Highlight, ...]
    insights: TranscriptInsights
    sentence_count: int
    candidate_count: int
    total_duration: float
    language: str
    debug_path: Optional[Path] = None

    @property
    def is_empty(self) -> bool:
        """True when no usable sentence came out of the transcript."""
        return self.sentence_count == 0

    def to_dict(self) -> dict:
        return {
            "highlights": [h.to_dict() for h in self.highlights],
            "insights": self.insights.to_dict(),
            "sentence_count": self.sentence_count,
            "candidate_count": self.candidate_count,
            "total_duration": self.total_duration,
            "language": self.language,
        }


def analyze_transcript(
    segments: Iterable[Any],
    clip_length_seconds: Optional[float] = None,
    clip_count: Optional[int] = None,
    language: Optional[str] = None,
    config: Optional[HighlightConfig] = None,
    debug_dir: Optional[Path] = None,
) -> HighlightResult:
    """
    Run the full highlight pipeline over a transcript.

    Args:
        segments: Caption segments (mappings or objects with text/start/duration)
        clip_length_seconds: Target clip length, overrides config
        clip_count: Maximum number of highlights, overrides config
        language: Language tag used to pick the lexicon, overrides config
        config: Pipeline configuration (uses defaults if not provided)
        debug_dir: If given, a JSON record of every decision is written there

    Returns:
        HighlightResult; an empty transcript yields empty highlights and
        default insights rather than an error.
    """
    config = config or DEFAULT_HIGHLIGHT_CONFIG
    overrides = {}
    if clip_length_seconds is not None:
        overrides["clip_length_seconds"] = clip_length_seconds
    if clip_count is not None:
        overrides["clip_count"] = clip_count
    if language is not None:
        overrides["language"] = language
    config = replace(config, **overrides).validated()

    lexicon = get_lexicon(config.language)
    logger.info(
        f"Analyzing transcript: {config.clip_count} x {config.clip_length_seconds:.0f}s clips, "
        f"lexicon={lexicon.language}"
    )

    sentences = build_sentences(segments, config)
    if not sentences:
        logger.info("No sentences built, returning empty result")
        return HighlightResult(
            highlights=(),
            insights=TranscriptInsights(),
            sentence_count=0,
            candidate_count=0,
            total_duration=0.0,
            language=lexicon.language,
        )

    signals = score_sentences(sentences, lexicon, config)
    candidates = build_candidates(sentences, signals, config.clip_length_seconds, config)
    selected, decisions = select_highlights(candidates, config.clip_count, config)
    highlights = build_highlights(selected, sentences, signals, lexicon, config)
    insights = build_insights(sentences, signals, lexicon, config)

    if not candidates:
        logger.info("No viable clip window, transcript shorter than requested clip")

    result = HighlightResult(
        highlights=tuple(highlights),
        insights=insights,
        sentence_count=len(sentences),
        candidate_count=len(candidates),
        total_duration=total_duration(sentences),
        language=lexicon.language,
    )

    if debug_dir is not None:
        debug_path = Path(debug_dir) / debug_file_name(config, sentences)
        write_debug_json(debug_path, config, sentences, signals, candidates, decisions, result)
        result = replace(result, debug_path=debug_path)

    return result
