"""Highlight pipeline configuration."""
import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

logger = logging.getLogger(__name__)

# Request bounds accepted by the API layer
MIN_CLIP_LENGTH_SECONDS = 10.0
MAX_CLIP_LENGTH_SECONDS = 90.0
MIN_CLIP_COUNT = 1
MAX_CLIP_COUNT = 6


class ConfigurationError(ValueError):
    """Raised when a pipeline configuration value is unusable."""


@dataclass(frozen=True)
class HighlightConfig:
    """Configuration for the transcript highlight pipeline."""

    # Request
    clip_length_seconds: float = 35.0
    clip_count: int = 3
    language: Optional[str] = None

    # Sentence building
    max_sentence_tokens: int = 40  # Force split at next segment boundary

    # Signal extraction
    brevity_min_tokens: int = 6
    brevity_max_tokens: int = 20
    focus_term_count: int = 12  # Transcript-wide top terms for keyword density
    signal_w_hook: float = 0.40
    signal_w_emphasis: float = 0.15
    signal_w_brevity: float = 0.20
    signal_w_keyword: float = 0.25

    # Window scoring
    window_floor_ratio: float = 0.6  # Shorter windows are end-of-transcript stubs
    window_ceiling_ratio: float = 1.5  # Longer windows come from coarse segment timing
    opening_hook_threshold: float = 0.5
    opening_hook_boost: float = 0.15

    # Selection
    overlap_tolerance_seconds: float = 1.0
    min_gap_seconds: float = 1.5

    # Content generation
    keyword_count: int = 5
    keyword_min_length: int = 3
    hashtag_keyword_cap: int = 5
    broll_count: int = 3
    summary_char_budget: int = 280
    hook_fallback_max_tokens: int = 3

    # Insights
    bullet_count: int = 5
    bullet_min_index_gap: int = 2
    topic_count: int = 6
    topic_min_length: int = 4

    def validated(self) -> "HighlightConfig":
        """
        Return a copy with request values clamped to their documented bounds.

        Raises ConfigurationError for values that are not finite numbers.
        """
        try:
            length = float(self.clip_length_seconds)
            count = float(self.clip_count)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid clip settings: length={self.clip_length_seconds!r}, count={self.clip_count!r}"
            )
        if not math.isfinite(length) or not math.isfinite(count):
            raise ConfigurationError(
                f"Clip settings must be finite: length={length}, count={count}"
            )

        clamped_length = min(MAX_CLIP_LENGTH_SECONDS, max(MIN_CLIP_LENGTH_SECONDS, length))
        clamped_count = int(min(MAX_CLIP_COUNT, max(MIN_CLIP_COUNT, int(count))))

        if clamped_length != length:
            logger.warning(f"clip_length_seconds {length} clamped to {clamped_length}")
        if clamped_count != count:
            logger.warning(f"clip_count {self.clip_count} clamped to {clamped_count}")

        return replace(self, clip_length_seconds=clamped_length, clip_count=clamped_count)

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization."""
        return {
            "clip_length_seconds": self.clip_length_seconds,
            "clip_count": self.clip_count,
            "language": self.language,
            "max_sentence_tokens": self.max_sentence_tokens,
            "brevity_min_tokens": self.brevity_min_tokens,
            "brevity_max_tokens": self.brevity_max_tokens,
            "focus_term_count": self.focus_term_count,
            "signal_w_hook": self.signal_w_hook,
            "signal_w_emphasis": self.signal_w_emphasis,
            "signal_w_brevity": self.signal_w_brevity,
            "signal_w_keyword": self.signal_w_keyword,
            "window_floor_ratio": self.window_floor_ratio,
            "window_ceiling_ratio": self.window_ceiling_ratio,
            "opening_hook_threshold": self.opening_hook_threshold,
            "opening_hook_boost": self.opening_hook_boost,
            "overlap_tolerance_seconds": self.overlap_tolerance_seconds,
            "min_gap_seconds": self.min_gap_seconds,
            "keyword_count": self.keyword_count,
            "hashtag_keyword_cap": self.hashtag_keyword_cap,
            "broll_count": self.broll_count,
            "summary_char_budget": self.summary_char_budget,
            "bullet_count": self.bullet_count,
            "bullet_min_index_gap": self.bullet_min_index_gap,
            "topic_count": self.topic_count,
            "topic_min_length": self.topic_min_length,
        }


# Default configuration instance
DEFAULT_HIGHLIGHT_CONFIG = HighlightConfig()
