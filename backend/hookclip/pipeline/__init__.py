# Transcript highlight pipeline
"""
Transcript Highlight Pipeline

Finds short, shareable clips in a time-stamped transcript and describes them.

Pipeline stages:
1. Sentence building: merge/split caption fragments into timed sentences
2. Signal extraction: lexical and structural hook signals per sentence
3. Window scoring: one candidate clip window per starting sentence
4. Selection: best non-overlapping windows, scores rescaled to confidence
5. Content: hook, summary, hashtags, keywords, B-roll, CTA, caption style
6. Insights: bullet points, key topics and tone for the whole transcript

All stages are pure and deterministic (no ML models, no I/O).
"""

__version__ = "1.0.0"

from .config import ConfigurationError, HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .runner import HighlightResult, analyze_transcript

__all__ = [
    "analyze_transcript",
    "HighlightResult",
    "HighlightConfig",
    "DEFAULT_HIGHLIGHT_CONFIG",
    "ConfigurationError",
    "__version__",
]
