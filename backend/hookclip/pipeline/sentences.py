"""Sentence building for the highlight pipeline.

Turns raw caption fragments into normalized, timed sentences. Segments are
consumed in input order; callers are expected to supply them sorted by start
time. Out-of-order input is not corrected.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from .config import HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .text import clean_caption, tokenize

logger = logging.getLogger(__name__)

# Split after terminal punctuation (optionally followed by a closing quote/bracket)
_SPLIT_RE = re.compile(r"(?<=[.?!][\"'”’)\]])\s+|(?<=[.?!])\s+")
_TERMINAL_RE = re.compile(r"[.?!][\"'”’)\]]*$")


@dataclass(frozen=True)
class TranscriptSegment:
    """A caption fragment after boundary validation."""
    text: str
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class Sentence:
    """A normalized, timed unit of transcript text."""
    index: int
    text: str
    start: float
    end: float
    token_count: int

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "token_count": self.token_count,
        }


def _field(raw: Any, *names: str) -> Any:
    for name in names:
        if isinstance(raw, Mapping):
            if raw.get(name) is not None:
                return raw[name]
        elif getattr(raw, name, None) is not None:
            return getattr(raw, name)
    return None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_segment(raw: Any) -> Optional[TranscriptSegment]:
    """
    Validate one loosely-shaped segment.

    Accepts mappings or objects carrying `text`, `start` (or `offset`) and
    `end` or `duration`. Returns None for malformed segments.
    """
    text = _field(raw, "text")
    if not isinstance(text, str):
        return None
    text = clean_caption(text)
    if not text:
        return None

    start = _as_float(_field(raw, "start", "offset"))
    if start is None or start < 0:
        return None

    end = _as_float(_field(raw, "end"))
    if end is None:
        duration = _as_float(_field(raw, "duration", "dur"))
        if duration is None:
            duration = 0.0
        if duration < 0:
            return None
        end = start + duration
    elif end < start:
        return None

    return TranscriptSegment(text=text, start=start, end=end)


def _flush(parts: List[str], start: float, end: float, drafts: list):
    text = " ".join(parts)
    if tokenize(text):
        drafts.append((text, start, max(start, end)))


def build_sentences(
    segments: Iterable[Any],
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> List[Sentence]:
    """
    Merge and split caption segments into sentences.

    A sentence ends at terminal punctuation. A span that grows past
    `max_sentence_tokens` without punctuation is cut at the next segment
    boundary. A sentence starts at its first contributing segment's start and
    ends at its last contributing segment's end.
    """
    drafts = []
    parts: List[str] = []
    span_start = span_end = 0.0
    span_tokens = 0
    skipped = 0

    for raw in segments:
        segment = coerce_segment(raw)
        if segment is None:
            skipped += 1
            logger.debug(f"Skipping malformed segment: {raw!r}")
            continue

        for piece in _SPLIT_RE.split(segment.text):
            if not piece:
                continue
            if not parts:
                span_start = segment.start
                span_tokens = 0
            parts.append(piece)
            span_end = segment.end
            span_tokens += len(piece.split())

            if _TERMINAL_RE.search(piece):
                _flush(parts, span_start, span_end, drafts)
                parts = []

        if parts and span_tokens > config.max_sentence_tokens:
            _flush(parts, span_start, span_end, drafts)
            parts = []

    if parts:
        _flush(parts, span_start, span_end, drafts)

    # Stable: equal starts keep input order
    drafts.sort(key=lambda d: d[1])

    sentences = [
        Sentence(index=i, text=text, start=start, end=end, token_count=len(text.split()))
        for i, (text, start, end) in enumerate(drafts)
    ]

    if skipped:
        logger.info(f"Skipped {skipped} malformed segments")
    logger.info(f"Built {len(sentences)} sentences")
    return sentences


def total_duration(sentences: List[Sentence]) -> float:
    """End of the latest sentence, 0.0 for an empty transcript."""
    return max((s.end for s in sentences), default=0.0)
