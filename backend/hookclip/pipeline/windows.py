"""Candidate window scoring for the highlight pipeline.

A window starts at every sentence and grows until it first reaches the
target clip length.
"""
import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from .config import HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .sentences import Sentence
from .signals import SignalVector, composite_array

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateWindow:
    """A contiguous run of sentences considered as a clip."""
    start_sentence_idx: int
    end_sentence_idx: int  # Inclusive
    start: float
    end: float
    score: float
    opening_hook: float  # Hook-marker score of the first sentence

    @property
    def duration(self) -> float:
        return self.end - self.start

    @property
    def sentence_count(self) -> int:
        return self.end_sentence_idx - self.start_sentence_idx + 1

    def to_dict(self) -> dict:
        return {
            "start_sentence_idx": self.start_sentence_idx,
            "end_sentence_idx": self.end_sentence_idx,
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "score": self.score,
            "opening_hook": self.opening_hook,
        }


def compute_window_score(
    prefix: np.ndarray,
    first: int,
    last: int,
    opening_hook: float,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> float:
    """
    Mean composite score of sentences first..last, plus an opening boost.

    `prefix` is the cumulative composite sum with a leading zero.
    """
    count = last - first + 1
    mean = float(prefix[last + 1] - prefix[first]) / count

    boost = 0.0
    if opening_hook >= config.opening_hook_threshold:
        boost = config.opening_hook_boost * opening_hook

    return mean + boost


def build_candidates(
    sentences: List[Sentence],
    signals: List[SignalVector],
    target_length_seconds: float,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> List[CandidateWindow]:
    """
    Enumerate one candidate window per feasible starting sentence.

    Windows shorter than `window_floor_ratio * target_length_seconds` are
    discarded; these only occur near the end of the transcript. A window that
    overshoots `window_ceiling_ratio * target_length_seconds` falls back to
    one sentence fewer, and is discarded if that drops it below the floor.
    """
    n = len(sentences)
    if n == 0 or target_length_seconds <= 0:
        return []

    prefix = np.concatenate(([0.0], np.cumsum(composite_array(signals))))
    floor = config.window_floor_ratio * target_length_seconds
    ceiling = config.window_ceiling_ratio * target_length_seconds

    candidates = []
    last = 0
    for first in range(n):
        last = max(last, first)
        window_start = sentences[first].start

        # Two-pointer: the end index never moves backwards
        while last + 1 < n and sentences[last].end - window_start < target_length_seconds:
            last += 1

        end_idx = last
        if sentences[end_idx].end - window_start > ceiling and end_idx > first:
            end_idx -= 1

        window_end = sentences[end_idx].end
        duration = window_end - window_start
        if duration < floor or duration > ceiling:
            logger.debug(
                f"Window at sentence {first} outside "
                f"{floor:.1f}-{ceiling:.1f}s ({duration:.1f}s)"
            )
            continue

        opening_hook = signals[first].hook_markers
        candidates.append(CandidateWindow(
            start_sentence_idx=first,
            end_sentence_idx=end_idx,
            start=window_start,
            end=window_end,
            score=compute_window_score(prefix, first, end_idx, opening_hook, config),
            opening_hook=opening_hook,
        ))

    logger.info(f"Found {len(candidates)} candidate windows for {target_length_seconds:.0f}s clips")
    return candidates
