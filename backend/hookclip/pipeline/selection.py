"""Highlight selection for the highlight pipeline.

Greedy pick of the best non-overlapping candidate windows.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .windows import CandidateWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectedWindow:
    """A candidate window accepted by the selector."""
    window: CandidateWindow
    confidence: float
    rank: int  # 0-based position in the selection order


@dataclass
class SelectionDecision:
    """Records why a candidate was kept or dropped."""
    candidate_index: int
    action: str  # "keep", "drop_overlap", "drop_gap", "drop_limit"
    reason: str
    related_index: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "candidate_index": self.candidate_index,
            "action": self.action,
            "reason": self.reason,
            "related_index": self.related_index,
        }


def compute_overlap(a: CandidateWindow, b: CandidateWindow) -> float:
    """Seconds of time shared by two windows."""
    return max(0.0, min(a.end, b.end) - max(a.start, b.start))


def start_separation(candidate: CandidateWindow, accepted: CandidateWindow) -> float:
    """Distance from the candidate's start to the accepted window's start or end."""
    return min(abs(candidate.start - accepted.start), abs(candidate.start - accepted.end))


def compute_confidences(candidates: List[CandidateWindow]) -> np.ndarray:
    """
    Scores rescaled against the best candidate, clamped to [0, 1].

    When every score is zero all candidates are equally best.
    """
    scores = np.array([c.score for c in candidates], dtype=float)
    if scores.size == 0:
        return scores
    best = float(np.max(scores))
    if best <= 0:
        return np.ones_like(scores)
    return np.clip(scores / best, 0.0, 1.0)


def select_highlights(
    candidates: List[CandidateWindow],
    clip_count: int,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> Tuple[List[SelectedWindow], List[SelectionDecision]]:
    """
    Select up to `clip_count` windows, best score first.

    Ties go to the earlier start. A candidate is rejected if it overlaps an
    accepted window by more than `overlap_tolerance_seconds`, or if its start
    lies within `min_gap_seconds` of an accepted window's start or end.
    Fewer than `clip_count` windows are returned when the constraints leave
    nothing else.

    Returns (selected, decisions).
    """
    if not candidates or clip_count <= 0:
        return [], []

    confidences = compute_confidences(candidates)
    order = sorted(
        range(len(candidates)),
        key=lambda i: (-candidates[i].score, candidates[i].start, candidates[i].start_sentence_idx),
    )

    accepted: List[int] = []
    decisions = []

    for idx in order:
        candidate = candidates[idx]

        if len(accepted) >= clip_count:
            decisions.append(SelectionDecision(idx, "drop_limit", f"Already selected {clip_count} clips"))
            continue

        rejection = None
        for kept_idx in accepted:
            kept = candidates[kept_idx]
            overlap = compute_overlap(candidate, kept)
            if overlap > config.overlap_tolerance_seconds:
                rejection = SelectionDecision(
                    idx, "drop_overlap",
                    f"Overlap {overlap:.2f}s > tolerance {config.overlap_tolerance_seconds}s",
                    related_index=kept_idx,
                )
                break
            gap = start_separation(candidate, kept)
            if gap < config.min_gap_seconds:
                rejection = SelectionDecision(
                    idx, "drop_gap",
                    f"Start within {gap:.2f}s of selected clip (min {config.min_gap_seconds}s)",
                    related_index=kept_idx,
                )
                break

        if rejection is not None:
            decisions.append(rejection)
            continue

        accepted.append(idx)
        decisions.append(SelectionDecision(idx, "keep", f"Score {candidate.score:.3f}"))

    selected = [
        SelectedWindow(window=candidates[idx], confidence=float(confidences[idx]), rank=rank)
        for rank, idx in enumerate(accepted)
    ]

    logger.info(f"Selected {len(selected)} of {len(candidates)} candidate windows (requested {clip_count})")
    return selected, decisions
