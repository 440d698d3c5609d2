"""Debug artifact generation for the highlight pipeline.

Writes detailed JSON explaining all pipeline decisions.
"""
import hashlib
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, List

from .config import HighlightConfig
from .selection import SelectionDecision
from .sentences import Sentence
from .signals import SignalVector
from .windows import CandidateWindow

if TYPE_CHECKING:
    from .runner import HighlightResult

logger = logging.getLogger(__name__)


def debug_file_name(config: HighlightConfig, sentences: List[Sentence]) -> str:
    """
    File name derived from the analysis input, so different transcripts or
    settings never share a debug file.
    """
    key = json.dumps(
        {"config": config.to_dict(), "sentences": [s.to_dict() for s in sentences]},
        sort_keys=True,
    )
    return f"highlights_debug_{hashlib.md5(key.encode()).hexdigest()[:16]}.json"


def write_debug_json(
    output_path: Path,
    config: HighlightConfig,
    sentences: List[Sentence],
    signals: List[SignalVector],
    candidates: List[CandidateWindow],
    decisions: List[SelectionDecision],
    result: "HighlightResult",
):
    """
    Write comprehensive debug JSON file.
    """
    from . import __version__

    kept = [d for d in decisions if d.action == "keep"]

    debug_data = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "pipeline_version": __version__,

        # Configuration
        "config": config.to_dict(),

        # Sentences with their signals
        "sentences": [
            {**s.to_dict(), "signals": v.to_dict()}
            for s, v in zip(sentences, signals)
        ],

        # All candidate windows before selection
        "candidate_windows": [c.to_dict() for c in candidates],

        # Selection decisions, best candidate first
        "selection": [d.to_dict() for d in decisions],

        # Final output
        "result": result.to_dict(),

        # Statistics
        "statistics": {
            "sentences": len(sentences),
            "candidate_windows": len(candidates),
            "selected": len(kept),
            "total_duration": result.total_duration,
            "avg_candidate_score": (
                sum(c.score for c in candidates) / len(candidates) if candidates else 0
            ),
        },
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(debug_data, f, indent=2, ensure_ascii=False)

    logger.info(f"Wrote debug JSON to {output_path}")
