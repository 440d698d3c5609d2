"""Transcript-wide insights: bullet points, key topics and tone."""
import logging
from collections import Counter
from dataclasses import dataclass
from typing import List, Tuple

from .config import HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .lexicons import DEFAULT_TONE, Lexicon
from .sentences import Sentence
from .signals import SignalVector
from .text import content_words, rank_terms, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptInsights:
    bullet_points: Tuple[str, ...] = ()
    key_topics: Tuple[str, ...] = ()
    tone: str = DEFAULT_TONE

    def to_dict(self) -> dict:
        return {
            "bullet_points": list(self.bullet_points),
            "key_topics": list(self.key_topics),
            "tone": self.tone,
        }


def select_bullet_points(
    sentences: List[Sentence],
    signals: List[SignalVector],
    count: int,
    min_index_gap: int,
) -> List[str]:
    """
    Best sentences by composite score, spaced apart by sentence index.

    Returned in transcript order.
    """
    order = sorted(range(len(sentences)), key=lambda i: (-signals[i].composite, i))
    chosen: List[int] = []
    for idx in order:
        if len(chosen) >= count:
            break
        if all(abs(idx - other) >= min_index_gap for other in chosen):
            chosen.append(idx)
    return [sentences[i].text for i in sorted(chosen)]


def extract_key_topics(sentences: List[Sentence], lexicon: Lexicon, count: int, min_length: int) -> List[str]:
    terms = []
    for sentence in sentences:
        terms.extend(content_words(tokenize(sentence.text), lexicon, min_length))
    return rank_terms(terms, count)


def classify_tone(sentences: List[Sentence], lexicon: Lexicon) -> str:
    """
    Category with the most lexicon hits.

    Ties follow the lexicon's category order; no hits at all gives the
    default neutral label.
    """
    token_counts = Counter()
    for sentence in sentences:
        token_counts.update(tokenize(sentence.text))

    hits = {
        name: sum(token_counts[word] for word in words)
        for name, words in lexicon.tone_lexicon
    }
    best = max(hits.values(), default=0)
    if best == 0:
        return DEFAULT_TONE

    for name in lexicon.tone_priority:
        if hits[name] == best:
            return name
    return DEFAULT_TONE


def build_insights(
    sentences: List[Sentence],
    signals: List[SignalVector],
    lexicon: Lexicon,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> TranscriptInsights:
    """Derive insights from the full sentence set."""
    if not sentences:
        return TranscriptInsights()

    insights = TranscriptInsights(
        bullet_points=tuple(select_bullet_points(
            sentences, signals, config.bullet_count, config.bullet_min_index_gap
        )),
        key_topics=tuple(extract_key_topics(
            sentences, lexicon, config.topic_count, config.topic_min_length
        )),
        tone=classify_tone(sentences, lexicon),
    )
    logger.info(
        f"Insights: {len(insights.bullet_points)} bullets, "
        f"{len(insights.key_topics)} topics, tone={insights.tone}"
    )
    return insights
