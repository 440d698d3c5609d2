"""Per-sentence signal extraction for the highlight pipeline.

Signals (each in [0, 1]):
- hook_markers: question words, numerals, superlatives, attention terms
- emphasis: exclamation / question punctuation
- brevity: peaks inside the configured token band
- keyword_density: share of content words that are transcript focus terms

The composite is a weighted sum using the `signal_w_*` weights from
HighlightConfig. Everything is a pure function of the sentence text and the
precomputed focus terms.
"""
import logging
from dataclasses import dataclass
from typing import FrozenSet, List

import numpy as np

from .config import HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .lexicons import Lexicon
from .sentences import Sentence
from .text import content_words, rank_terms, tokenize

logger = logging.getLogger(__name__)

# Attention terms beyond this count add nothing
MAX_ATTENTION_HITS = 2


@dataclass(frozen=True)
class SignalVector:
    """Signal scores for a single sentence."""
    hook_markers: float
    emphasis: float
    brevity: float
    keyword_density: float
    composite: float

    def to_dict(self) -> dict:
        return {
            "hook_markers": self.hook_markers,
            "emphasis": self.emphasis,
            "brevity": self.brevity,
            "keyword_density": self.keyword_density,
            "composite": self.composite,
        }


def compute_focus_terms(
    sentences: List[Sentence],
    lexicon: Lexicon,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> FrozenSet[str]:
    """Top-frequency content words across the whole transcript."""
    terms = []
    for sentence in sentences:
        terms.extend(content_words(tokenize(sentence.text), lexicon, config.keyword_min_length))
    return frozenset(rank_terms(terms, config.focus_term_count))


def hook_marker_score(tokens: List[str], lexicon: Lexicon) -> float:
    has_question = any(t in lexicon.question_words for t in tokens)
    has_number = any(any(c.isdigit() for c in t) or t in lexicon.number_words for t in tokens)
    has_superlative = any(t in lexicon.superlatives for t in tokens)
    attention_hits = min(MAX_ATTENTION_HITS, sum(1 for t in tokens if t in lexicon.attention_terms))

    raw = has_question + has_number + has_superlative + attention_hits
    return min(1.0, raw / 4.0)


def emphasis_score(text: str) -> float:
    score = 0.0
    if "!" in text:
        score += 0.6
    if "?" in text:
        score += 0.4
    return score


def brevity_score(token_count: int, config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG) -> float:
    """1.0 inside the token band, falling off linearly on both sides."""
    low, high = config.brevity_min_tokens, config.brevity_max_tokens
    if token_count < low:
        return token_count / low
    if token_count <= high:
        return 1.0
    return max(0.0, 1.0 - (token_count - high) / high)


def keyword_density_score(tokens: List[str], lexicon: Lexicon, focus_terms: FrozenSet[str], min_length: int = 3) -> float:
    words = content_words(tokens, lexicon, min_length)
    if not words or not focus_terms:
        return 0.0
    hits = sum(1 for w in words if w in focus_terms)
    return hits / len(words)


def score_sentence(
    sentence: Sentence,
    lexicon: Lexicon,
    focus_terms: FrozenSet[str],
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> SignalVector:
    """Compute the signal vector for one sentence."""
    tokens = tokenize(sentence.text)

    hook = hook_marker_score(tokens, lexicon)
    emphasis = emphasis_score(sentence.text)
    brevity = brevity_score(sentence.token_count, config)
    density = keyword_density_score(tokens, lexicon, focus_terms, config.keyword_min_length)

    composite = (
        config.signal_w_hook * hook +
        config.signal_w_emphasis * emphasis +
        config.signal_w_brevity * brevity +
        config.signal_w_keyword * density
    )

    return SignalVector(
        hook_markers=hook,
        emphasis=emphasis,
        brevity=brevity,
        keyword_density=density,
        composite=composite,
    )


def score_sentences(
    sentences: List[Sentence],
    lexicon: Lexicon,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> List[SignalVector]:
    """Score every sentence against the transcript's focus terms."""
    focus_terms = compute_focus_terms(sentences, lexicon, config)
    signals = [score_sentence(s, lexicon, focus_terms, config) for s in sentences]
    logger.info(f"Scored {len(signals)} sentences ({len(focus_terms)} focus terms)")
    return signals


def composite_array(signals: List[SignalVector]) -> np.ndarray:
    """Composite scores as a float array, in sentence order."""
    return np.array([s.composite for s in signals], dtype=float)
