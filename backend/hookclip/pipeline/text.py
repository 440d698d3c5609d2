"""Text normalization and term ranking helpers."""
import html
import re
from collections import Counter
from typing import Iterable, List, Sequence

from .lexicons import Lexicon

_WHITESPACE_RE = re.compile(r"\s+")
# Non-speech caption cues such as "[Music]" or "[Applause]"
_CUE_RE = re.compile(r"\[[^\]]*\]")
_WORD_RE = re.compile(r"[^\W_]+(?:['’][^\W_]+)*")
_TAG_RE = re.compile(r"[^\w]+")


def clean_caption(text: str) -> str:
    """Unescape HTML entities, drop bracketed cues and collapse whitespace."""
    # Caption feeds are often double-escaped ("&amp;#39;")
    text = html.unescape(html.unescape(text))
    text = _CUE_RE.sub(" ", text)
    return normalize_whitespace(text)


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def tokenize(text: str) -> List[str]:
    """Lowercased word tokens with surrounding punctuation removed."""
    return [m.group(0).replace("’", "'") for m in _WORD_RE.finditer(text.lower())]


def content_words(tokens: Iterable[str], lexicon: Lexicon, min_length: int = 3) -> List[str]:
    """Tokens that are not stopwords, not pure numbers and long enough."""
    return [
        t for t in tokens
        if len(t) >= min_length and t not in lexicon.stopwords and not t.isdigit()
    ]


def rank_terms(terms: Sequence[str], limit: int) -> List[str]:
    """
    Most frequent terms first.

    Ties are broken by first appearance so the ranking is deterministic.
    """
    if limit <= 0:
        return []
    counts = Counter(terms)
    first_seen = {}
    for i, term in enumerate(terms):
        first_seen.setdefault(term, i)
    ranked = sorted(counts, key=lambda t: (-counts[t], first_seen[t]))
    return ranked[:limit]


def to_hashtag(term: str) -> str:
    """'game-changer' -> '#gamechanger'. Empty string if nothing is left."""
    body = _TAG_RE.sub("", term).replace("_", "")
    return f"#{body}" if body else ""
