"""Presentational content for selected highlight windows.

Variety across highlights (CTA, caption style, B-roll template order) comes
from the highlight's rank modulo the bank size, so output is reproducible.
"""
import hashlib
import logging
from dataclasses import dataclass
from typing import List, Tuple

from .config import HighlightConfig, DEFAULT_HIGHLIGHT_CONFIG
from .lexicons import CaptionStyle, Lexicon
from .selection import SelectedWindow
from .sentences import Sentence
from .signals import SignalVector
from .text import content_words, normalize_whitespace, rank_terms, to_hashtag, tokenize
from .windows import CandidateWindow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightContent:
    """Text and styling derived from one window."""
    hook: str
    summary: str
    caption_style: CaptionStyle
    hashtags: Tuple[str, ...]
    keywords: Tuple[str, ...]
    b_roll_ideas: Tuple[str, ...]
    call_to_action: str


@dataclass(frozen=True)
class Highlight:
    """A selected, fully described clip."""
    id: str
    start: float
    end: float
    hook: str
    summary: str
    caption_style: CaptionStyle
    hashtags: Tuple[str, ...]
    keywords: Tuple[str, ...]
    b_roll_ideas: Tuple[str, ...]
    call_to_action: str
    confidence: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "start": self.start,
            "end": self.end,
            "hook": self.hook,
            "summary": self.summary,
            "caption_style": self.caption_style.to_dict(),
            "hashtags": list(self.hashtags),
            "keywords": list(self.keywords),
            "b_roll_ideas": list(self.b_roll_ideas),
            "call_to_action": self.call_to_action,
            "confidence": self.confidence,
        }


def highlight_id(window: CandidateWindow) -> str:
    """Stable id derived from the window bounds."""
    key = f"{window.start_sentence_idx}:{window.end_sentence_idx}:{window.start:.3f}:{window.end:.3f}"
    return "clip-" + hashlib.md5(key.encode()).hexdigest()[:12]


def pick_hook(
    window_sentences: List[Sentence],
    signals: List[SignalVector],
    lexicon: Lexicon,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> str:
    """Text of the highest-scoring sentence; earliest wins ties."""
    best = min(window_sentences, key=lambda s: (-signals[s.index].composite, s.index))
    if len(window_sentences) == 1 and best.token_count <= config.hook_fallback_max_tokens:
        return lexicon.hook_fallback.format(text=best.text)
    return best.text


def build_summary(window_sentences: List[Sentence], char_budget: int) -> str:
    """Window text in order, immediate repeats collapsed, cut at a word boundary."""
    parts = []
    previous = None
    for sentence in window_sentences:
        key = normalize_whitespace(sentence.text).lower()
        if key == previous:
            continue
        parts.append(sentence.text)
        previous = key

    summary = " ".join(parts)
    if len(summary) <= char_budget:
        return summary

    cut = summary[:char_budget].rsplit(" ", 1)[0].rstrip(" ,;:-")
    return (cut or summary[:char_budget]) + "..."


def extract_keywords(window_sentences: List[Sentence], lexicon: Lexicon, config: HighlightConfig) -> List[str]:
    terms = []
    for sentence in window_sentences:
        terms.extend(content_words(tokenize(sentence.text), lexicon, config.keyword_min_length))
    return rank_terms(terms, config.keyword_count)


def build_hashtags(keywords: List[str], lexicon: Lexicon, cap: int) -> List[str]:
    """Keyword tags (capped) followed by the fixed platform tags."""
    tags: List[str] = []
    for keyword in keywords:
        if len(tags) >= cap:
            break
        tag = to_hashtag(keyword)
        if tag and tag not in tags:
            tags.append(tag)
    for tag in lexicon.platform_tags:
        if tag not in tags:
            tags.append(tag)
    return tags


def build_broll_ideas(keywords: List[str], rank: int, lexicon: Lexicon, count: int) -> List[str]:
    """One idea per keyword, cycling through the template bank."""
    templates = lexicon.broll_templates
    if not keywords:
        return [templates[rank % len(templates)].format(keyword=lexicon.broll_fallback_keyword)]
    return [
        templates[(rank + i) % len(templates)].format(keyword=keyword)
        for i, keyword in enumerate(keywords[:count])
    ]


def describe_window(
    window: CandidateWindow,
    rank: int,
    sentences: List[Sentence],
    signals: List[SignalVector],
    lexicon: Lexicon,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> HighlightContent:
    """Derive hook, summary, tags, ideas, CTA and caption style for a window."""
    window_sentences = sentences[window.start_sentence_idx:window.end_sentence_idx + 1]
    keywords = extract_keywords(window_sentences, lexicon, config)

    return HighlightContent(
        hook=pick_hook(window_sentences, signals, lexicon, config),
        summary=build_summary(window_sentences, config.summary_char_budget),
        caption_style=lexicon.caption_styles[rank % len(lexicon.caption_styles)],
        hashtags=tuple(build_hashtags(keywords, lexicon, config.hashtag_keyword_cap)),
        keywords=tuple(keywords),
        b_roll_ideas=tuple(build_broll_ideas(keywords, rank, lexicon, config.broll_count)),
        call_to_action=lexicon.cta_bank[rank % len(lexicon.cta_bank)],
    )


def build_highlights(
    selected: List[SelectedWindow],
    sentences: List[Sentence],
    signals: List[SignalVector],
    lexicon: Lexicon,
    config: HighlightConfig = DEFAULT_HIGHLIGHT_CONFIG,
) -> List[Highlight]:
    """Describe every selected window, keeping the selection order."""
    highlights = []
    for item in selected:
        window = item.window
        content = describe_window(window, item.rank, sentences, signals, lexicon, config)
        highlights.append(Highlight(
            id=highlight_id(window),
            start=window.start,
            end=window.end,
            hook=content.hook,
            summary=content.summary,
            caption_style=content.caption_style,
            hashtags=content.hashtags,
            keywords=content.keywords,
            b_roll_ideas=content.b_roll_ideas,
            call_to_action=content.call_to_action,
            confidence=item.confidence,
        ))

    logger.info(f"Described {len(highlights)} highlights")
    return highlights
