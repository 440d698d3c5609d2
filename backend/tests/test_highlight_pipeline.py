"""Tests for the transcript highlight pipeline."""
import json
import math

import numpy as np
import pytest

from hookclip.pipeline import ConfigurationError, HighlightConfig, analyze_transcript
from hookclip.pipeline.lexicons import ENGLISH
from hookclip.pipeline.sentences import Sentence, build_sentences
from hookclip.pipeline.signals import (
    brevity_score,
    compute_focus_terms,
    emphasis_score,
    hook_marker_score,
    keyword_density_score,
    score_sentence,
    score_sentences,
)
from hookclip.pipeline.text import tokenize
from hookclip.pipeline.windows import (
    CandidateWindow,
    build_candidates,
    compute_window_score,
)
from hookclip.pipeline.selection import (
    compute_confidences,
    compute_overlap,
    select_highlights,
)


FILLER = "The team walked over to the other side of the room."


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Create sample config for testing."""
    return HighlightConfig(
        clip_length_seconds=35.0,
        clip_count=2,
        overlap_tolerance_seconds=1.0,
        min_gap_seconds=1.5,
    )


@pytest.fixture
def even_sentences():
    """10 sentences of 3s each (30s total)."""
    return [
        Sentence(index=i, text=f"Plain sentence about gardening tools {i}.", start=i * 3.0, end=i * 3.0 + 3.0, token_count=6)
        for i in range(10)
    ]


def window(start, end, score, first=0, last=0):
    return CandidateWindow(
        start_sentence_idx=first, end_sentence_idx=last,
        start=start, end=end, score=score, opening_hook=0.0,
    )


# =============================================================================
# Config Tests
# =============================================================================

class TestConfig:
    """Tests for configuration bounds."""

    def test_validated_keeps_in_range_values(self):
        config = HighlightConfig(clip_length_seconds=35, clip_count=3).validated()
        assert config.clip_length_seconds == 35.0
        assert config.clip_count == 3

    @pytest.mark.parametrize("length,count,expected", [
        (5, 0, (10.0, 1)),
        (120, 10, (90.0, 6)),
        (10, 1, (10.0, 1)),
        (90, 6, (90.0, 6)),
    ])
    def test_validated_clamps_to_bounds(self, length, count, expected):
        config = HighlightConfig(clip_length_seconds=length, clip_count=count).validated()
        assert (config.clip_length_seconds, config.clip_count) == expected

    @pytest.mark.parametrize("length,count", [
        (float("nan"), 3),
        (35, float("inf")),
        ("long", 3),
        (None, 3),
    ])
    def test_validated_rejects_non_numbers(self, length, count):
        with pytest.raises(ConfigurationError):
            HighlightConfig(clip_length_seconds=length, clip_count=count).validated()

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_to_dict_includes_tunables(self, sample_config):
        data = sample_config.to_dict()
        assert data["clip_count"] == 2
        assert data["min_gap_seconds"] == 1.5
        assert data["window_ceiling_ratio"] == 1.5


# =============================================================================
# Signal Tests
# =============================================================================

class TestSignals:
    """Tests for per-sentence signals."""

    def test_hook_markers_all_categories(self):
        tokens = tokenize("What are the 3 biggest secrets nobody tells you?")
        assert hook_marker_score(tokens, ENGLISH) == 1.0

    def test_hook_markers_attention_terms(self):
        tokens = tokenize("Never make this mistake")
        assert hook_marker_score(tokens, ENGLISH) == 0.5

    def test_hook_markers_plain_text(self):
        assert hook_marker_score(tokenize("The cat sat on the mat"), ENGLISH) == 0.0

    @pytest.mark.parametrize("text,expected", [
        ("Wow!", 0.6),
        ("Really?", 0.4),
        ("Stop?!", 1.0),
        ("Fine.", 0.0),
    ])
    def test_emphasis(self, text, expected):
        assert emphasis_score(text) == pytest.approx(expected)

    @pytest.mark.parametrize("tokens,expected", [
        (3, 0.5),
        (6, 1.0),
        (12, 1.0),
        (20, 1.0),
        (30, 0.5),
        (40, 0.0),
        (80, 0.0),
    ])
    def test_brevity_band(self, tokens, expected):
        assert brevity_score(tokens) == pytest.approx(expected)

    def test_keyword_density(self):
        tokens = tokenize("The framework rocks")
        assert keyword_density_score(tokens, ENGLISH, frozenset({"framework"})) == 0.5
        assert keyword_density_score(tokens, ENGLISH, frozenset()) == 0.0

    def test_composite_is_weighted_sum(self):
        sentence = Sentence(index=0, text="The cat sat on the mat.", start=0, end=2, token_count=6)
        signal = score_sentence(sentence, ENGLISH, frozenset())

        assert signal.hook_markers == 0.0
        assert signal.emphasis == 0.0
        assert signal.brevity == 1.0
        assert signal.keyword_density == 0.0
        assert signal.composite == pytest.approx(0.2)

    def test_focus_terms_are_frequent_content_words(self, make_segments):
        sentences = build_sentences(make_segments(["Framework first.", "The framework again.", "Other topic."]))
        focus = compute_focus_terms(sentences, ENGLISH, HighlightConfig(focus_term_count=1))
        assert focus == frozenset({"framework"})

    def test_scoring_is_deterministic(self, viral_segments):
        sentences = build_sentences(viral_segments)
        assert score_sentences(sentences, ENGLISH) == score_sentences(sentences, ENGLISH)


# =============================================================================
# Window Tests
# =============================================================================

class TestWindows:
    """Tests for candidate window enumeration."""

    def test_windows_stop_once_target_reached(self, even_sentences):
        signals = score_sentences(even_sentences, ENGLISH)
        candidates = build_candidates(even_sentences, signals, 10.0)

        first = candidates[0]
        assert first.start_sentence_idx == 0
        assert first.end_sentence_idx == 3
        assert first.duration == 12.0
        # One sentence fewer would be short of the target
        assert even_sentences[first.end_sentence_idx - 1].end - first.start < 10.0

    def test_dense_enumeration_with_floor(self, even_sentences):
        signals = score_sentences(even_sentences, ENGLISH)
        candidates = build_candidates(even_sentences, signals, 10.0)

        # Starts 0..8 reach the 6s floor; the window at sentence 9 is only 3s
        assert [c.start_sentence_idx for c in candidates] == list(range(9))
        for c in candidates:
            assert c.duration >= 0.6 * 10.0
            assert c.start_sentence_idx <= c.end_sentence_idx

    def test_transcript_shorter_than_floor(self, even_sentences):
        signals = score_sentences(even_sentences, ENGLISH)
        assert build_candidates(even_sentences, signals, 60.0) == []

    def test_empty_inputs(self):
        assert build_candidates([], [], 30.0) == []

    def test_non_positive_target(self, even_sentences):
        signals = score_sentences(even_sentences, ENGLISH)
        assert build_candidates(even_sentences, signals, 0.0) == []

    def test_overlong_window_falls_back_one_sentence(self):
        bounds = [(0.0, 5.0), (5.0, 10.0), (10.0, 15.0), (15.0, 45.0)]
        sentences = [
            Sentence(index=i, text=f"Step {i} of the plan.", start=s, end=e, token_count=5)
            for i, (s, e) in enumerate(bounds)
        ]
        signals = score_sentences(sentences, ENGLISH)

        candidates = build_candidates(sentences, signals, 20.0)

        # Floor 12s, ceiling 30s
        assert [(c.start_sentence_idx, c.end_sentence_idx) for c in candidates] == [(0, 2), (3, 3)]
        assert [c.duration for c in candidates] == [15.0, 30.0]

    def test_windows_never_exceed_ceiling(self):
        # Every sentence shares one 60s segment
        sentences = [
            Sentence(index=i, text=f"Sentence number {i} is here now.", start=0.0, end=60.0, token_count=6)
            for i in range(20)
        ]
        signals = score_sentences(sentences, ENGLISH)
        assert build_candidates(sentences, signals, 20.0) == []

    def test_opening_hook_boost(self):
        prefix = np.array([0.0, 0.5, 1.0])
        plain = compute_window_score(prefix, 0, 1, opening_hook=0.0)
        weak = compute_window_score(prefix, 0, 1, opening_hook=0.4)
        strong = compute_window_score(prefix, 0, 1, opening_hook=1.0)

        assert plain == pytest.approx(0.5)
        assert weak == plain
        assert strong == pytest.approx(0.5 + 0.15)


# =============================================================================
# Selection Tests
# =============================================================================

class TestSelection:
    """Tests for greedy highlight selection."""

    def test_compute_overlap(self):
        assert compute_overlap(window(0, 10, 1), window(20, 30, 1)) == 0.0
        assert compute_overlap(window(0, 10, 1), window(5, 15, 1)) == 5.0

    def test_ties_prefer_earlier_start(self):
        candidates = [window(40, 70, 0.9), window(15, 45, 0.9)]
        selected, _ = select_highlights(candidates, 1)
        assert selected[0].window.start == 15

    def test_overlapping_candidate_dropped(self):
        candidates = [window(0, 30, 1.0), window(10, 40, 0.9), window(45, 75, 0.8)]
        selected, decisions = select_highlights(candidates, 3)

        assert [s.window.start for s in selected] == [0, 45]
        dropped = [d for d in decisions if d.action == "drop_overlap"]
        assert len(dropped) == 1
        assert dropped[0].candidate_index == 1
        assert dropped[0].related_index == 0

    def test_min_gap_enforced(self):
        candidates = [window(0, 30, 1.0), window(30.5, 60, 0.9), window(32, 60, 0.8)]
        selected, decisions = select_highlights(candidates, 3)

        assert [s.window.start for s in selected] == [0, 32]
        assert any(d.action == "drop_gap" and d.candidate_index == 1 for d in decisions)

    def test_never_pads_with_overlapping_filler(self):
        candidates = [window(0, 30, 1.0), window(5, 35, 0.9)]
        selected, _ = select_highlights(candidates, 3)
        assert len(selected) == 1

    def test_limit_decision(self):
        candidates = [window(0, 30, 1.0), window(40, 70, 0.5)]
        selected, decisions = select_highlights(candidates, 1)
        assert len(selected) == 1
        assert decisions[1].action == "drop_limit"

    def test_confidence_rescaled_against_best(self):
        candidates = [window(0, 10, 2.0), window(20, 30, 1.0), window(5, 15, 1.5)]
        selected, _ = select_highlights(candidates, 3)

        assert [s.confidence for s in selected] == [1.0, 0.5]
        assert [s.rank for s in selected] == [0, 1]

    def test_zero_scores_all_fully_confident(self):
        confidences = compute_confidences([window(0, 10, 0.0), window(20, 30, 0.0)])
        assert list(confidences) == [1.0, 1.0]

    def test_empty_candidates(self):
        assert select_highlights([], 3) == ([], [])


# =============================================================================
# End-to-end Scenarios
# =============================================================================

class TestAnalyzeTranscript:
    """Integration tests for the full pipeline."""

    def test_empty_transcript(self):
        result = analyze_transcript([], clip_length_seconds=35, clip_count=3)

        assert result.is_empty
        assert result.to_dict()["highlights"] == []
        assert result.to_dict()["insights"] == {"bullet_points": [], "key_topics": [], "tone": "neutral"}

    def test_all_segments_malformed(self):
        result = analyze_transcript([{"text": "", "start": 0}, {"start": 1, "duration": -1}])
        assert result.is_empty
        assert result.highlights == ()

    def test_short_viral_transcript(self, viral_segments):
        result = analyze_transcript(viral_segments, clip_length_seconds=35, clip_count=2)

        assert 1 <= len(result.highlights) <= 2
        for h in result.highlights:
            assert 0.6 * 35 <= h.duration <= 35 + 3
            assert h.hook
            assert h.summary
            assert h.hashtags
            assert "#shorts" in h.hashtags

    def test_bounds_and_non_overlap(self, viral_segments):
        result = analyze_transcript(viral_segments, clip_length_seconds=15, clip_count=6)

        assert len(result.highlights) <= 6
        for h in result.highlights:
            assert 0 <= h.start < h.end <= result.total_duration
        for i, a in enumerate(result.highlights):
            for b in result.highlights[i + 1:]:
                assert min(a.end, b.end) - max(a.start, b.start) <= 1.0

    def test_confidence_descending_with_max_one(self, viral_segments):
        result = analyze_transcript(viral_segments, clip_length_seconds=15, clip_count=4)
        confidences = [h.confidence for h in result.highlights]

        assert confidences[0] == 1.0
        assert confidences == sorted(confidences, reverse=True)
        assert all(0.0 <= c <= 1.0 for c in confidences)

    def test_deterministic_output(self, viral_segments):
        first = analyze_transcript(viral_segments, clip_length_seconds=20, clip_count=3)
        second = analyze_transcript(viral_segments, clip_length_seconds=20, clip_count=3)
        assert first.to_dict() == second.to_dict()

    def test_transcript_shorter_than_clip(self, make_segments):
        texts = [
            "This is a tiny transcript.",
            "It only lasts twenty seconds.",
            "Nothing here can fill a clip.",
            "But the insights still work.",
            "That is the whole story.",
        ]
        result = analyze_transcript(make_segments(texts, seconds_each=4.0), clip_length_seconds=35, clip_count=3)

        assert result.total_duration == 20.0
        assert result.highlights == ()
        assert result.candidate_count == 0
        assert result.insights.bullet_points

    def test_single_segment_transcript_has_no_overlong_highlight(self):
        text = " ".join(f"Sentence number {i} is here now." for i in range(20))
        segments = [{"text": text, "start": 0.0, "duration": 60.0}]

        result = analyze_transcript(segments, clip_length_seconds=20, clip_count=3)

        assert result.sentence_count == 20
        assert result.candidate_count == 0
        assert result.highlights == ()
        assert result.insights.bullet_points

    def test_duplicate_adjacent_hooks_yield_one_highlight(self, make_segments):
        texts = [FILLER] * 40
        texts[10] = "What is the biggest secret nobody tells you?"
        texts[11] = "Never make this huge mistake with your money!"
        result = analyze_transcript(make_segments(texts), clip_length_seconds=20, clip_count=3)

        # Best window opens on the first strong sentence
        assert result.highlights[0].start == 30.0
        anchored = [h for h in result.highlights if h.start <= 34.5 and h.end >= 31.5]
        assert len(anchored) == 1

    def test_keyword_extraction(self, make_segments):
        texts = []
        for i in range(15):
            if i % 3 == 2:
                texts.append("And then it is what it is.")
            else:
                texts.append("And so the framework is what we have.")
        assert sum("framework" in t for t in texts) == 10

        result = analyze_transcript(make_segments(texts), clip_length_seconds=20, clip_count=2)

        assert "framework" in result.insights.key_topics
        assert result.highlights
        assert any(
            "#framework" in h.hashtags or "framework" in h.keywords
            for h in result.highlights
        )
        assert result.insights.tone == "educational"

    def test_out_of_range_settings_are_clamped(self, viral_segments):
        result = analyze_transcript(viral_segments, clip_length_seconds=5, clip_count=50)
        assert len(result.highlights) <= 6
        for h in result.highlights:
            assert h.duration >= 0.6 * 10

    def test_invalid_settings_rejected(self, viral_segments):
        with pytest.raises(ConfigurationError):
            analyze_transcript(viral_segments, clip_length_seconds=math.nan)

    def test_language_selection_and_fallback(self, viral_segments):
        assert analyze_transcript(viral_segments, language="es-MX").language == "es"
        assert analyze_transcript(viral_segments, language="fr").language == "en"
        assert analyze_transcript(viral_segments).language == "en"

    def test_debug_json_written(self, viral_segments, tmp_path):
        result = analyze_transcript(viral_segments, clip_length_seconds=20, clip_count=2, debug_dir=tmp_path)

        debug_file = result.debug_path
        assert debug_file.parent == tmp_path
        assert debug_file.name.startswith("highlights_debug_")
        assert debug_file.exists()
        data = json.loads(debug_file.read_text(encoding="utf-8"))
        assert data["statistics"]["sentences"] == 20
        assert len(data["sentences"]) == 20
        assert data["candidate_windows"]
        assert any(d["action"] == "keep" for d in data["selection"])

    def test_debug_json_named_per_input(self, viral_segments, tmp_path):
        first = analyze_transcript(viral_segments, clip_length_seconds=20, debug_dir=tmp_path)
        second = analyze_transcript(viral_segments, clip_length_seconds=30, debug_dir=tmp_path)
        again = analyze_transcript(viral_segments, clip_length_seconds=20, debug_dir=tmp_path)

        assert first.debug_path != second.debug_path
        assert first.debug_path == again.debug_path
        assert len(list(tmp_path.glob("highlights_debug_*.json"))) == 2
