"""
Tests for score computation.
"""

import pytest

from practice.models import ScoreBreakdown, Span
from practice.scoring import (
    build_score_record,
    calculate_score,
    score_band,
    score_breakdown,
    to_percentage,
)


class TestCalculateScore:
    """Tests for calculate_score."""

    def test_dropped_character(self):
        assert calculate_score("我爱学习", "我爱习") == (0.75, [])

    def test_homophone_insertion(self):
        score, mismatches = calculate_score("我爱学习", "我爱雪习")
        assert score == 0.75
        assert mismatches == [Span(2, 3, False, "雪")]

    def test_ignores_punctuation_and_whitespace(self):
        assert calculate_score("Hello, world!", "Hello world") == (1.0, [])
        assert calculate_score("Hello, world!", "Helloworld") == (1.0, [])

    @pytest.mark.parametrize("text", ["我爱学习", "Peter Piper picked a peck", "一、二，三。"])
    def test_same_text_scores_one(self, text):
        assert calculate_score(text, text) == (1.0, [])

    @pytest.mark.parametrize("text", ["我爱学习", "Hello"])
    def test_empty_transcription_scores_zero(self, text):
        assert calculate_score(text, "") == (0.0, [])

    def test_empty_reference_scores_zero(self):
        assert calculate_score("", "abc") == (0.0, [])
        assert calculate_score("，。！", "abc") == (0.0, [])

    def test_is_case_sensitive(self):
        score, mismatches = calculate_score("Hello", "hello")
        assert score == pytest.approx(0.8)
        assert mismatches == [Span(0, 1, False, "h")]

    def test_offsets_refer_to_normalized_transcription(self):
        _, mismatches = calculate_score("我爱学习", "我，爱 雪习。")
        assert mismatches == [Span(2, 3, False, "雪")]

    def test_extra_speech_does_not_raise_score_above_one(self):
        score, mismatches = calculate_score("我爱", "嗯我爱你")
        assert score == 1.0
        assert mismatches == [Span(0, 1, False, "嗯"), Span(3, 4, False, "你")]


class TestScoreRecord:
    """Tests for build_score_record."""

    def test_keeps_raw_transcription(self):
        record = build_score_record("rec-1", "我爱学习", "我爱，雪习")
        assert record.recording_id == "rec-1"
        assert record.transcribed_text == "我爱，雪习"
        assert record.match_score == 0.75
        assert record.mismatched_words == (Span(2, 3, False, "雪"),)


class TestScoreBreakdown:
    """Tests for score_breakdown."""

    def test_counts(self):
        assert score_breakdown("我爱学习", "我爱雪习") == ScoreBreakdown(
            reference_count=4,
            transcribed_count=4,
            correct_count=3,
            error_count=1,
            accuracy=0.75,
        )

    def test_empty_reference(self):
        breakdown = score_breakdown("", "abc")
        assert breakdown.accuracy == 0.0
        assert breakdown.error_count == 0


class TestScoreBand:
    """Tests for score_band and to_percentage."""

    @pytest.mark.parametrize("score,band", [
        (1.0, "good"),
        (0.8, "good"),
        (0.79, "fair"),
        (0.6, "fair"),
        (0.59, "poor"),
        (0.0, "poor"),
    ])
    def test_bands(self, score, band):
        assert score_band(score) == band

    def test_percentage_rounds_halves_up(self):
        assert to_percentage(0.125) == 13
        assert to_percentage(0.75) == 75
        assert to_percentage(0.0) == 0
        assert to_percentage(1.0) == 100
