"""
Tests for text normalization and LCS alignment.
"""

import pytest

from practice.models import Span
from utils.text_similarity import (
    align,
    is_ignorable,
    longest_common_subsequence,
    normalize_text,
    partition_by_lcs,
)


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_removes_ascii_punctuation_and_spaces(self):
        assert normalize_text("Hello, world!") == "Helloworld"

    def test_removes_cjk_punctuation(self):
        assert normalize_text("我爱，学习。「好」") == "我爱学习好"

    def test_removes_all_whitespace_kinds(self):
        assert normalize_text("a b\tc\nd　e") == "abcde"

    def test_keeps_case_and_symbols(self):
        assert normalize_text("AbC $5 + x") == "AbC$5+x"

    def test_keeps_accents(self):
        assert normalize_text("café, naïve") == "cafénaïve"

    def test_empty_input_gives_empty_sequence(self):
        assert normalize_text("") == ""
        assert normalize_text(" ,.!? ") == ""

    @pytest.mark.parametrize("char", [",", "-", "(", ")", "_", "«", "»", "、", "…"])
    def test_punctuation_is_ignorable(self, char):
        assert is_ignorable(char)

    @pytest.mark.parametrize("char", ["a", "字", "1", "$", "+"])
    def test_other_characters_are_kept(self, char):
        assert not is_ignorable(char)


class TestLongestCommonSubsequence:
    """Tests for longest_common_subsequence."""

    def test_dropped_character(self):
        assert longest_common_subsequence("我爱学习", "我爱习") == "我爱习"

    def test_substituted_character(self):
        assert longest_common_subsequence("我爱学习", "我爱雪习") == "我爱习"

    def test_empty_sides(self):
        assert longest_common_subsequence("", "abc") == ""
        assert longest_common_subsequence("abc", "") == ""

    def test_tie_steps_back_on_transcribed_side(self):
        """With two optimal answers, the earlier transcribed character wins."""
        assert longest_common_subsequence("ab", "ba") == "b"

    def test_classic_length(self):
        lcs = longest_common_subsequence("ABCBDAB", "BDCABA")
        assert len(lcs) == 4

    def test_long_inputs_do_not_recurse(self):
        text = "说话要慢" * 300
        assert longest_common_subsequence(text, text) == text


class TestPartition:
    """Tests for partition_by_lcs."""

    def test_repeated_character_matches_first_occurrence(self):
        assert partition_by_lcs("aab", "ab") == [
            Span(0, 1, True, "a"),
            Span(1, 2, False, "a"),
            Span(2, 3, True, "b"),
        ]

    def test_empty_sequence_has_no_spans(self):
        assert partition_by_lcs("", "") == []


class TestAlign:
    """Tests for align."""

    def test_identical_sequences_give_single_matched_span(self):
        alignment = align("我爱学习", "我爱学习")
        assert alignment.matched_count == 4
        assert alignment.spans == (Span(0, 4, True, "我爱学习"),)
        assert alignment.mismatched == []

    def test_dropped_character_has_no_transcribed_mismatch(self):
        alignment = align("我爱学习", "我爱习")
        assert alignment.matched_count == 3
        assert alignment.spans == (Span(0, 3, True, "我爱习"),)
        assert alignment.missed == [Span(2, 3, False, "学")]

    def test_homophone_insertion_is_a_mismatched_span(self):
        alignment = align("我爱学习", "我爱雪习")
        assert alignment.matched_count == 3
        assert alignment.spans == (
            Span(0, 2, True, "我爱"),
            Span(2, 3, False, "雪"),
            Span(3, 4, True, "习"),
        )
        assert alignment.mismatched == [Span(2, 3, False, "雪")]

    def test_tie_break_decides_reported_mismatch(self):
        alignment = align("ab", "ba")
        assert alignment.mismatched == [Span(1, 2, False, "a")]

    def test_adjacent_mismatches_coalesce(self):
        alignment = align("abc", "axyzc")
        assert alignment.mismatched == [Span(1, 4, False, "xyz")]

    def test_empty_transcribed_has_no_spans(self):
        alignment = align("我爱学习", "")
        assert alignment.matched_count == 0
        assert alignment.spans == ()

    def test_empty_reference_marks_everything_mismatched(self):
        alignment = align("", "abc")
        assert alignment.matched_count == 0
        assert alignment.spans == (Span(0, 3, False, "abc"),)

    @pytest.mark.parametrize("reference,transcribed", [
        ("我爱学习", "我爱雪习"),
        ("今天天气很好", "天气今天很好吗"),
        ("abcdef", "xaybzc"),
        ("abc", "xyz"),
        ("", "abc"),
        ("aaaa", "aa"),
    ])
    def test_spans_partition_transcribed(self, reference, transcribed):
        spans = align(reference, transcribed).spans
        assert sum(span.length for span in spans) == len(transcribed)
        position = 0
        for span in spans:
            assert span.start == position
            assert span.end > span.start
            assert span.text == transcribed[span.start:span.end]
            position = span.end
        assert position == len(transcribed)

    def test_is_deterministic(self):
        first = align("今天天气很好", "天气今天很好吗")
        second = align("今天天气很好", "天气今天很好吗")
        assert first == second
