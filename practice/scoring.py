"""Scoring calculations for read-aloud attempts."""

import logging
from typing import List, Tuple

import config
from practice.models import ScoreBreakdown, ScoreRecord, Span
from utils.text_similarity import align, normalize_text

logger = logging.getLogger(__name__)


def calculate_score(reference_text: str, transcribed_text: str) -> Tuple[float, List[Span]]:
    """
    Compare a transcription with the reference passage.

    Args:
        reference_text: Passage the user was asked to read
        transcribed_text: Raw text returned by speech recognition

    Returns:
        (score, mismatches) where score is matched characters divided by the
        normalized reference length (0.0 when the reference is empty) and
        mismatches are spans over the normalized transcription
    """
    reference = normalize_text(reference_text)
    transcribed = normalize_text(transcribed_text)

    if not reference or not transcribed:
        # Nothing to compare against, or nothing was said
        return 0.0, []

    alignment = align(reference, transcribed)
    score = alignment.matched_count / max(1, len(reference))

    logger.debug(
        "Matched %d of %d characters, score %.3f",
        alignment.matched_count, len(reference), score
    )
    return score, alignment.mismatched


def build_score_record(recording_id: str, reference_text: str, transcribed_text: str) -> ScoreRecord:
    """Score a transcription and package it for storage."""
    score, mismatches = calculate_score(reference_text, transcribed_text)
    return ScoreRecord(
        recording_id=recording_id,
        transcribed_text=transcribed_text,
        match_score=score,
        mismatched_words=tuple(mismatches),
    )


def score_breakdown(reference_text: str, transcribed_text: str) -> ScoreBreakdown:
    """Count correct and missed reference characters."""
    reference = normalize_text(reference_text)
    transcribed = normalize_text(transcribed_text)

    correct = align(reference, transcribed).matched_count
    return ScoreBreakdown(
        reference_count=len(reference),
        transcribed_count=len(transcribed),
        correct_count=correct,
        error_count=len(reference) - correct,
        accuracy=correct / len(reference) if reference else 0.0,
    )


def score_band(score: float) -> str:
    """Classify a match score as good, fair or poor."""
    if score >= config.GOOD_SCORE:
        return 'good'
    if score >= config.FAIR_SCORE:
        return 'fair'
    return 'poor'


def to_percentage(score: float) -> int:
    """Convert a 0-1 score to a whole percentage, rounding halves up."""
    return int(score * 100 + 0.5)
