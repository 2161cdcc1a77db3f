"""Text normalization and character-level alignment."""

import logging
import unicodedata
from typing import List, Sequence

from practice.models import Alignment, Span

logger = logging.getLogger(__name__)


def is_ignorable(char: str) -> bool:
    """Check if a character is punctuation or whitespace."""
    return char.isspace() or unicodedata.category(char).startswith('P')


def normalize_text(text: str) -> str:
    """
    Normalize text for comparison.

    - Remove punctuation (every Unicode ``P*`` category, so ``，。「」`` too)
    - Remove whitespace
    - Keep everything else as-is: no case folding, no accent stripping

    The result is a string used as an immutable character sequence.
    """
    if not text:
        return ""
    return "".join(char for char in text if not is_ignorable(char))


def longest_common_subsequence(reference: Sequence[str], transcribed: Sequence[str]) -> str:
    """
    Compute the longest common subsequence of two character sequences.

    ``dp[i][j]`` is the LCS length of ``reference[:i]`` and ``transcribed[:j]``.
    Backtracking takes the diagonal when characters are equal, otherwise the
    neighbour with the strictly greater value; ties step back along the
    transcribed side.

    Args:
        reference: Normalized reference characters
        transcribed: Normalized transcribed characters

    Returns:
        The common subsequence as a string
    """
    m, n = len(reference), len(transcribed)
    if m == 0 or n == 0:
        return ""

    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        ref_char = reference[i - 1]
        row, prev = dp[i], dp[i - 1]
        for j in range(1, n + 1):
            if ref_char == transcribed[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = max(prev[j], row[j - 1])

    lcs: List[str] = []
    i, j = m, n
    while i > 0 and j > 0:
        if reference[i - 1] == transcribed[j - 1]:
            lcs.append(reference[i - 1])
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            j -= 1

    lcs.reverse()
    return "".join(lcs)


def partition_by_lcs(sequence: Sequence[str], lcs: Sequence[str]) -> List[Span]:
    """
    Split a sequence into matched/mismatched runs against an LCS.

    Walks the sequence left to right: a character equal to the next unconsumed
    LCS character is matched and advances the LCS cursor, anything else joins
    the current mismatched run. Adjacent characters of the same kind coalesce
    into one span, so the spans cover ``sequence`` exactly.
    """
    spans: List[Span] = []
    lcs_index = 0
    run_start = 0
    run_matched = None

    for index, char in enumerate(sequence):
        matched = lcs_index < len(lcs) and char == lcs[lcs_index]
        if matched:
            lcs_index += 1
        if run_matched is None:
            run_matched = matched
        elif matched != run_matched:
            spans.append(Span(run_start, index, run_matched, "".join(sequence[run_start:index])))
            run_start = index
            run_matched = matched

    if run_matched is not None:
        end = len(sequence)
        spans.append(Span(run_start, end, run_matched, "".join(sequence[run_start:end])))

    return spans


def align(reference: Sequence[str], transcribed: Sequence[str]) -> Alignment:
    """
    Align a normalized transcription against a normalized reference.

    Args:
        reference: Normalized reference characters
        transcribed: Normalized transcribed characters

    Returns:
        Alignment whose spans partition ``transcribed`` (offsets into it)
    """
    lcs = longest_common_subsequence(reference, transcribed)
    alignment = Alignment(
        matched_count=len(lcs),
        spans=tuple(partition_by_lcs(transcribed, lcs)),
        lcs=lcs,
        reference_spans=tuple(partition_by_lcs(reference, lcs)),
    )
    logger.debug(
        "Aligned %d reference chars with %d transcribed chars: %d matched",
        len(reference), len(transcribed), alignment.matched_count
    )
    return alignment
