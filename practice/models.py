"""Practice data structures."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

import config


@dataclass(frozen=True)
class Span:
    """A half-open run of characters [start, end) tagged matched or mismatched."""
    start: int
    end: int
    matched: bool
    text: str = ""

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {
            'word': self.text,
            'start_index': self.start,
            'end_index': self.end,
            'matched': self.matched,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Span":
        return cls(
            start=int(data['start_index']),
            end=int(data['end_index']),
            matched=bool(data.get('matched', False)),
            text=data.get('word', ""),
        )


@dataclass(frozen=True)
class Alignment:
    """Result of comparing a reference sequence with a transcribed one.

    ``spans`` partitions the transcribed sequence and ``reference_spans``
    partitions the reference sequence, both left to right.
    """
    matched_count: int
    spans: Tuple[Span, ...]
    lcs: str = ""
    reference_spans: Tuple[Span, ...] = ()

    @property
    def mismatched(self) -> List[Span]:
        return [span for span in self.spans if not span.matched]

    @property
    def missed(self) -> List[Span]:
        """Reference runs that were not read."""
        return [span for span in self.reference_spans if not span.matched]


@dataclass(frozen=True)
class ScoreRecord:
    """Score of a single recording."""
    recording_id: str
    transcribed_text: str
    match_score: float
    mismatched_words: Tuple[Span, ...] = ()


@dataclass(frozen=True)
class ScoreBreakdown:
    """Character counts behind a match score."""
    reference_count: int
    transcribed_count: int
    correct_count: int
    error_count: int
    accuracy: float


@dataclass(frozen=True)
class PracticeStats:
    """Practice count and best score (percent) of one item."""
    item_id: Any
    practice_count: int = 0
    highest_score: int = 0


@dataclass(frozen=True)
class ContributionCell:
    """One day of the contribution heatmap."""
    day: date
    score: int = 0
    practice_count: int = 0

    @property
    def intensity(self) -> int:
        return intensity_for(self.score, self.practice_count)


def intensity_for(score: int, practice_count: int) -> int:
    """Heatmap intensity (0-4) for a day's best score and practice count."""
    if practice_count == 0:
        return 0
    for threshold, level in config.INTENSITY_THRESHOLDS:
        if score < threshold:
            return level
    return config.MAX_INTENSITY


# Monday..Sunday, None for days outside the queried range
ContributionWeek = Tuple[Optional[ContributionCell], ...]


@dataclass(frozen=True)
class PracticeItem:
    """A passage to read aloud."""
    id: int
    title: str
    content: str
    topic_id: int = config.PRESET_TOPIC_ID
    difficulty: int = 1
    category: str = "General"
    mp3_url: str = ""
    is_read: bool = False


@dataclass(frozen=True)
class Recording:
    """A logged reading of a practice item."""
    id: str
    item_id: int
    recorded_at: datetime
    file_path: str
    duration: float = 0.0
    note: Optional[str] = None


@dataclass(frozen=True)
class Topic:
    """A named collection of practice items."""
    id: int
    name: str
    description: str = ""
    created_at: Optional[datetime] = None
    is_preset: bool = False
    practice_count: int = 0


@dataclass(frozen=True)
class DailyPractices:
    """Items practiced on one calendar day."""
    day: date
    items: List[PracticeItem] = field(default_factory=list)


@dataclass(frozen=True)
class DailySelection:
    """Today's practice item.

    ``completed`` is set once the item has a recording dated today.
    """
    item: Optional[PracticeItem] = None
    completed: bool = False
