"""Practice statistics and history aggregation."""

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from practice.models import DailyPractices, PracticeItem, PracticeStats, Recording
from practice.scoring import to_percentage

logger = logging.getLogger(__name__)


def aggregate(
    records: Iterable[Tuple[Any, Optional[float]]],
    item_ids: Optional[Iterable[Any]] = None
) -> Dict[Any, PracticeStats]:
    """
    Compute practice count and highest score per item.

    Args:
        records: (item_id, match_score) pairs, one per practice. A score of
            None is a practice that was never scored.
        item_ids: Known items. When given, every one of them gets an entry
            (zero stats if unpractised) and records for other items are skipped.

    Returns:
        Mapping of item id to PracticeStats
    """
    known = set(item_ids) if item_ids is not None else None
    counts: Dict[Any, int] = defaultdict(int)
    best: Dict[Any, float] = {}
    skipped = 0

    for item_id, match_score in records:
        if known is not None and item_id not in known:
            skipped += 1
            continue
        counts[item_id] += 1
        if match_score is not None and match_score > best.get(item_id, float('-inf')):
            best[item_id] = match_score

    if skipped:
        logger.warning("Skipped %d practice records for unknown items", skipped)

    result: Dict[Any, PracticeStats] = {}
    if known is not None:
        for item_id in known:
            result[item_id] = PracticeStats(item_id)

    for item_id, count in counts.items():
        result[item_id] = PracticeStats(
            item_id=item_id,
            practice_count=count,
            highest_score=to_percentage(best[item_id]) if item_id in best else 0,
        )

    return result


def group_practice_history(
    items: Iterable[PracticeItem],
    recordings: Iterable[Recording]
) -> List[DailyPractices]:
    """
    Group recordings into one entry per practice day, newest day first.

    Within a day each item appears once, ordered by its latest recording
    that day (newest first).
    """
    items_by_id = {item.id: item for item in items}
    latest: Dict[date, Dict[int, datetime]] = defaultdict(dict)
    skipped = 0

    for recording in recordings:
        if recording.item_id not in items_by_id:
            skipped += 1
            continue
        day = recording.recorded_at.date()
        current = latest[day].get(recording.item_id)
        if current is None or recording.recorded_at > current:
            latest[day][recording.item_id] = recording.recorded_at

    if skipped:
        logger.warning("Skipped %d recordings for unknown items", skipped)

    history = []
    for day in sorted(latest, reverse=True):
        ordered = sorted(latest[day].items(), key=lambda entry: (entry[1], entry[0]), reverse=True)
        history.append(DailyPractices(day=day, items=[items_by_id[item_id] for item_id, _ in ordered]))
    return history
