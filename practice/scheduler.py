"""Daily practice item selection."""

import logging
import random
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from practice.models import DailySelection, PracticeItem

logger = logging.getLogger(__name__)


def _latest_today_item(
    items: Sequence[PracticeItem],
    recordings_today_by_item: Mapping[Any, Sequence[datetime]]
) -> Optional[PracticeItem]:
    """Return the item with the most recent recording today, if any."""
    best_item = None
    best_time = None
    for item in items:
        times = recordings_today_by_item.get(item.id)
        if not times:
            continue
        latest = max(times)
        if best_time is None or latest > best_time:
            best_item, best_time = item, latest
    return best_item


def select_daily_item(
    items: Sequence[PracticeItem],
    recordings_today_by_item: Mapping[Any, Sequence[datetime]],
    rng: random.Random
) -> Optional[PracticeItem]:
    """
    Pick today's practice item.

    If some item already has a recording dated today, that item is returned
    (the one recorded most recently), so repeated calls within a day agree.
    Otherwise one of the items without a recording today is chosen with
    ``rng.choice``.

    Args:
        items: All practice items, in a stable order
        recordings_today_by_item: Recording timestamps dated today, keyed by item id
        rng: Random source, e.g. ``random.Random(seed)``

    Returns:
        The chosen item, or None if there is nothing left to pick
    """
    today_item = _latest_today_item(items, recordings_today_by_item)
    if today_item is not None:
        return today_item

    candidates = [item for item in items if not recordings_today_by_item.get(item.id)]
    if not candidates:
        logger.info("No practice items left to schedule today")
        return None

    choice = rng.choice(candidates)
    logger.debug("Picked item %s out of %d candidates", choice.id, len(candidates))
    return choice


def plan_daily_practice(
    items: Sequence[PracticeItem],
    recordings_today_by_item: Mapping[Any, Sequence[datetime]],
    rng: random.Random
) -> DailySelection:
    """Select today's item and flag whether it has already been practised."""
    item = select_daily_item(items, recordings_today_by_item, rng)
    completed = item is not None and bool(recordings_today_by_item.get(item.id))
    return DailySelection(item=item, completed=completed)
