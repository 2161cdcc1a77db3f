"""Composable filters for practice item lists."""

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, List, Mapping, Optional

import config
from practice.models import PracticeItem

ItemPredicate = Callable[[PracticeItem], bool]


class FilterType(Enum):
    ALL = "all"
    RECENT = "recent"
    UNREAD = "unread"


def matches_search(search_text: str) -> ItemPredicate:
    """Case-insensitive title search. Empty text matches everything."""
    needle = search_text.strip().casefold()

    def predicate(item: PracticeItem) -> bool:
        return not needle or needle in item.title.casefold()

    return predicate


def is_unread(item: PracticeItem) -> bool:
    return not item.is_read


def all_of(*predicates: ItemPredicate) -> ItemPredicate:
    """Combine predicates with logical AND."""
    def predicate(item: PracticeItem) -> bool:
        return all(check(item) for check in predicates)

    return predicate


def recent_items(
    items: Iterable[PracticeItem],
    latest_by_item: Mapping[Any, datetime],
    limit: int = config.RECENT_ITEMS_LIMIT
) -> List[PracticeItem]:
    """Practised items ordered by latest recording, newest first."""
    practiced = [item for item in items if item.id in latest_by_item]
    practiced.sort(key=lambda item: latest_by_item[item.id], reverse=True)
    return practiced[:limit]


def filter_items(
    items: Iterable[PracticeItem],
    search_text: str = "",
    filter_type: FilterType = FilterType.ALL,
    latest_by_item: Optional[Mapping[Any, datetime]] = None
) -> List[PracticeItem]:
    """
    Apply the list view filters.

    Args:
        items: Items of the current topic
        search_text: Title search text
        filter_type: ALL, RECENT (needs ``latest_by_item``) or UNREAD
        latest_by_item: Latest recording time per item id

    Returns:
        Filtered items
    """
    items = list(items)
    if filter_type is FilterType.RECENT:
        items = recent_items(items, latest_by_item or {})

    predicates = [matches_search(search_text)]
    if filter_type is FilterType.UNREAD:
        predicates.append(is_unread)

    keep = all_of(*predicates)
    return [item for item in items if keep(item)]
