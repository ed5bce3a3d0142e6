"""
Card sort orders.

Every descending order is produced by running the ascending sort and then
reversing the whole list. Cards with equal keys therefore come out in the
reverse of their ascending-pass order, which differs from sorting with an
inverted comparator.

Date sorts treat a card with a missing date as equal to every other card,
so it keeps its place relative to the sort's stable pass.
"""

import unicodedata
from collections.abc import Callable, Iterable
from functools import cmp_to_key
from typing import Any

from cardsieve.config import CARD_DATE_PATH, MODIFIED_DATE_PATH, TITLE_PATH
from cardsieve.filtering.sampling import SamplingCache, get_sampling_cache
from cardsieve.filtering.text import get_by_path
from cardsieve.models.card import Card
from cardsieve.models.collection import SortOption
from cardsieve.models.failure import InvalidSortOptionError

# Classifies cards into Live / Upcoming / OnDemand / Expired / Other
EventTiming = Callable[[list[Card], Any], list[Card]]


def _title_key(card: Card) -> tuple[str, str]:
    """
    Locale-style ordering key for a card title.

    Primary: accent-stripped, case-folded text. Secondary: lower case before
    upper case for otherwise equal titles.
    """
    title = get_by_path(card, TITLE_PATH, "") or ""
    if not isinstance(title, str):
        title = str(title)
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), title.swapcase()


def _date_comparator(path: str, newest_first: bool) -> Callable[[Card, Card], int]:
    def compare(card_one: Card, card_two: Card) -> int:
        date_one = get_by_path(card_one, path)
        date_two = get_by_path(card_two, path)
        if not (date_one and date_two):
            return 0
        if newest_first:
            date_one, date_two = date_two, date_one
        return (date_one > date_two) - (date_one < date_two)

    return compare


def sort_by_title_asc(cards: Iterable[Card]) -> list[Card]:
    """Cards sorted by title (A-Z)."""
    return sorted(cards, key=_title_key)


def sort_by_title_desc(cards: Iterable[Card]) -> list[Card]:
    """Cards sorted by title (Z-A): the A-Z order reversed."""
    return sort_by_title_asc(cards)[::-1]


def sort_by_modified_desc(cards: Iterable[Card]) -> list[Card]:
    """Cards sorted by modified date, newest to oldest."""
    return sorted(cards, key=cmp_to_key(_date_comparator(MODIFIED_DATE_PATH, newest_first=True)))


def sort_by_modified_asc(cards: Iterable[Card]) -> list[Card]:
    """Cards sorted by modified date, oldest to newest."""
    return sort_by_modified_desc(cards)[::-1]


def sort_by_date_asc(cards: Iterable[Card]) -> list[Card]:
    """Cards sorted by card date, oldest to newest."""
    return sorted(cards, key=cmp_to_key(_date_comparator(CARD_DATE_PATH, newest_first=False)))


def sort_by_date_desc(cards: Iterable[Card]) -> list[Card]:
    """Cards sorted by card date, newest to oldest."""
    return sort_by_date_asc(cards)[::-1]


def sort_featured(cards: Iterable[Card]) -> list[Card]:
    """
    Featured order.

    The upstream source already orders featured cards, so this is a
    pass-through copy.
    """
    return list(cards)


def get_event_sort(cards: list[Card] | None, event_filter: Any, event_timing: EventTiming) -> list[Card]:
    """Forward cards to an event-timing classifier."""
    return event_timing(cards or [], event_filter)


_SORTERS: dict[SortOption, Callable[[Iterable[Card]], list[Card]]] = {
    SortOption.FEATURED: sort_featured,
    SortOption.TITLE_ASC: sort_by_title_asc,
    SortOption.TITLE_DESC: sort_by_title_desc,
    SortOption.DATE_ASC: sort_by_date_asc,
    SortOption.DATE_DESC: sort_by_date_desc,
    SortOption.MODIFIED_ASC: sort_by_modified_asc,
    SortOption.MODIFIED_DESC: sort_by_modified_desc,
}


def sort_cards(
    cards: list[Card],
    sort_option: SortOption | str,
    collection_id: int | str = 0,
    sample_size: int = 0,
    reservoir_size: int = 0,
    cache: SamplingCache | None = None,
) -> list[Card]:
    """
    Order cards by an authored sort option.

    Random order is served from the sampling cache keyed by
    ``collection_id``; the other options are pure.

    Raises:
        InvalidSortOptionError: If the option is not a SortOption
    """
    try:
        option = SortOption(sort_option)
    except ValueError:
        raise InvalidSortOptionError(sort_option) from None

    if option is SortOption.RANDOM:
        cache = cache if cache is not None else get_sampling_cache()
        return cache.random_sort(cards, collection_id, sample_size, reservoir_size)

    return _SORTERS[option](cards)
