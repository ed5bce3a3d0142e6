"""
Card filtering, search, ordering and random sampling.

Each step takes a list of card mappings and returns a new list; only the
sampling cache keeps state between calls.
"""

from cardsieve.filtering.sampling import (
    SamplingCache,
    fisher_yates_shuffle,
    get_sampling_cache,
    reservoir_sample,
    reset_sampling_cache,
)
from cardsieve.filtering.search import (
    get_cards_matching_query,
    highlight_card,
    highlight_cards,
    search_cards,
)
from cardsieve.filtering.set_ops import dedup_by_key, flatten, intersection, is_superset
from cardsieve.filtering.sorting import (
    get_event_sort,
    sort_by_date_asc,
    sort_by_date_desc,
    sort_by_modified_asc,
    sort_by_modified_desc,
    sort_by_title_asc,
    sort_by_title_desc,
    sort_cards,
    sort_featured,
)
from cardsieve.filtering.tag_filter import (
    derive_panel,
    filter_cards,
    get_active_filter_ids,
    get_active_panels,
    has_tag,
)
from cardsieve.filtering.text import (
    get_by_path,
    highlight_search_field,
    sanitize_text,
    set_by_path,
)

__all__ = [
    # Set helpers
    "dedup_by_key",
    "flatten",
    "intersection",
    "is_superset",
    # Path and text helpers
    "get_by_path",
    "highlight_search_field",
    "sanitize_text",
    "set_by_path",
    # Tag filter
    "derive_panel",
    "filter_cards",
    "get_active_filter_ids",
    "get_active_panels",
    "has_tag",
    # Search
    "get_cards_matching_query",
    "highlight_card",
    "highlight_cards",
    "search_cards",
    # Sorting
    "get_event_sort",
    "sort_by_date_asc",
    "sort_by_date_desc",
    "sort_by_modified_asc",
    "sort_by_modified_desc",
    "sort_by_title_asc",
    "sort_by_title_desc",
    "sort_cards",
    "sort_featured",
    # Random sampling
    "SamplingCache",
    "fisher_yates_shuffle",
    "get_sampling_cache",
    "reservoir_sample",
    "reset_sampling_cache",
]
