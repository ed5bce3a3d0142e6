"""
Collection Query: Assemble, Filter, Search, Order, Paginate.

Runs one evaluation pass over a card collection:

1. Assemble: featured cards first, deduplicated by id; bookmark flags applied
2. Bookmarks-only collections keep bookmarked cards
3. Filter by checked tag filters
4. Search by query text
5. Order by the authored sort (random order comes from the sampling cache)
6. Apply the total card limit and slice the requested page

INVARIANTS:
- Stages 2-4 only remove cards; stage 5 only reorders (or samples)
- Input cards are never modified
- Unknown filter modes and sort options propagate as KnownError subclasses
"""

import logging
from collections import deque

from cardsieve.config import settings
from cardsieve.filtering.sampling import SamplingCache
from cardsieve.filtering.search import highlight_cards, search_cards
from cardsieve.filtering.sorting import sort_cards
from cardsieve.filtering.tag_filter import filter_cards, get_active_panels
from cardsieve.models.collection import CollectionQuery, CollectionResult, QueryMetrics
from cardsieve.services.collection_assembler import (
    apply_bookmark_data,
    apply_featured_flag,
    get_bookmarked_cards,
    get_collection_cards,
    mark_featured,
    process_cards,
)
from cardsieve.services.pagination import (
    get_num_cards_to_show,
    get_total_pages,
    should_display_paginator,
)

logger = logging.getLogger(__name__)

# Module-level metrics accumulator, oldest entries dropped first
_metrics_history: deque[QueryMetrics] = deque(maxlen=settings.metrics_history_size)


def get_query_metrics() -> list[QueryMetrics]:
    """Get recorded metrics, oldest first."""
    return list(_metrics_history)


def reset_query_metrics() -> None:
    """Reset metrics history (for testing)."""
    _metrics_history.clear()


def query_collection(request: CollectionQuery, cache: SamplingCache | None = None) -> CollectionResult:
    """
    Evaluate a collection query.

    Args:
        request: Cards, authored configuration and user selections
        cache: Sampling cache for random order; the process-wide cache when None

    Returns:
        CollectionResult with the cards visible on the requested page

    Raises:
        InvalidFilterModeError: If filters are checked and the mode is unknown
        InvalidSortOptionError: If the sort option is unknown
    """
    metrics = QueryMetrics()

    featured = [
        *mark_featured(request.featured_cards),
        *apply_featured_flag(request.featured_ids, request.cards),
    ]
    cards = apply_bookmark_data(process_cards(featured, request.cards), request.bookmarked_ids)
    metrics.assembled = len(cards)

    cards = get_collection_cards(request.show_bookmarks_only, get_bookmarked_cards(cards), cards)
    metrics.after_bookmarks = len(cards)

    active_panels = (
        request.active_panels
        if request.active_panels is not None
        else get_active_panels(request.active_filter_ids)
    )
    cards = filter_cards(cards, request.active_filter_ids, active_panels, request.filter_mode)
    metrics.after_filter = len(cards)

    cards = search_cards(request.query, cards, request.search_fields)
    metrics.after_search = len(cards)

    cards = sort_cards(
        cards,
        request.sort,
        collection_id=request.collection_id,
        sample_size=request.sample_size,
        reservoir_size=request.reservoir_size,
        cache=cache,
    )
    metrics.after_sort = len(cards)

    if request.total_card_limit > 0:
        cards = cards[: request.total_card_limit]
    metrics.after_limit = len(cards)

    total_results = len(cards)
    per_page = request.results_per_page
    num_cards_to_show = get_num_cards_to_show(per_page, request.current_page, total_results)

    if per_page > 0:
        start = (request.current_page - 1) * per_page
        visible = cards[max(start, 0) : num_cards_to_show]
    else:
        visible = cards

    if request.highlight and request.query:
        visible = highlight_cards(visible, request.search_fields, request.query)

    _metrics_history.append(metrics)

    logger.info(
        "collection_query_completed",
        extra={
            "collection_id": request.collection_id,
            "assembled": metrics.assembled,
            "after_filter": metrics.after_filter,
            "after_search": metrics.after_search,
            "total_results": total_results,
            "visible": len(visible),
        },
    )

    return CollectionResult(
        cards=visible,
        total_results=total_results,
        total_pages=get_total_pages(per_page, total_results),
        num_cards_to_show=num_cards_to_show,
        # Checked against the count before the limit cut
        show_paginator=should_display_paginator(
            request.paginator_enabled, request.total_card_limit, metrics.after_sort
        ),
        metrics=metrics,
    )
