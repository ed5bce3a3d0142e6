"""
cardsieve services.

Collection assembly, paging and the end-to-end query pipeline.
"""

from cardsieve.services.collection_assembler import (
    apply_bookmark_data,
    apply_featured_flag,
    get_bookmarked_cards,
    get_collection_cards,
    mark_featured,
    process_cards,
)
from cardsieve.services.collection_query import (
    get_query_metrics,
    query_collection,
    reset_query_metrics,
)
from cardsieve.services.pagination import (
    get_num_cards_to_show,
    get_total_pages,
    should_display_paginator,
)

__all__ = [
    # Collection assembly
    "apply_bookmark_data",
    "apply_featured_flag",
    "get_bookmarked_cards",
    "get_collection_cards",
    "mark_featured",
    "process_cards",
    # Query pipeline
    "get_query_metrics",
    "query_collection",
    "reset_query_metrics",
    # Pagination
    "get_num_cards_to_show",
    "get_total_pages",
    "should_display_paginator",
]
