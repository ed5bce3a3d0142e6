"""Paginator arithmetic."""

import math


def should_display_paginator(enabled: bool, total_card_limit: int, total_results: int) -> bool:
    """
    Should the paginator render?

    Args:
        enabled: Authored flag
        total_card_limit: Authored cap on cards in the collection
        total_results: Cards in the collection

    Returns:
        True if enabled, the limit is positive and the results fit in it.
    """
    return enabled and total_card_limit > 0 and not total_results > total_card_limit


def get_num_cards_to_show(results_per_page: int, current_page: int, total_results: int) -> int:
    """Cards visible up to and including ``current_page``."""
    return min(results_per_page * current_page, total_results)


def get_total_pages(results_per_page: int, total_results: int) -> int:
    """Pages needed for ``total_results``; 0 when pages hold no cards."""
    if results_per_page == 0:
        return 0
    return math.ceil(total_results / results_per_page)
