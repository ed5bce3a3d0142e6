"""
Card search over authored search fields.

A card matches when the sanitized value of any configured search field
contains the sanitized query. Highlighting is a separate presentation step
applied only to cards that already matched.
"""

import logging
from collections.abc import Iterable, Sequence

from cardsieve.filtering.set_ops import dedup_by_key
from cardsieve.filtering.text import (
    get_by_path,
    highlight_search_field,
    sanitize_text,
    set_by_path,
)
from cardsieve.models.card import Card

logger = logging.getLogger(__name__)


def _card_matches_query(search_field: str, card: Card, search_query: str) -> bool:
    """Does one field of the card contain an already-sanitized query?"""
    value = get_by_path(card, search_field, "")
    return search_query in sanitize_text(value)


def get_cards_matching_query(
    cards: Iterable[Card],
    search_fields: Sequence[str],
    search_query: str,
) -> list[Card]:
    """
    Cards with at least one search field containing ``search_query``.

    The query must already be sanitized. Each card appears once, at the
    position of its first match.
    """
    matching = [
        card
        for card in cards
        for search_field in search_fields
        if _card_matches_query(search_field, card, search_query)
    ]
    return dedup_by_key(matching, "id")


def search_cards(query: str | None, cards: list[Card], search_fields: Sequence[str]) -> list[Card]:
    """
    Narrow cards to those matching a free-text query.

    Args:
        query: The user's search text
        cards: Cards to search
        search_fields: Dot paths to check, e.g. "contentArea.description"

    Returns:
        ``cards`` unchanged for an empty query, otherwise matching cards
        deduplicated by id in input order.
    """
    if not query:
        return cards

    search_query = sanitize_text(query)
    result = get_cards_matching_query(cards, search_fields, search_query)

    logger.debug(
        "cards_searched",
        extra={"fields": len(search_fields), "before": len(cards), "after": len(result)},
    )
    return result


def highlight_card(
    card: Card,
    search_field: str,
    query: str,
    css_class: str | None = None,
) -> Card:
    """
    Return a copy of the card with query matches in one field wrapped.

    The card is returned as-is when the field is missing, None or empty.
    The input card is never modified.
    """
    value = get_by_path(card, search_field, None)
    if value is None or value == "":
        return card
    return set_by_path(card, search_field, highlight_search_field(value, query, css_class))


def highlight_cards(
    cards: Iterable[Card],
    search_fields: Sequence[str],
    query: str,
    css_class: str | None = None,
) -> list[Card]:
    """Apply highlight_card for every search field to each card."""
    highlighted = []
    for card in cards:
        for search_field in search_fields:
            card = highlight_card(card, search_field, query, css_class)
        highlighted.append(card)
    return highlighted
