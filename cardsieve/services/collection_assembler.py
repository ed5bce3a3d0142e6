"""
Collection assembly.

Merges authored featured cards with fetched cards and stamps the
bookmark/featured flags. Every function returns new card mappings; the
cards passed in are never modified.
"""

from collections.abc import Collection, Iterable

from cardsieve.filtering.set_ops import dedup_by_key
from cardsieve.models.card import Card


def process_cards(featured_cards: Iterable[Card], raw_cards: Iterable[Card]) -> list[Card]:
    """
    Join featured cards ahead of raw cards, deduplicated by id.

    A card present in both keeps its featured copy and its place at the
    front.
    """
    return dedup_by_key([*featured_cards, *raw_cards], "id")


def apply_bookmark_data(cards: Iterable[Card], bookmarked_ids: Collection[str]) -> list[Card]:
    """Copy each card with ``isBookmarked`` set from the user's bookmarks."""
    return [{**card, "isBookmarked": card.get("id") in bookmarked_ids} for card in cards]


def mark_featured(cards: Iterable[Card]) -> list[Card]:
    """Copy each card with ``isFeatured`` set."""
    return [{**card, "isFeatured": True} for card in cards]


def apply_featured_flag(ids: Iterable[str], cards: list[Card]) -> list[Card]:
    """
    Featured copies of the cards with the given ids, in ``ids`` order.

    Every card with a matching id is included, duplicates too.
    """
    return mark_featured(
        card for card_id in ids for card in cards if card.get("id") == card_id
    )


def get_bookmarked_cards(cards: Iterable[Card]) -> list[Card]:
    """Cards the user has bookmarked."""
    return [card for card in cards if card.get("isBookmarked")]


def get_collection_cards(
    show_bookmarks_only: bool,
    bookmarked_cards: list[Card],
    collection_cards: list[Card],
) -> list[Card]:
    """The bookmarks when the collection is authored as bookmarks-only, else all cards."""
    return bookmarked_cards if show_bookmarks_only else collection_cards
