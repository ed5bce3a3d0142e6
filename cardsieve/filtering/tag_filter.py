"""
Tag Filter: Match Cards Against Checked Filters.

Filters are authored in panels. A filter id is panel-prefixed
("caas:topic/security"), and a card matches through its tags.

Modes:
- AND / XOR: the card carries every checked filter (superset rule).
  Both names evaluate identically.
- OR, one active panel: the card carries any checked filter.
- OR, several active panels: the card carries a tag in every active panel,
  and within each panel at least one of that panel's checked filters.

INVARIANTS:
- No checked filters → cards returned unchanged
- Filtering only removes cards, never reorders them
- A card without a tags field never matches a checked filter
"""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from cardsieve.config import PANEL_SEPARATOR
from cardsieve.filtering.set_ops import flatten, intersection, is_superset
from cardsieve.models.card import Card, Tag
from cardsieve.models.collection import FilterMode
from cardsieve.models.failure import InvalidFilterModeError

logger = logging.getLogger(__name__)


def panel_of_id(filter_id: str) -> str:
    """Panel name of a filter or tag id: everything before the first separator."""
    return filter_id.split(PANEL_SEPARATOR, 1)[0]


def derive_panel(tag: Tag | Mapping[str, Any]) -> str:
    """
    Derive the panel a tag belongs to.

    The explicit ``parent.id`` wins when present and non-empty; otherwise the
    panel is the prefix of the tag id up to the first "/".
    """
    parent = tag.get("parent")
    if isinstance(parent, Mapping):
        parent_id = parent.get("id")
        if parent_id:
            return str(parent_id)
    return panel_of_id(tag.get("id") or "")


def get_active_filter_ids(filter_groups: Iterable[Mapping[str, Any]]) -> list[str]:
    """
    Collect the ids of every checked item across authored filter groups.

    Args:
        filter_groups: Panels shaped ``{"id": ..., "items": [{"id", "selected"}]}``

    Returns:
        Checked item ids in panel order, then item order.
    """
    items = flatten(group.get("items") or [] for group in filter_groups)
    return [item["id"] for item in items if item.get("selected")]


def get_active_panels(active_filter_ids: Iterable[str]) -> set[str]:
    """Panels that have at least one checked filter."""
    return {panel_of_id(filter_id) for filter_id in active_filter_ids}


def has_tag(pattern: re.Pattern[str] | Any, tags: Sequence[Mapping[str, Any]] | None = None) -> bool:
    """
    Does any tag id match a compiled regular expression?

    Returns False when there are no tags or ``pattern`` is not a compiled
    pattern.
    """
    if not tags or not isinstance(pattern, re.Pattern):
        return False
    return any((tag or {}).get("id") and pattern.search(tag["id"]) for tag in tags)


def _coerce_mode(filter_mode: FilterMode | str) -> FilterMode:
    try:
        return FilterMode(filter_mode)
    except ValueError:
        logger.warning("invalid_filter_mode", extra={"filter_mode": filter_mode})
        raise InvalidFilterModeError(filter_mode) from None


def _matches_all_panels(
    card_tags: Sequence[Mapping[str, Any]],
    tag_ids: set[str],
    active_filters: set[str],
    active_panels: set[str],
) -> bool:
    """OR mode across several panels."""
    tag_panels = {derive_panel(tag) for tag in card_tags}
    if not is_superset(tag_panels, active_panels):
        return False

    for panel in active_panels:
        checked_in_panel = {fid for fid in active_filters if fid.startswith(panel)}
        if not intersection(tag_ids, checked_in_panel):
            return False
    return True


def filter_cards(
    cards: list[Card],
    active_filter_ids: Iterable[str],
    active_panels: Iterable[str],
    filter_mode: FilterMode | str,
) -> list[Card]:
    """
    Return the cards matching the checked filters.

    Args:
        cards: Cards to filter
        active_filter_ids: Checked filter ids
        active_panels: Panels with at least one checked filter
        filter_mode: One of FilterMode (or its string value)

    Returns:
        Matching cards in input order. ``cards`` itself when nothing is checked.

    Raises:
        InvalidFilterModeError: If filters are checked and the mode is unknown
    """
    active_filters = set(active_filter_ids)
    if not active_filters:
        return cards

    mode = _coerce_mode(filter_mode)
    panels = set(active_panels)
    cross_panel = mode is FilterMode.OR and len(panels) >= 2

    result: list[Card] = []
    for card in cards:
        card_tags = card.get("tags")
        if card_tags is None:
            continue

        tag_ids = {tag.get("id") for tag in card_tags}

        if mode in (FilterMode.AND, FilterMode.XOR):
            matched = is_superset(tag_ids, active_filters)
        elif not cross_panel:
            matched = bool(intersection(tag_ids, active_filters))
        else:
            matched = _matches_all_panels(card_tags, tag_ids, active_filters, panels)

        if matched:
            result.append(card)

    logger.debug(
        "cards_filtered",
        extra={
            "filter_mode": mode.value,
            "active_filters": len(active_filters),
            "active_panels": len(panels),
            "before": len(cards),
            "after": len(result),
        },
    )

    return result
