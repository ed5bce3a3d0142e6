"""
Collection query configuration and results.

A CollectionQuery bundles what the author configured (filter mode, sort,
search fields, sampling sizes, paging) with what the user did (checked
filters, search text, bookmarks) for a single evaluation pass.
"""

from dataclasses import dataclass, field
from enum import Enum

from cardsieve.config import settings
from cardsieve.models.card import Card


class _CaseInsensitiveEnum(str, Enum):
    """Authored values match regardless of case ("AND" == "and")."""

    @classmethod
    def _missing_(cls, value: object) -> "_CaseInsensitiveEnum | None":
        if isinstance(value, str):
            folded = value.casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        return None


class FilterMode(_CaseInsensitiveEnum):
    """How checked filters combine."""

    AND = "and"
    XOR = "xor"
    OR = "or"


class SortOption(_CaseInsensitiveEnum):
    """Authored sort orders."""

    FEATURED = "featured"
    TITLE_ASC = "titleAsc"
    TITLE_DESC = "titleDesc"
    DATE_ASC = "dateAsc"
    DATE_DESC = "dateDesc"
    MODIFIED_ASC = "modifiedAsc"
    MODIFIED_DESC = "modifiedDesc"
    RANDOM = "random"


@dataclass
class CollectionQuery:
    """
    Inputs for one collection evaluation.

    filter_mode and sort are kept as raw strings so an unrecognised authored
    value reaches the engine and is reported, rather than being coerced here.
    """

    cards: list[Card] = field(default_factory=list)
    featured_cards: list[Card] = field(default_factory=list)
    featured_ids: list[str | int] = field(default_factory=list)
    bookmarked_ids: list[str | int] = field(default_factory=list)
    show_bookmarks_only: bool = False

    active_filter_ids: list[str] = field(default_factory=list)
    active_panels: set[str] | None = None
    filter_mode: str = field(default_factory=lambda: settings.default_filter_mode)

    query: str = ""
    search_fields: list[str] = field(default_factory=lambda: list(settings.search_fields))
    highlight: bool = False

    sort: str = field(default_factory=lambda: settings.default_sort)
    collection_id: int | str = 0
    sample_size: int = field(default_factory=lambda: settings.sample_size)
    reservoir_size: int = field(default_factory=lambda: settings.reservoir_size)

    total_card_limit: int = 0
    results_per_page: int = field(default_factory=lambda: settings.results_per_page)
    current_page: int = 1
    paginator_enabled: bool = True


@dataclass
class QueryMetrics:
    """Card counts after each pipeline stage."""

    assembled: int = 0
    after_bookmarks: int = 0
    after_filter: int = 0
    after_search: int = 0
    after_sort: int = 0
    after_limit: int = 0


@dataclass
class CollectionResult:
    """Visible cards for the current page plus paging figures."""

    cards: list[Card]
    total_results: int
    total_pages: int
    num_cards_to_show: int
    show_paginator: bool
    metrics: QueryMetrics = field(default_factory=QueryMetrics)
