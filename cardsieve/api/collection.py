"""
Collection API endpoints.

Evaluates collection queries and manages the random-order sampling cache.
"""

from typing import Any

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from cardsieve.config import settings
from cardsieve.filtering.sampling import get_sampling_cache
from cardsieve.models.collection import CollectionQuery
from cardsieve.models.failure import ApiResponse, create_success
from cardsieve.services.collection_query import query_collection

router = APIRouter(prefix="/collection", tags=["collection"])


class CardModel(BaseModel):
    """A card as authored; unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    id: str | int
    tags: list[dict[str, Any]] | None = None


class CollectionQueryRequest(BaseModel):
    """Request model for evaluating a collection."""

    cards: list[CardModel] = Field(default_factory=list)
    featured_cards: list[CardModel] = Field(
        default_factory=list,
        description="Authored featured cards, placed ahead of fetched cards",
    )
    featured_ids: list[str | int] = Field(default_factory=list)
    bookmarked_ids: list[str | int] = Field(default_factory=list)
    show_bookmarks_only: bool = False

    active_filter_ids: list[str] = Field(
        default_factory=list,
        description="Checked filter ids, panel-prefixed",
        examples=[["caas:topic/security", "caas:product/photoshop"]],
    )
    active_panels: list[str] | None = Field(
        default=None,
        description="Panels with checked filters; derived from active_filter_ids when omitted",
    )
    filter_mode: str = Field(
        default_factory=lambda: settings.default_filter_mode,
        description="and, xor or or",
    )

    query: str = ""
    search_fields: list[str] = Field(default_factory=lambda: list(settings.search_fields))
    highlight: bool = False

    sort: str = Field(default_factory=lambda: settings.default_sort)
    collection_id: int | str = 0
    sample_size: int = Field(default_factory=lambda: settings.sample_size, ge=0)
    reservoir_size: int = Field(default_factory=lambda: settings.reservoir_size, ge=0)

    total_card_limit: int = Field(default=0, ge=0)
    results_per_page: int = Field(default_factory=lambda: settings.results_per_page, ge=0)
    current_page: int = Field(default=1, ge=1)
    paginator_enabled: bool = True


class CollectionQueryResponse(BaseModel):
    """Response model for an evaluated collection."""

    cards: list[dict[str, Any]]
    total_results: int
    total_pages: int
    num_cards_to_show: int
    show_paginator: bool


class CacheClearResponse(BaseModel):
    """Response model for sampling cache maintenance."""

    cleared: bool
    collection_id: int | str | None = None


def _to_query(request: CollectionQueryRequest) -> CollectionQuery:
    return CollectionQuery(
        cards=[card.model_dump(exclude_unset=True) for card in request.cards],
        featured_cards=[card.model_dump(exclude_unset=True) for card in request.featured_cards],
        featured_ids=request.featured_ids,
        bookmarked_ids=request.bookmarked_ids,
        show_bookmarks_only=request.show_bookmarks_only,
        active_filter_ids=request.active_filter_ids,
        active_panels=set(request.active_panels) if request.active_panels is not None else None,
        filter_mode=request.filter_mode,
        query=request.query,
        search_fields=request.search_fields,
        highlight=request.highlight,
        sort=request.sort,
        collection_id=request.collection_id,
        sample_size=request.sample_size,
        reservoir_size=request.reservoir_size,
        total_card_limit=request.total_card_limit,
        results_per_page=request.results_per_page,
        current_page=request.current_page,
        paginator_enabled=request.paginator_enabled,
    )


@router.post("/query", response_model=ApiResponse[CollectionQueryResponse])
async def run_collection_query(
    request: CollectionQueryRequest,
) -> ApiResponse[CollectionQueryResponse]:
    """
    Filter, search, sort and paginate a card collection.

    Random sort uses the process-wide sampling cache, so repeated queries for
    the same collection_id return the same order. Unknown filter modes or
    sort options return 400 with a known_failure envelope.
    """
    result = query_collection(_to_query(request), cache=get_sampling_cache())

    return create_success(
        CollectionQueryResponse(
            cards=result.cards,
            total_results=result.total_results,
            total_pages=result.total_pages,
            num_cards_to_show=result.num_cards_to_show,
            show_paginator=result.show_paginator,
        )
    )


@router.delete(
    "/sampling-cache",
    response_model=CacheClearResponse,
    status_code=status.HTTP_200_OK,
)
async def clear_sampling_cache() -> CacheClearResponse:
    """Drop every cached random order; the next random query reshuffles."""
    get_sampling_cache().clear()
    return CacheClearResponse(cleared=True)


@router.delete("/sampling-cache/{collection_id}", response_model=CacheClearResponse)
async def invalidate_sampling_cache(collection_id: str) -> CacheClearResponse:
    """
    Drop one collection's cached random order.

    Numeric path ids also match collections queried with an integer id.
    """
    cache = get_sampling_cache()
    cleared = cache.invalidate(collection_id)
    if collection_id.isdigit():
        cleared = cache.invalidate(int(collection_id)) or cleared
    return CacheClearResponse(cleared=cleared, collection_id=collection_id)
