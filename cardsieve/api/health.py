"""
Health check endpoint.

The service holds no external connections, so liveness is the only probe.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from cardsieve.filtering.sampling import get_sampling_cache

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    cached_collections: int = 0


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running, with the number of
    collections holding a cached random order.
    """
    return HealthResponse(status="healthy", cached_collections=len(get_sampling_cache()))
