import random

import pytest

from cardsieve.filtering.sampling import reset_sampling_cache
from cardsieve.models import failure as failure_module
from cardsieve.services.collection_query import reset_query_metrics


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture(autouse=True)
def reset_process_state():
    """Start every test with an empty sampling cache and metrics history."""
    reset_sampling_cache()
    reset_query_metrics()
    yield
    reset_sampling_cache()
    reset_query_metrics()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible shuffles."""
    return random.Random(1234)


@pytest.fixture
def sample_cards() -> list[dict]:
    """Cards tagged across a topic panel and a product panel."""
    return [
        {
            "id": "card-1",
            "tags": [
                {"id": "caas:topic/security"},
                {"id": "caas:product/acrobat"},
            ],
            "contentArea": {
                "title": "Securing PDF workflows",
                "description": "Protect documents with Acrobat.",
            },
            "cardDate": "2021-03-01T00:00:00Z",
            "modifiedDate": "2021-05-01T00:00:00Z",
        },
        {
            "id": "card-2",
            "tags": [
                {"id": "caas:topic/design"},
                {"id": "caas:product/photoshop"},
            ],
            "contentArea": {
                "title": "Layer basics",
                "description": "Getting started with Photoshop layers.",
            },
            "cardDate": "2020-01-15T00:00:00Z",
            "modifiedDate": "2022-01-01T00:00:00Z",
        },
        {
            "id": "card-3",
            "tags": [
                {"id": "caas:topic/security"},
                {"id": "caas:topic/design"},
                {"id": "caas:product/photoshop"},
            ],
            "contentArea": {
                "title": "advanced masking",
                "description": "Secure your Photoshop assets.",
            },
            "cardDate": "2022-07-04T00:00:00Z",
            "modifiedDate": "2020-02-02T00:00:00Z",
        },
        {
            "id": "card-4",
            "contentArea": {
                "title": "Untagged announcement",
                "description": "No tags on this one.",
            },
            "cardDate": "2019-12-31T00:00:00Z",
        },
    ]
