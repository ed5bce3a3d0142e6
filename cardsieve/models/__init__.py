from cardsieve.models.card import Card, Tag, TagParent
from cardsieve.models.collection import (
    CollectionQuery,
    CollectionResult,
    FilterMode,
    QueryMetrics,
    SortOption,
)
from cardsieve.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    FailureDetail,
    FailureKind,
    InvalidFilterModeError,
    InvalidSortOptionError,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)

__all__ = [
    "ApiResponse",
    "Card",
    "CollectionQuery",
    "CollectionResult",
    "FailureDetail",
    "FailureKind",
    "FilterMode",
    "InvalidFilterModeError",
    "InvalidSortOptionError",
    "KnownError",
    "OutcomeType",
    "QueryMetrics",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SortOption",
    "Tag",
    "TagParent",
    "create_known_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
]
