"""
Failure Envelope: Response Classification for Collection Queries.

Collection query responses and every error leaving the HTTP layer are wrapped
in an ApiResponse so the rendering layer can tell a rendered result from an
authoring mistake.

Response types:
- Success: Query evaluated, data holds the visible cards
- KnownFailure: Query could not be evaluated and the reason is known
  (e.g. an unrecognised filter mode in the authored configuration)
- UnknownFailure: Anything else

All responses MUST pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="Explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested fix for the collection author",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope for all API endpoints.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class InvalidFilterModeError(KnownError):
    """
    Raised when a collection is configured with an unrecognised filter mode.

    This is an authoring error: the caller gets it as-is, there is no
    fallback mode.
    """

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Unrecognized filter type: {mode}",
            detail=f"filter_mode={mode!r}",
            suggestion="Use one of: and, xor, or.",
        )


class InvalidSortOptionError(KnownError):
    """Raised when a collection is configured with an unrecognised sort option."""

    def __init__(self, option: object):
        self.option = option
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Unrecognized sort option: {option}",
            detail=f"sort={option!r}",
            suggestion=(
                "Use one of: featured, titleAsc, titleDesc, dateAsc, dateDesc, "
                "modifiedAsc, modifiedDesc, random."
            ),
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "The collection query failed due to a known issue.",
    OutcomeType.UNKNOWN_FAILURE: "The collection query failed for an unknown reason.",
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the error details and adjust the collection configuration.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}

# Ids of responses that passed through finalize_response()
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return id(response) in _finalized_responses


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    """
    Create a finalized known failure response from a KnownError.

    The error's own message is kept; detail and suggestion fall back to the
    standard wording when the error leaves them empty.
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.KNOWN_FAILURE,
        failure=FailureDetail(
            kind=error.kind,
            message=error.message or STANDARD_MESSAGES[OutcomeType.KNOWN_FAILURE],
            detail=error.detail,
            suggestion=error.suggestion or STANDARD_SUGGESTIONS[OutcomeType.KNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_unknown_failure(exception: Exception) -> ApiResponse[Any]:
    """Create a finalized unknown failure response from an exception."""
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=type(exception).__name__,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
