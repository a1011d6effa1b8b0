"""
Failure classification for store and lookup operations.

Every error a caller can see is a KnownError subclass. Callers map them
to their own surface:

- CLI: print the message, exit non-zero
- REST: JSON envelope with the error's status code
- Chat skill: error payload

None of them should bring down the hosting process.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Backing document failures
    PERSISTENCE_ERROR = "persistence_error"

    # Card database failures
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel):
    """Failure envelope returned by the REST exception handlers."""

    outcome: OutcomeType = Field(
        ...,
        description="Whether the failure was anticipated",
    )
    failure: FailureDetail = Field(
        ...,
        description="What went wrong",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
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

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse":
        """Create an unknown failure response (catch-all for unexpected exceptions)."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong and the cause is unknown. Please retry.",
                detail=detail,
                suggestion="If this persists, please report the issue.",
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

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class CardNotFoundError(KnownError):
    """The card database returned no match for a name."""

    def __init__(self, card_name: str):
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card not found: {card_name}",
            suggestion="Check the spelling or search with a shorter part of the name.",
            status_code=404,
        )


class NotInCollectionError(KnownError):
    """No collection entry matches the name, ignoring case."""

    def __init__(self, card_name: str):
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card not in collection: {card_name}",
            status_code=404,
        )


class NotInWishlistError(KnownError):
    """No wishlist entry matches the name, ignoring case."""

    def __init__(self, card_name: str):
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"Card not in wishlist: {card_name}",
            status_code=404,
        )


class InvalidQuantityError(KnownError):
    """A count below one was passed to add or remove."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Count must be a positive integer, got {count}",
            status_code=400,
        )


class InvalidPriorityError(KnownError):
    """A wishlist priority outside high/medium/low."""

    def __init__(self, priority: str):
        self.priority = priority
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=f"Priority must be one of high, medium, low; got {priority!r}",
            status_code=400,
        )


class PersistenceReadError(KnownError):
    """
    The backing document exists but cannot be parsed.

    JsonDocument recovers from unparsable content itself (the store reads
    as empty), so callers only see this when ``recoverable`` is False: the
    file is there but the OS would not let us read it.
    """

    def __init__(self, path: str, detail: str | None = None, recoverable: bool = True):
        self.path = path
        self.recoverable = recoverable
        super().__init__(
            kind=FailureKind.PERSISTENCE_ERROR,
            message=f"Could not read {path}",
            detail=detail,
            status_code=500,
        )


class PersistenceWriteError(KnownError):
    """Writing the backing document failed. The operation did not take effect."""

    def __init__(self, path: str, detail: str | None = None):
        self.path = path
        super().__init__(
            kind=FailureKind.PERSISTENCE_ERROR,
            message=f"Could not save {path}",
            detail=detail,
            suggestion="Check that the file is writable and the disk is not full.",
            status_code=500,
        )


class LookupUnavailableError(KnownError):
    """The card database errored, timed out, or returned something unreadable."""

    def __init__(self, detail: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="The card database is unavailable",
            detail=detail,
            suggestion="Try again in a moment.",
            status_code=503,
        )
