"""
Failure classification.

Every user-visible failure is raised as a KnownError subclass carrying a
classification, a user-facing message and an HTTP status. The API layer
turns these into FailureDetail bodies; messages are shown verbatim.

Validation errors are raised before any write. Not-found errors are raised
after a failed lookup and are recoverable by retrying the user action.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Auth collaborator did not identify the caller
    UNAUTHENTICATED = "unauthenticated"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"


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

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail response body."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class ValidationError(KnownError):
    """Input rejected before any write was attempted."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            status_code=400,
        )


class NotFoundError(KnownError):
    """A lookup by key or friend ID found nothing."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=message,
            detail=detail,
            suggestion="Check the value and try again.",
            status_code=404,
        )


class FriendIdExhaustedError(KnownError):
    """Every generated friend ID collided with an existing one."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="Could not generate unique Friend ID",
            detail=f"{attempts} consecutive collisions",
            suggestion="Try again.",
            status_code=503,
        )
