"""Domain error codes for the events module."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    ALREADY_PUBLISHED = "already_published"
    EVENT_FULL = "event_full"
    DUPLICATE_REGISTRATION = "duplicate_registration"
    INVALID_STATUS = "invalid_status"


@dataclass(frozen=True)
class FieldIssue:
    """A single field-level validation problem."""

    field: str
    issue: str


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    details: tuple[FieldIssue, ...] = ()

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnauthorizedError(DomainError):
    """Raised when a command arrives without an actor."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.UNAUTHORIZED, message="Auth required")


class ForbiddenError(DomainError):
    """Raised when the actor lacks the role a command requires."""

    def __init__(self, role: str) -> None:
        super().__init__(
            code=ErrorCode.FORBIDDEN,
            message=f"{role.capitalize()} role required",
        )
        self.role = role


class ValidationFailedError(DomainError):
    """Raised with every field-level issue found, not just the first."""

    def __init__(self, issues: Iterable[FieldIssue], message: str = "Validation failed") -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message=message,
            details=tuple(issues),
        )

    def has_issue(self, field: str, issue: str) -> bool:
        return FieldIssue(field, issue) in self.details


class EventNotFoundError(DomainError):
    """Raised when an event is not found in the caller's tenant."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class RegistrationNotFoundError(DomainError):
    """Raised when a member has no live registration for an event."""

    def __init__(self, event_id: str, member_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message="Registration not found",
        )
        self.event_id = event_id
        self.member_id = member_id


class ConflictError(DomainError):
    """Raised for no-op updates and transitions against stale state."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFLICT, message=message)


class AlreadyPublishedError(DomainError):
    """Raised when publishing an event that is already published."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_PUBLISHED,
            message="Event already published",
        )


class InvalidStatusError(DomainError):
    """Raised when an operation is not valid for the event's lifecycle state."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_STATUS, message=message)


class EventFullError(DomainError):
    """Raised when an event has no capacity left."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EVENT_FULL, message="Event is full")


class DuplicateRegistrationError(DomainError):
    """Raised when a member is already registered for an event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_REGISTRATION,
            message="Already registered",
        )
