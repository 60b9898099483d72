"""Domain error codes for the eventhub module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    INVALID_USER_ID = "INVALID_USER_ID"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    INVALID_EVENT = "INVALID_EVENT"
    INVALID_PROFILE = "INVALID_PROFILE"
    INVALID_ACCOUNT = "INVALID_ACCOUNT"
    EVENT_FULL = "EVENT_FULL"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    ACCOUNT_EXISTS = "ACCOUNT_EXISTS"
    BACKEND_UNAVAILABLE = "BACKEND_UNAVAILABLE"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class NotAuthenticatedError(DomainError):
    """Raised when an operation needs a session and there is none."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_AUTHENTICATED,
            message="Not authenticated",
        )


class InvalidCredentialsError(DomainError):
    """Raised when an email and password pair does not authenticate."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid email or password",
        )


class PermissionDeniedError(DomainError):
    """Raised when a user writes a row they do not own."""

    def __init__(self, message: str = "Not allowed to modify this resource") -> None:
        super().__init__(code=ErrorCode.PERMISSION_DENIED, message=message)


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.event_id = event_id


class ProfileNotFoundError(DomainError):
    """Raised when a profile is not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
        )
        self.user_id = user_id


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class InvalidUserIdError(DomainError):
    """Raised when a user ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_USER_ID,
            message="Invalid user ID format",
        )


class InvalidPaginationError(DomainError):
    """Raised when limit or offset fall outside the accepted window."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PAGINATION, message=message)


class InvalidEventError(DomainError):
    """Raised when an event draft breaks a creation rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT, message=message)


class InvalidProfileError(DomainError):
    """Raised when a profile update breaks a profile rule."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PROFILE, message=message)


class InvalidAccountError(DomainError):
    """Raised when sign-up data is rejected, e.g. a weak password."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ACCOUNT, message=message)


class ConstraintViolationError(DomainError):
    """A backend constraint rejected the write; the message is its reason."""


class EventFullError(ConstraintViolationError):
    """Raised when an event has no spots left."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_FULL,
            message="Event is full",
        )
        self.event_id = event_id


class AlreadyRegisteredError(ConstraintViolationError):
    """Raised when a (event, user) registration already exists."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message="Already registered for this event",
        )
        self.event_id = event_id


class AccountExistsError(ConstraintViolationError):
    """Raised when an email is already registered."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ACCOUNT_EXISTS,
            message="Email already registered",
        )


class BackendUnavailableError(DomainError):
    """Raised when the backend cannot serve a request."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.BACKEND_UNAVAILABLE,
            message="Backend unavailable, try again later",
        )
