"""Domain error codes for the events module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_SLUG = "INVALID_SLUG"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    EVENT_REFERENCE = "EVENT_REFERENCE"
    IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised when an input field is missing or malformed.

    ``field`` names the offending field as the API spells it.
    """

    def __init__(self, message: str, field: str = "") -> None:
        super().__init__(code=ErrorCode.VALIDATION_ERROR, message=message)
        self.field = field


class InvalidSlugError(ValidationError):
    """Raised when a slug from a URL is missing, badly encoded or malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, field="slug")
        object.__setattr__(self, "code", ErrorCode.INVALID_SLUG)


class EventNotFoundError(DomainError):
    """Raised when no event matches a slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message="Event not found",
        )
        self.slug = slug


class EventReferenceError(DomainError):
    """Raised when a booking references an event that does not exist."""

    def __init__(self, event_id: str) -> None:
        super().__init__(
            code=ErrorCode.EVENT_REFERENCE,
            message=f"Event with ID {event_id} does not exist",
        )
        self.event_id = event_id


class ImageUploadError(DomainError):
    """Raised when the object store rejects an image upload."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.IMAGE_UPLOAD_FAILED, message=message)


class PersistenceError(DomainError):
    """Raised when the underlying storage fails, duplicate-key races included."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.PERSISTENCE_ERROR, message=message)
