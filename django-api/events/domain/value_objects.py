"""Domain primitives that enforce validity at creation time."""

import re
from dataclasses import dataclass
from typing import Self
from uuid import UUID

from events.domain.errors import InvalidSlugError

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(frozen=True)
class EventId:
    """Unique identifier for an Event."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BookingId:
    """Unique identifier for a Booking."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Slug:
    """A slug taken from a URL path and checked against the slug shape.

    ``from_string`` expects text that was percent-decoded once, as Django does
    for the request path. A ``%`` still present means the slug was badly or
    doubly encoded.
    """

    value: str

    def __post_init__(self) -> None:
        if not SLUG_PATTERN.match(self.value):
            raise InvalidSlugError("Invalid slug format")

    @classmethod
    def from_string(cls, raw: str | None) -> Self:
        if not isinstance(raw, str):
            raise InvalidSlugError("Slug is required")
        value = raw.strip().lower()
        if not value:
            raise InvalidSlugError("Slug is required")
        if "%" in value:
            raise InvalidSlugError("Invalid slug encoding")
        return cls(value=value)

    def __str__(self) -> str:
        return self.value
