"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from django.core.files import File

from events.domain import Booking, BookingId, Event, EventId, EventSummary


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self) -> list[Event]:
        """Return all events ordered by created_at descending."""
        ...

    @abstractmethod
    def get_event_by_slug(self, slug: str) -> Event | None:
        """Return the event with exactly this slug, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...

    @abstractmethod
    def slug_exists(self, slug: str, exclude: EventId | None = None) -> bool:
        """Check if any event other than ``exclude`` already uses ``slug``."""
        ...

    @abstractmethod
    def list_similar_events(self, event: Event) -> list[EventSummary]:
        """Return other events sharing a tag with ``event``, newest first.

        Events without an image or slug are left out.
        """
        ...

    @abstractmethod
    def create_event(self, fields: dict) -> Event:
        """Persist a new event from already validated and normalized fields."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, fields: dict) -> Event:
        """Overwrite an event's fields with already validated values."""
        ...


class BookingStore(ABC):
    """Interface for booking persistence operations."""

    @abstractmethod
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        ...

    @abstractmethod
    def create_booking(self, event_id: EventId, email: str) -> Booking:
        ...

    @abstractmethod
    def update_booking(self, booking_id: BookingId, fields: dict) -> Booking:
        ...

    @abstractmethod
    def count_for_event(self, event_id: EventId) -> int:
        ...


class ImageStore(ABC):
    """Interface for the object storage that hosts event images."""

    @abstractmethod
    def upload(self, image: File) -> str:
        """Store ``image`` and return a durable public URL for it.

        Raises:
            ImageUploadError: If the storage backend rejects the upload.
        """
        ...
