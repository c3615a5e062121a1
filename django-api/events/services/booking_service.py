"""Booking service: bookings reference events by lookup, not by constraint."""

import logging

from events.domain import Booking, BookingId, EventId
from events.domain.errors import EventReferenceError, PersistenceError, ValidationError
from events.domain.normalizers import normalize_email
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)


def parse_event_id(value) -> EventId:
    if isinstance(value, EventId):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Event ID is required", field="eventId")
    try:
        return EventId.from_string(value.strip())
    except ValueError:
        raise ValidationError("Invalid event ID format", field="eventId") from None


class BookingService:
    """Service for creating bookings against existing events."""

    def __init__(self, bookings: BookingStore, events: EventStore) -> None:
        self._bookings = bookings
        self._events = events

    def create_booking(self, event_id: str | EventId, email: str) -> Booking:
        """Record a booking for an existing event.

        Raises:
            ValidationError: If the email or event ID is malformed.
            EventReferenceError: If no event has this ID. Nothing is written.
        """
        address = normalize_email(email)
        reference = parse_event_id(event_id)
        if not self._events.event_exists(reference):
            raise EventReferenceError(str(reference))
        booking = self._bookings.create_booking(reference, address)
        logger.info(f"Created booking {booking.id} for event {reference}")
        return booking

    def update_booking(
        self,
        booking_id: BookingId,
        event_id: str | EventId | None = None,
        email: str | None = None,
    ) -> Booking:
        """Change a booking's event or email.

        The event reference is only checked when it is part of the change.
        """
        current = self._bookings.get_booking(booking_id)
        if current is None:
            raise PersistenceError(f"Booking {booking_id} does not exist")
        changes = {}
        if email is not None:
            changes["email"] = normalize_email(email)
        if event_id is not None:
            reference = parse_event_id(event_id)
            if reference != current.event_id:
                if not self._events.event_exists(reference):
                    raise EventReferenceError(str(reference))
                changes["event_id"] = reference
        if not changes:
            return current
        return self._bookings.update_booking(booking_id, changes)

    def count_bookings(self, event_id: str | EventId) -> int:
        return self._bookings.count_for_event(parse_event_id(event_id))
