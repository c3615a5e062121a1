from events.domain.models import Booking, Event, EventSummary
from events.domain.value_objects import BookingId, EventId, Slug

__all__ = [
    "Event",
    "EventSummary",
    "Booking",
    "EventId",
    "BookingId",
    "Slug",
]
