from events.handlers.views import (
    BookingCreateView,
    EventDetailView,
    EventListView,
    HealthView,
    SimilarEventListView,
)

__all__ = [
    "EventListView",
    "EventDetailView",
    "SimilarEventListView",
    "BookingCreateView",
    "HealthView",
]
