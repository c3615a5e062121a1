from django.urls import path, re_path

from events.handlers import (
    BookingCreateView,
    EventDetailView,
    EventListView,
    HealthView,
    SimilarEventListView,
)

# The detail route takes any remaining path so malformed slugs (including
# ones containing "/") reach the view and get a 400 instead of a 404.
urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:slug>/similar", SimilarEventListView.as_view(), name="event-similar"),
    re_path(r"^events/(?P<slug>.*)$", EventDetailView.as_view(), name="event-detail"),
    path("bookings", BookingCreateView.as_view(), name="booking-create"),
    path("health", HealthView.as_view(), name="health"),
]
