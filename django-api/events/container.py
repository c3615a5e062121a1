"""Wiring of services to their concrete stores."""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from events.services.booking_service import BookingService
from events.services.event_service import EventService
from events.stores.django_store import DjangoBookingStore, DjangoEventStore
from events.stores.image_store import DjangoStorageImageStore, S3ImageStore
from events.stores.interfaces import ImageStore

IMAGE_STORES = {
    "s3": S3ImageStore,
    "local": DjangoStorageImageStore,
}


def get_image_store() -> ImageStore:
    """Build the image store named by the IMAGE_STORE setting."""
    provider = settings.IMAGE_STORE
    if provider not in IMAGE_STORES:
        supported = ", ".join(IMAGE_STORES)
        raise ImproperlyConfigured(f"Unsupported IMAGE_STORE {provider!r}. Supported: {supported}")
    return IMAGE_STORES[provider]()


def get_event_service() -> EventService:
    return EventService(DjangoEventStore(), get_image_store())


def get_booking_service() -> BookingService:
    return BookingService(DjangoBookingStore(), DjangoEventStore())
