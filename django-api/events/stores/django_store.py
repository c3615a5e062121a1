"""Django ORM implementation of the event and booking stores."""

import logging
from functools import wraps

from django.db import DatabaseError, transaction

from events import models
from events.domain import Booking, BookingId, Event, EventId, EventSummary
from events.domain.errors import PersistenceError
from events.stores.interfaces import BookingStore, EventStore

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = ("title", "image", "slug", "location", "date", "time")


def translate_db_errors(method):
    """Re-raise database failures as PersistenceError, keeping the driver message."""

    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            logger.error(f"Database error in {method.__qualname__}: {exc}")
            raise PersistenceError(str(exc)) from exc

    return wrapper


class DjangoEventStore(EventStore):
    """Event store backed by the Django ORM."""

    def _events(self):
        return models.Event.objects.prefetch_related("tags")

    @translate_db_errors
    def list_events(self) -> list[Event]:
        return [_to_event(row) for row in self._events().order_by("-created_at")]

    @translate_db_errors
    def get_event_by_slug(self, slug: str) -> Event | None:
        row = self._events().filter(slug=slug).first()
        return _to_event(row) if row is not None else None

    @translate_db_errors
    def event_exists(self, event_id: EventId) -> bool:
        return models.Event.objects.filter(pk=event_id.value).exists()

    @translate_db_errors
    def slug_exists(self, slug: str, exclude: EventId | None = None) -> bool:
        rows = models.Event.objects.filter(slug=slug)
        if exclude is not None:
            rows = rows.exclude(pk=exclude.value)
        return rows.exists()

    @translate_db_errors
    def list_similar_events(self, event: Event) -> list[EventSummary]:
        tagged = models.Tag.objects.filter(name__in=event.tags).values("event_id")
        rows = (
            models.Event.objects.filter(pk__in=tagged)
            .exclude(pk=event.id.value)
            .exclude(image="")
            .exclude(slug="")
            .order_by("-created_at")
            .only(*SUMMARY_FIELDS)
        )
        return [
            EventSummary(**{name: getattr(row, name) for name in SUMMARY_FIELDS})
            for row in rows
        ]

    @translate_db_errors
    def create_event(self, fields: dict) -> Event:
        values = dict(fields)
        tags = values.pop("tags")
        with transaction.atomic():
            row = models.Event.objects.create(**values)
            _replace_tags(row, tags)
        return _to_event(row, tags=tags)

    @translate_db_errors
    def update_event(self, event_id: EventId, fields: dict) -> Event:
        values = dict(fields)
        tags = values.pop("tags", None)
        with transaction.atomic():
            row = models.Event.objects.select_for_update().filter(pk=event_id.value).first()
            if row is None:
                raise PersistenceError(f"Event {event_id} no longer exists")
            for name, value in values.items():
                setattr(row, name, value)
            row.save()
            if tags is not None:
                row.tags.all().delete()
                _replace_tags(row, tags)
        return _to_event(row, tags=tags)


class DjangoBookingStore(BookingStore):
    """Booking store backed by the Django ORM."""

    @translate_db_errors
    def get_booking(self, booking_id: BookingId) -> Booking | None:
        row = models.Booking.objects.filter(pk=booking_id.value).first()
        return _to_booking(row) if row is not None else None

    @translate_db_errors
    def create_booking(self, event_id: EventId, email: str) -> Booking:
        row = models.Booking.objects.create(event_id=event_id.value, email=email)
        return _to_booking(row)

    @translate_db_errors
    def update_booking(self, booking_id: BookingId, fields: dict) -> Booking:
        row = models.Booking.objects.filter(pk=booking_id.value).first()
        if row is None:
            raise PersistenceError(f"Booking {booking_id} no longer exists")
        if "event_id" in fields:
            row.event_id = fields["event_id"].value
        if "email" in fields:
            row.email = fields["email"]
        row.save()
        return _to_booking(row)

    @translate_db_errors
    def count_for_event(self, event_id: EventId) -> int:
        return models.Booking.objects.filter(event_id=event_id.value).count()


def _replace_tags(row: models.Event, tags: list[str]) -> None:
    models.Tag.objects.bulk_create(
        models.Tag(event=row, name=name, position=position)
        for position, name in enumerate(tags)
    )


def _to_event(row: models.Event, tags: list[str] | None = None) -> Event:
    if tags is None:
        tags = [tag.name for tag in row.tags.all()]
    return Event(
        id=EventId(row.id),
        title=row.title,
        slug=row.slug,
        description=row.description,
        overview=row.overview,
        image=row.image,
        venue=row.venue,
        location=row.location,
        date=row.date,
        time=row.time,
        mode=row.mode,
        audience=row.audience,
        agenda=tuple(row.agenda),
        organizer=row.organizer,
        tags=tuple(tags),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_booking(row: models.Booking) -> Booking:
    return Booking(
        id=BookingId(row.id),
        event_id=EventId(row.event_id),
        email=row.email,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
