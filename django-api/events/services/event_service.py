"""Event service - all business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Slug and date/time handling follow explicit before/after comparison: a slug
is derived only when the title changed (or no slug exists yet), and date and
time are normalized only when their submitted value differs from the stored one.
"""

import logging
from collections.abc import Mapping

from django.core.files import File

from events.domain import Event, EventId, EventSummary, Slug
from events.domain.errors import EventNotFoundError, ImageUploadError
from events.domain.normalizers import EVENT_FIELDS, clean_event_fields, normalize_date, normalize_time
from events.domain.slugs import base_slug_for, resolve_unique_slug
from events.stores.interfaces import EventStore, ImageStore

logger = logging.getLogger(__name__)


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, images: ImageStore | None = None) -> None:
        self._store = store
        self._images = images

    def list_events(self) -> list[Event]:
        """Return all events, newest first."""
        return self._store.list_events()

    def get_event(self, slug: str) -> Event:
        """Return an event by slug.

        Raises:
            InvalidSlugError: If the slug is missing or malformed.
            EventNotFoundError: If the event does not exist.
        """
        value = Slug.from_string(slug).value
        event = self._store.get_event_by_slug(value)
        if event is None:
            raise EventNotFoundError(value)
        return event

    def get_similar_events(self, slug: str) -> list[EventSummary]:
        """Return events sharing at least one tag with the event at ``slug``.

        An unknown slug yields an empty list.

        Raises:
            InvalidSlugError: If the slug is missing or malformed.
        """
        event = self._store.get_event_by_slug(Slug.from_string(slug).value)
        if event is None:
            return []
        return self._store.list_similar_events(event)

    def create_event(self, fields: Mapping, image: File | None = None) -> Event:
        """Validate, normalize and store a new event.

        When ``image`` is given it is uploaded after every field has been
        validated, and its URL replaces any ``image`` field.

        Raises:
            ValidationError: Naming the first missing or malformed field.
            ImageUploadError: If the image store rejects the upload.
            PersistenceError: If the store fails.
        """
        required = EVENT_FIELDS if image is None else tuple(f for f in EVENT_FIELDS if f != "image")
        values = self._prepare(clean_event_fields(fields, required=required))
        if image is not None:
            if self._images is None:
                raise ImageUploadError("Image uploads are not configured")
            values["image"] = self._images.upload(image)
        event = self._store.create_event(values)
        logger.info(f"Created event {event.slug} ({event.id})")
        return event

    def update_event(self, slug: str, changes: Mapping) -> Event:
        """Apply ``changes`` to the event at ``slug``.

        Unchanged title, date and time are kept as stored.

        Raises:
            InvalidSlugError: If the slug is missing or malformed.
            EventNotFoundError: If the event does not exist.
            ValidationError: Naming the first missing or malformed field.
        """
        current = self.get_event(slug)
        before = current.fields()
        merged = {**before, **{k: v for k, v in changes.items() if k in EVENT_FIELDS}}
        values = self._prepare(clean_event_fields(merged), before=before, event_id=current.id)
        event = self._store.update_event(current.id, values)
        logger.info(f"Updated event {event.slug} ({event.id})")
        return event

    def _prepare(self, values: dict, before: Mapping | None = None, event_id: EventId | None = None) -> dict:
        before = before or {}
        retitled = not before.get("slug") or values["title"] != before.get("title")
        base = base_slug_for(values["title"]) if retitled else None
        if values["date"] != before.get("date"):
            values["date"] = normalize_date(values["date"])
        if values["time"] != before.get("time"):
            values["time"] = normalize_time(values["time"])
        if retitled:
            values["slug"] = resolve_unique_slug(
                base,
                lambda candidate: self._store.slug_exists(candidate, exclude=event_id),
            )
        else:
            values["slug"] = before["slug"]
        return values
