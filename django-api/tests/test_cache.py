"""Tests for response caching and signal-based invalidation.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from events import models
from events.cache import EVENT_LIST_KEY, event_detail_key, invalidate_event
from tests.factories import EventFactory


@pytest.mark.django_db(transaction=True)
class TestEventCache:
    """Tests for list and detail response caching.

    Writes run in autocommit here, so on-commit invalidation fires at once.
    """

    def test_list_response_is_cached(self, api_client: APIClient):
        row = EventFactory(title="Tech Meetup")
        api_client.get("/api/events")

        # Queryset updates bypass signals, so the cached payload is served.
        models.Event.objects.filter(pk=row.pk).update(title="Renamed")

        response = api_client.get("/api/events")
        assert response.json()["events"][0]["title"] == "Tech Meetup"

    def test_detail_response_is_cached(self, api_client: APIClient):
        row = EventFactory(title="Tech Meetup")
        api_client.get("/api/events/tech-meetup")

        models.Event.objects.filter(pk=row.pk).update(venue="Elsewhere")

        assert cache.get(event_detail_key("tech-meetup"))["venue"] == row.venue
        assert api_client.get("/api/events/tech-meetup").json()["event"]["venue"] == row.venue

    def test_new_event_invalidates_list(self, api_client: APIClient):
        api_client.get("/api/events")
        assert cache.get(EVENT_LIST_KEY) == []

        EventFactory()

        assert cache.get(EVENT_LIST_KEY) is None
        assert len(api_client.get("/api/events").json()["events"]) == 1

    def test_saving_event_invalidates_detail(self, api_client: APIClient):
        row = EventFactory(title="Tech Meetup")
        api_client.get("/api/events/tech-meetup")

        row.venue = "Pier 48"
        row.save()

        assert api_client.get("/api/events/tech-meetup").json()["event"]["venue"] == "Pier 48"

    def test_tag_change_invalidates_detail(self, api_client: APIClient):
        row = EventFactory(title="Tech Meetup", tags=["tech"])
        api_client.get("/api/events/tech-meetup")

        models.Tag.objects.create(event=row, name="python", position=1)

        assert api_client.get("/api/events/tech-meetup").json()["event"]["tags"] == ["tech", "python"]

    def test_renamed_slug_drops_old_detail(self, api_client: APIClient):
        row = EventFactory(title="Tech Meetup")
        api_client.get("/api/events/tech-meetup")

        row.slug = "python-night"
        row.save()

        assert cache.get(event_detail_key("tech-meetup")) is None
        assert api_client.get("/api/events/tech-meetup").status_code == 404

    def test_deleting_event_invalidates_detail(self, api_client: APIClient):
        row = EventFactory(title="Tech Meetup")
        api_client.get("/api/events/tech-meetup")

        row.delete()

        assert api_client.get("/api/events/tech-meetup").status_code == 404


@pytest.mark.django_db
class TestInvalidationOnCommit:
    """Invalidation is deferred until the writing transaction commits."""

    def test_cache_survives_until_commit(self, api_client: APIClient, django_capture_on_commit_callbacks):
        row = EventFactory(title="Tech Meetup")
        api_client.get("/api/events")
        api_client.get("/api/events/tech-meetup")

        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            row.venue = "Pier 48"
            row.save()

        assert cache.get(EVENT_LIST_KEY) is not None
        assert cache.get(event_detail_key("tech-meetup")) is not None

        for callback in callbacks:
            callback()

        assert cache.get(EVENT_LIST_KEY) is None
        assert cache.get(event_detail_key("tech-meetup")) is None

    def test_store_write_invalidates_on_commit(self, api_client: APIClient, django_capture_on_commit_callbacks):
        api_client.get("/api/events")

        with django_capture_on_commit_callbacks(execute=True):
            EventFactory(tags=["react"])

        assert cache.get(EVENT_LIST_KEY) is None
        assert len(api_client.get("/api/events").json()["events"]) == 1


class TestInvalidateEvent:
    def test_drops_list_and_details(self):
        cache.set(EVENT_LIST_KEY, ["cached"])
        cache.set(event_detail_key("a"), {"slug": "a"})
        cache.set(event_detail_key("b"), {"slug": "b"})

        invalidate_event("a", None)

        assert cache.get(EVENT_LIST_KEY) is None
        assert cache.get(event_detail_key("a")) is None
        assert cache.get(event_detail_key("b")) == {"slug": "b"}
