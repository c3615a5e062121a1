"""Integration tests for the event catalog and booking API.

Run with: pytest tests/test_event_catalog.py -v
"""

import json
from datetime import datetime, timezone
from unittest.mock import Mock
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from events import models
from events.domain.errors import ImageUploadError, PersistenceError
from tests.factories import EventFactory


def event_form(image, **overrides):
    form = {
        "title": "React Summit 2025",
        "description": "The biggest React conference.",
        "overview": "Two days of React talks.",
        "venue": "Moscone Center",
        "location": "San Francisco, CA",
        "date": "2025-11-20T10:00:00Z",
        "time": "9:30",
        "mode": "hybrid",
        "audience": "Frontend developers",
        "agenda": json.dumps(["Registration", "Keynote"]),
        "organizer": "React Community",
        "tags": json.dumps(["react", "javascript", "react"]),
        "image": image,
    }
    form.update(overrides)
    return form


@pytest.mark.django_db
class TestEventList:
    """Tests for GET /api/events"""

    def test_list_events_newest_first(self, api_client: APIClient):
        first = EventFactory()
        second = EventFactory()
        models.Event.objects.filter(pk=first.pk).update(created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))
        models.Event.objects.filter(pk=second.pk).update(created_at=datetime(2025, 2, 1, tzinfo=timezone.utc))

        response = api_client.get("/api/events")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Events fetched successfully"
        assert [event["slug"] for event in body["events"]] == [second.slug, first.slug]
        assert body["events"][0]["tags"] == ["tech"]

    def test_list_events_empty_catalog(self, api_client: APIClient):
        response = api_client.get("/api/events")
        assert response.status_code == 200
        assert response.json() == {"message": "Events fetched successfully", "events": []}

    def test_list_events_store_failure(self, api_client: APIClient, monkeypatch):
        service = Mock()
        service.list_events.side_effect = PersistenceError("connection refused")
        monkeypatch.setattr("events.handlers.views.get_event_service", lambda: service)

        response = api_client.get("/api/events")

        assert response.status_code == 500
        assert response.json() == {"message": "Events fetching failed", "error": "connection refused"}


@pytest.mark.django_db
class TestEventCreate:
    """Tests for POST /api/events"""

    def test_create_event(self, api_client: APIClient, image_file):
        response = api_client.post("/api/events", event_form(image_file), format="multipart")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Event created successfully"
        event = body["event"]
        assert event["slug"] == "react-summit-2025"
        assert event["date"] == "2025-11-20"
        assert event["time"] == "09:30"
        assert event["tags"] == ["react", "javascript"]
        assert event["agenda"] == ["Registration", "Keynote"]
        assert event["image"].startswith("http://localhost:8000/media/DevEvent/")
        assert event["image"].endswith(".png")
        assert {"id", "createdAt", "updatedAt"} <= event.keys()

    def test_same_title_gets_suffixed_slug(self, api_client: APIClient, image_file):
        EventFactory(title="React Summit 2025")

        response = api_client.post("/api/events", event_form(image_file), format="multipart")

        assert response.status_code == 201
        assert response.json()["event"]["slug"] == "react-summit-2025-1"

    def test_missing_image(self, api_client: APIClient):
        form = event_form(None)
        del form["image"]

        response = api_client.post("/api/events", form, format="multipart")

        assert response.status_code == 400
        assert response.json() == {"message": "Image is required"}

    def test_missing_field_is_named(self, api_client: APIClient, image_file):
        form = event_form(image_file)
        del form["venue"]

        response = api_client.post("/api/events", form, format="multipart")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Event creation failed",
            "error": "Venue is required",
            "field": "venue",
        }
        assert not models.Event.objects.exists()

    def test_invalid_time(self, api_client: APIClient, image_file):
        response = api_client.post("/api/events", event_form(image_file, time="9:5"), format="multipart")
        assert response.status_code == 500
        assert response.json()["message"] == "Event creation failed"
        assert response.json()["field"] == "time"
        assert not models.Event.objects.exists()

    def test_malformed_tags_json(self, api_client: APIClient, image_file):
        response = api_client.post("/api/events", event_form(image_file, tags="react"), format="multipart")
        assert response.status_code == 500
        assert response.json()["message"] == "Event creation failed"
        assert response.json()["field"] == "tags"

    def test_empty_agenda(self, api_client: APIClient, image_file):
        response = api_client.post(
            "/api/events", event_form(image_file, agenda=json.dumps([])), format="multipart"
        )
        assert response.status_code == 500
        assert response.json()["error"] == "Agenda must contain at least one non-empty item"

    def test_upload_failure(self, api_client: APIClient, image_file, monkeypatch):
        images = Mock()
        images.upload.side_effect = ImageUploadError("Image upload failed: AccessDenied")
        monkeypatch.setattr("events.container.get_image_store", lambda: images)

        response = api_client.post("/api/events", event_form(image_file), format="multipart")

        assert response.status_code == 500
        assert response.json() == {
            "message": "Event creation failed",
            "error": "Image upload failed: AccessDenied",
        }
        assert not models.Event.objects.exists()


@pytest.mark.django_db
class TestEventDetail:
    """Tests for GET /api/events/{slug}"""

    def test_get_event_returns_details(self, api_client: APIClient):
        row = EventFactory(title="Tech Meetup", tags=["tech", "python"])

        response = api_client.get("/api/events/tech-meetup")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Event fetched successfully"
        assert body["event"]["id"] == str(row.pk)
        assert body["event"]["tags"] == ["tech", "python"]

    def test_slug_is_case_insensitive(self, api_client: APIClient):
        EventFactory(title="Tech Meetup")
        assert api_client.get("/api/events/Tech-Meetup").status_code == 200

    def test_get_event_not_found(self, api_client: APIClient):
        response = api_client.get("/api/events/missing-event")
        assert response.status_code == 404
        assert response.json() == {"message": "Event not found"}

    @pytest.mark.parametrize("path", ["/api/events/../etc", "/api/events/tech_meetup", "/api/events/a/b/c"])
    def test_malformed_slug_never_reaches_store(self, api_client: APIClient, monkeypatch, path):
        service = Mock()
        monkeypatch.setattr("events.handlers.views.get_event_service", lambda: service)

        response = api_client.get(path)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid slug format"}
        service.get_event.assert_not_called()

    def test_path_is_decoded_once(self, api_client: APIClient):
        EventFactory(title="Tech Meetup")
        assert api_client.get("/api/events/tech%2Dmeetup").status_code == 200

    @pytest.mark.parametrize("path", ["/api/events/%2561", "/api/events/%ff"])
    def test_double_or_broken_encoding(self, api_client: APIClient, path):
        response = api_client.get(path)
        assert response.status_code == 400
        assert response.json() == {"message": "Invalid slug encoding"}

    def test_store_failure(self, api_client: APIClient, monkeypatch):
        service = Mock()
        service.get_event.side_effect = PersistenceError("timeout")
        monkeypatch.setattr("events.handlers.views.get_event_service", lambda: service)

        response = api_client.get("/api/events/tech-meetup")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch event", "error": "timeout"}


@pytest.mark.django_db
class TestSimilarEvents:
    """Tests for GET /api/events/{slug}/similar"""

    def test_similar_events(self, api_client: APIClient):
        EventFactory(title="Tech Meetup", tags=["react"])
        related = EventFactory(tags=["react", "js"])
        EventFactory(tags=["go"])

        response = api_client.get("/api/events/tech-meetup/similar")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Similar events fetched successfully"
        assert body["events"] == [
            {
                "title": related.title,
                "image": related.image,
                "slug": related.slug,
                "location": related.location,
                "date": related.date,
                "time": related.time,
            }
        ]

    def test_unknown_slug_has_no_similar_events(self, api_client: APIClient):
        response = api_client.get("/api/events/missing/similar")
        assert response.status_code == 200
        assert response.json()["events"] == []


@pytest.mark.django_db
class TestBookingCreate:
    """Tests for POST /api/bookings"""

    def test_create_booking(self, api_client: APIClient):
        row = EventFactory()

        response = api_client.post(
            "/api/bookings", {"eventId": str(row.pk), "email": "Jane@Example.com"}, format="json"
        )

        assert response.status_code == 201
        booking = response.json()["booking"]
        assert booking["eventId"] == str(row.pk)
        assert booking["email"] == "jane@example.com"
        assert models.Booking.objects.filter(event=row).count() == 1

    def test_unknown_event(self, api_client: APIClient):
        missing = str(uuid4())

        response = api_client.post(
            "/api/bookings", {"eventId": missing, "email": "jane@example.com"}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {
            "message": "Invalid booking data",
            "error": f"Event with ID {missing} does not exist",
            "field": "eventId",
        }
        assert not models.Booking.objects.exists()

    def test_invalid_email(self, api_client: APIClient):
        row = EventFactory()
        response = api_client.post("/api/bookings", {"eventId": str(row.pk), "email": "jane@"}, format="json")
        assert response.status_code == 400
        assert response.json()["field"] == "email"

    def test_malformed_event_id(self, api_client: APIClient):
        response = api_client.post("/api/bookings", {"eventId": "42", "email": "jane@example.com"}, format="json")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid event ID format"

    def test_malformed_json_body(self, api_client: APIClient):
        response = api_client.generic("POST", "/api/bookings", "{not json", content_type="application/json")
        assert response.status_code == 400
        assert response.json()["error"] == "parse_error"


@pytest.mark.django_db
class TestHealth:
    """Tests for GET /api/health"""

    def test_health_ok(self, api_client: APIClient):
        response = api_client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "connected"}

    def test_health_database_down(self, api_client: APIClient, monkeypatch):
        database = Mock()
        database.connect.side_effect = PersistenceError("Database connection failed: refused")
        database.state.return_value = "disconnected"
        monkeypatch.setattr("events.handlers.views.database", database)

        response = api_client.get("/api/health")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"


@pytest.mark.django_db
class TestErrorShape:
    """Errors escaping the views share the ``{message, error}`` body."""

    def test_method_not_allowed(self, api_client: APIClient):
        response = api_client.put("/api/events", {}, format="json")
        assert response.status_code == 405
        assert response.json()["error"] == "method_not_allowed"

    def test_unexpected_error(self, api_client: APIClient, monkeypatch):
        service = Mock()
        service.list_events.side_effect = RuntimeError("boom")
        monkeypatch.setattr("events.handlers.views.get_event_service", lambda: service)

        response = api_client.get("/api/events")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error", "error": "boom"}
