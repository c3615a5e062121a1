"""Serializers for parsing API input and rendering domain models.

Input serializers only parse the request format; field rules live in the
domain and are enforced by the services.
"""

import json

from rest_framework import serializers
from rest_framework.utils import html


class StringListField(serializers.ListField):
    """A list of strings, also accepted as a JSON-encoded array in form data."""

    child = serializers.CharField(allow_blank=True, trim_whitespace=False)
    default_error_messages = {
        "invalid_json": "Must be a JSON-encoded array of strings.",
    }

    def get_value(self, dictionary):
        if html.is_html_input(dictionary) and self.field_name in dictionary:
            return dictionary.get(self.field_name)
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                self.fail("invalid_json")
        return super().to_internal_value(data)


def _text():
    return serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)


class EventCreateSerializer(serializers.Serializer):
    """Form fields of POST /api/events; ``image`` arrives as a file part."""

    title = _text()
    description = _text()
    overview = _text()
    venue = _text()
    location = _text()
    date = _text()
    time = _text()
    mode = _text()
    audience = _text()
    organizer = _text()
    agenda = StringListField(required=False, allow_empty=True)
    tags = StringListField(required=False, allow_empty=True)


class BookingCreateSerializer(serializers.Serializer):
    eventId = _text()
    email = _text()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = serializers.UUIDField(source="id.value")
    title = serializers.CharField()
    slug = serializers.CharField()
    description = serializers.CharField()
    overview = serializers.CharField()
    image = serializers.CharField()
    venue = serializers.CharField()
    location = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()
    mode = serializers.CharField()
    audience = serializers.CharField()
    agenda = serializers.ListField(child=serializers.CharField())
    organizer = serializers.CharField()
    tags = serializers.ListField(child=serializers.CharField())
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")


class EventSummarySerializer(serializers.Serializer):
    """Serializer for the similar-event card projection."""

    title = serializers.CharField()
    image = serializers.CharField()
    slug = serializers.CharField()
    location = serializers.CharField()
    date = serializers.CharField()
    time = serializers.CharField()


class BookingSerializer(serializers.Serializer):
    """Serializer for Booking domain model."""

    id = serializers.UUIDField(source="id.value")
    eventId = serializers.UUIDField(source="event_id.value")
    email = serializers.CharField()
    createdAt = serializers.DateTimeField(source="created_at")
    updatedAt = serializers.DateTimeField(source="updated_at")
