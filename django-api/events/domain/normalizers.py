"""Field validation and canonicalization applied on every event or booking write.

Each function is pure: it either returns the canonical value or raises a
ValidationError naming the offending field.
"""

import re
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from django.utils.dateparse import parse_date, parse_datetime

from events.domain.errors import ValidationError

EVENT_FIELDS = (
    "title",
    "description",
    "overview",
    "image",
    "venue",
    "location",
    "date",
    "time",
    "mode",
    "audience",
    "agenda",
    "organizer",
    "tags",
)
LIST_FIELDS = frozenset({"agenda", "tags"})

_LABELS = {"image": "Image URL"}
_LIST_MESSAGES = {
    "agenda": ("Agenda is required", "Agenda must contain at least one non-empty item"),
    "tags": ("Tags are required", "Tags must contain at least one non-empty item"),
}

# Written forms accepted besides ISO 8601, month first for the numeric one.
_DATE_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%d %B %Y", "%d %b %Y", "%m/%d/%Y")

TIME_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_date(value: str) -> str:
    """Return ``value`` as ``YYYY-MM-DD``, converting date-times to UTC first."""
    text = value.strip() if isinstance(value, str) else ""
    try:
        moment = parse_datetime(text)
        if moment is not None:
            if moment.tzinfo is not None:
                moment = moment.astimezone(timezone.utc)
            return moment.date().isoformat()
        day = parse_date(text)
    except ValueError:
        raise ValidationError("Invalid date format", field="date") from None
    if day is not None:
        return day.isoformat()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    raise ValidationError("Invalid date format", field="date")


def normalize_time(value: str) -> str:
    """Return ``value`` as zero-padded ``HH:MM``."""
    text = value.strip() if isinstance(value, str) else ""
    match = TIME_PATTERN.match(text)
    if match is None:
        raise ValidationError("Time must be in HH:MM format", field="time")
    hour, minute = match.groups()
    return f"{hour.zfill(2)}:{minute}"


def normalize_email(value: str) -> str:
    text = value.strip().lower() if isinstance(value, str) else ""
    if not text:
        raise ValidationError("Email is required", field="email")
    if not EMAIL_PATTERN.match(text):
        raise ValidationError("Please provide a valid email address", field="email")
    return text


def clean_event_fields(fields: Mapping, required: Sequence[str] = EVENT_FIELDS) -> dict:
    """Trim every known field and check that each ``required`` one is present.

    Fields are checked in schema order so the error names the first offending
    one. Tags are de-duplicated keeping their first occurrence.
    """
    cleaned = {}
    for name in EVENT_FIELDS:
        value = fields.get(name)
        if name in LIST_FIELDS:
            items = clean_list(name, value, required=name in required)
            if items is not None:
                cleaned[name] = list(dict.fromkeys(items)) if name == "tags" else items
            continue
        if value is None:
            if name in required:
                raise ValidationError(f"{_label(name)} is required", field=name)
            continue
        if not isinstance(value, str):
            raise ValidationError(f"{_label(name)} must be a string", field=name)
        value = value.strip()
        if not value and name in required:
            raise ValidationError(f"{_label(name)} is required", field=name)
        cleaned[name] = value
    return cleaned


def clean_list(name: str, value, required: bool = True) -> list[str] | None:
    """Return the trimmed items of the ``agenda`` or ``tags`` list ``value``."""
    missing, blank = _LIST_MESSAGES[name]
    if value is None:
        if required:
            raise ValidationError(missing, field=name)
        return None
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ValidationError(f"{_label(name)} must be a list of strings", field=name)
    if not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{_label(name)} must be a list of strings", field=name)
    items = [item.strip() for item in value]
    if not items or not all(items):
        raise ValidationError(blank, field=name)
    return items


def _label(name: str) -> str:
    return _LABELS.get(name, name.capitalize())
