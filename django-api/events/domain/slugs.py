"""Slug derivation from event titles.

A base slug is derived from the title alone; uniqueness is resolved against
the store by appending ``-1``, ``-2``, ... until a free candidate is found.
The store's unique index on ``slug`` remains the authoritative guarantee, since
two writers can both see a candidate as free before either commits.
"""

import re
from collections.abc import Callable

from events.domain.errors import ValidationError

_DISALLOWED = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATORS = re.compile(r"[\s_]+")
_HYPHENS = re.compile(r"-+")


def derive_base_slug(title: str) -> str:
    """Return the lowercase, hyphenated form of ``title``.

    May return an empty string for titles without letters or digits.
    """
    slug = title.lower().strip()
    slug = _DISALLOWED.sub("", slug)
    slug = _SEPARATORS.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def base_slug_for(title: str) -> str:
    """Return the base slug of ``title``, refusing titles that yield none."""
    base = derive_base_slug(title)
    if not base:
        raise ValidationError("Title must contain at least one letter or digit", field="title")
    return base


def resolve_unique_slug(base: str, is_taken: Callable[[str], bool]) -> str:
    """Return ``base`` or the first ``base-N`` for which ``is_taken`` is false."""
    if not is_taken(base):
        return base
    counter = 1
    while is_taken(f"{base}-{counter}"):
        counter += 1
    return f"{base}-{counter}"
