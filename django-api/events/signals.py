"""Django signals for cache invalidation.

Invalidation waits for the surrounding transaction to commit, otherwise a
concurrent reader could cache the rows as they were before the write.
"""

from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from events.cache import invalidate_event
from events.models import Event, Tag


def invalidate_on_commit(*slugs: str) -> None:
    transaction.on_commit(lambda: invalidate_event(*slugs))


@receiver(pre_save, sender=Event)
def invalidate_renamed_event_cache(sender, instance, **kwargs):
    """Invalidate the old detail cache when an event's slug changes."""
    if instance._state.adding:
        return
    previous = sender.objects.filter(pk=instance.pk).values_list("slug", flat=True).first()
    if previous and previous != instance.slug:
        invalidate_on_commit(previous)


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    invalidate_on_commit(instance.slug)


@receiver([post_save, post_delete], sender=Tag)
def invalidate_tag_cache(sender, instance, **kwargs):
    """Invalidate caches of the tagged event when a tag is saved or deleted."""
    slug = Event.objects.filter(pk=instance.event_id).values_list("slug", flat=True).first()
    invalidate_on_commit(slug)
