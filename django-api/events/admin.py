from django import forms
from django.contrib import admin

from events.domain import EventId
from events.domain.errors import ValidationError
from events.domain.normalizers import clean_list, normalize_date, normalize_time
from events.domain.slugs import base_slug_for, resolve_unique_slug
from events.models import Booking, Event, Tag
from events.stores.django_store import DjangoEventStore


class EventAdminForm(forms.ModelForm):
    """Applies the same title, date and time rules as the API."""

    class Meta:
        model = Event
        exclude = ["slug"]

    def clean_title(self):
        self._domain_clean(base_slug_for, "title")
        return self.cleaned_data["title"]

    def clean_date(self):
        return self._domain_clean(normalize_date, "date")

    def clean_time(self):
        return self._domain_clean(normalize_time, "time")

    def clean_agenda(self):
        return self._domain_clean(lambda value: clean_list("agenda", value), "agenda")

    def _domain_clean(self, normalize, name):
        try:
            return normalize(self.cleaned_data[name])
        except ValidationError as exc:
            raise forms.ValidationError(exc.message) from None


class TagInlineFormSet(forms.BaseInlineFormSet):
    """Requires at least one tag, like the API does."""

    def clean(self):
        super().clean()
        if any(self.errors):
            return
        names = [
            form.cleaned_data.get("name")
            for form in self.forms
            if form.cleaned_data and not form.cleaned_data.get("DELETE")
        ]
        try:
            clean_list("tags", names)
        except ValidationError as exc:
            raise forms.ValidationError(exc.message) from None


class TagInline(admin.TabularInline):
    model = Tag
    formset = TagInlineFormSet
    extra = 1


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    form = EventAdminForm
    list_display = ["title", "slug", "location", "date", "time", "created_at"]
    search_fields = ["title", "slug", "location"]
    inlines = [TagInline]

    def save_model(self, request, obj, form, change):
        if "title" in form.changed_data or not obj.slug:
            store = DjangoEventStore()
            exclude = EventId(obj.pk) if change else None
            obj.slug = resolve_unique_slug(
                base_slug_for(obj.title),
                lambda candidate: store.slug_exists(candidate, exclude=exclude),
            )
        super().save_model(request, obj, form, change)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ["email", "event", "created_at"]
    search_fields = ["email"]
    list_filter = ["event"]
