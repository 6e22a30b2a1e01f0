# src/events/admin/event.py
"""Admin classes for Event and its registration questions."""

from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from events import models
from events.service.participation import capacity


class RegistrationQuestionInline(TabularInline):  # type: ignore[misc]
    model = models.RegistrationQuestion
    extra = 0
    fields = ["display_order", "question_text", "question_type", "is_required", "options"]
    ordering = ["display_order"]


@admin.register(models.Event)
class EventAdmin(ModelAdmin):  # type: ignore[misc]
    """Admin model for Events."""

    list_display = [
        "name",
        "status",
        "visibility",
        "start",
        "ticket_price",
        "requires_approval",
        "seats",
    ]
    list_filter = ["status", "visibility", "requires_approval", "start"]
    search_fields = ["name", "description", "location"]
    autocomplete_fields = ["host"]
    date_hierarchy = "start"
    inlines = [RegistrationQuestionInline]

    fieldsets = [
        (
            "Details",
            {
                "fields": (
                    "name",
                    "description",
                    ("start", "end"),
                    "location",
                    "private_details",
                    "cover_image_url",
                    "host",
                )
            },
        ),
        (
            "Participation",
            {
                "fields": (
                    ("status", "visibility"),
                    ("capacity", "is_unlimited_capacity"),
                    ("requires_approval", "hide_location_until_approved", "show_participants"),
                    ("ticket_price", "currency"),
                )
            },
        ),
    ]

    @admin.display(description="Seats")
    def seats(self, obj: models.Event) -> str:
        """Approved and counting records against capacity."""
        snap = capacity.snapshot(obj)
        limit = "∞" if snap.is_unlimited else snap.capacity
        return f"{snap.approved} approved / {snap.counting} counting / {limit}"
