"""Admin classes for participants and payments.

Status changes go through the participation engine so capacity and refunds are honored.
"""

import typing as t

from django.contrib import admin, messages
from django.db.models import QuerySet
from django.http import HttpRequest
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from events import models
from events.exceptions import ParticipationError
from events.service.participation import ParticipationManager


class RegistrationAnswerInline(TabularInline):  # type: ignore[misc]
    model = models.RegistrationAnswer
    extra = 0
    can_delete = False
    fields = ["question", "answer_value"]
    readonly_fields = ["question", "answer_value"]


@admin.register(models.Participant)
class ParticipantAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["user", "event", "status", "created_at"]
    list_filter = ["status", "event"]
    search_fields = ["user__email", "user__username", "event__name"]
    readonly_fields = ["event", "user", "status", "created_at", "updated_at"]
    inlines = [RegistrationAnswerInline]
    actions = ["approve_selected", "reject_selected", "waitlist_selected"]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Records are created by registrations only."""
        return False

    def _transition(
        self, request: HttpRequest, queryset: QuerySet[models.Participant], status: models.Participant.Status
    ) -> None:
        done = 0
        for participant in queryset.select_related("event"):
            try:
                ParticipationManager(participant.event).change_status(participant.pk, status)
                done += 1
            except ParticipationError as e:
                self.message_user(request, f"{participant}: {e.message}", level=messages.ERROR)
        if done:
            self.message_user(request, f"{done} participant(s) moved to {status}.", level=messages.SUCCESS)

    @admin.action(description="Approve selected participants")
    def approve_selected(self, request: HttpRequest, queryset: QuerySet[models.Participant]) -> None:
        """Approve, within capacity."""
        self._transition(request, queryset, models.Participant.Status.APPROVED)

    @admin.action(description="Reject selected participants")
    def reject_selected(self, request: HttpRequest, queryset: QuerySet[models.Participant]) -> None:
        """Reject, refunding paid participants."""
        self._transition(request, queryset, models.Participant.Status.REJECTED)

    @admin.action(description="Waitlist selected participants")
    def waitlist_selected(self, request: HttpRequest, queryset: QuerySet[models.Participant]) -> None:
        """Move to the waiting list."""
        self._transition(request, queryset, models.Participant.Status.WAITLISTED)


@admin.register(models.Payment)
class PaymentAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["participant", "status", "amount", "currency", "created_at", "stripe_link"]
    list_filter = ["status", "currency"]
    search_fields = ["stripe_session_id", "stripe_payment_intent_id", "user__email"]
    readonly_fields = [f.name for f in models.Payment._meta.fields]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Payments are created by checkouts only."""
        return False

    @admin.display(description="Stripe")
    def stripe_link(self, obj: models.Payment) -> t.Any:
        """Link to the Stripe dashboard."""
        return format_html('<a href="{}" target="_blank">Open</a>', obj.stripe_dashboard_url())
