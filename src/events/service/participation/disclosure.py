"""Status-dependent disclosure of event details.

``resolve_disclosure`` is a pure function of the event policy and the viewer's
record; ``get_event_view`` recomputes it on every read, so an approval is
reflected on the next request without any invalidation.
"""

import typing as t

from django.contrib.auth.models import AnonymousUser
from django.utils.translation import gettext as _

from accounts.models import GatherlyUser
from accounts.schema import MinimalGatherlyUserSchema
from events.models import Event, Participant
from events.schema import EventViewSchema

from . import capacity
from .types import Disclosure

HIDDEN_LOCATION_PLACEHOLDER = "Location revealed after approval"


def resolve_disclosure(event: Event, participant: Participant | None) -> Disclosure:
    """Decide which parts of the event the holder of ``participant`` may see."""
    is_approved = participant is not None and participant.status == Participant.Status.APPROVED
    return Disclosure(
        location_visible=not event.hide_location_until_approved or is_approved,
        roster_visible=event.show_participants or is_approved,
        private_details_visible=is_approved,
    )


def viewable_events(user: GatherlyUser | AnonymousUser) -> t.Any:
    """Events a user may open by id: everything but drafts, which only staff see."""
    qs = Event.objects.with_host()
    if user.is_staff or user.is_superuser:
        return qs
    return qs.exclude(status=Event.EventStatus.DRAFT)


def get_event_view(event_id: t.Any, user: GatherlyUser | AnonymousUser) -> EventViewSchema:
    """Build the read model of an event for a viewer.

    Raises:
        Event.DoesNotExist: unknown event, or a draft the viewer may not see.
    """
    event = viewable_events(user).get(pk=event_id)
    participant = None
    if user.is_authenticated:
        participant = Participant.objects.filter(event=event, user=user).first()
    disclosure = resolve_disclosure(event, participant)
    snapshot = capacity.snapshot(event)

    roster = None
    if disclosure.roster_visible:
        roster = [
            MinimalGatherlyUserSchema.from_orm(p.user)
            for p in Participant.objects.for_event(event.pk).approved().with_user().order_by("created_at")
        ]

    return EventViewSchema(
        id=event.id,
        name=event.name,
        description=event.description,
        start=event.start,
        end=event.end,
        cover_image_url=event.cover_image_url,
        host=MinimalGatherlyUserSchema.from_orm(event.host) if event.host else None,
        location=event.location if disclosure.location_visible else _(HIDDEN_LOCATION_PLACEHOLDER),
        location_hidden=not disclosure.location_visible,
        private_details=event.private_details if disclosure.private_details_visible else None,
        ticket_price=event.ticket_price,
        currency=event.currency,
        is_paid=event.is_paid,
        requires_approval=event.requires_approval,
        is_unlimited_capacity=event.is_unlimited_capacity,
        capacity=event.capacity,
        spots_left=snapshot.spots_left,
        accepts_signups=event.accepts_signups,
        participation_status=participant.status if participant else None,
        participants=roster,
    )
