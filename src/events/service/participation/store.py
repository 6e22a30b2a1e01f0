"""Persistence of participation records."""

import typing as t

import structlog
from django.db import IntegrityError, transaction

from accounts.models import GatherlyUser
from events.exceptions import DuplicateRegistrationError, ParticipantNotFoundError
from events.models import Event, Participant
from events.models.participant import ParticipantQuerySet

logger = structlog.get_logger(__name__)


def create(event: Event, user: GatherlyUser, initial_status: Participant.Status) -> Participant:
    """Insert a new record. The (event, user) unique constraint rejects duplicates."""
    if Participant.objects.filter(event=event, user=user).exists():
        raise DuplicateRegistrationError()
    try:
        with transaction.atomic():
            return Participant.objects.create(event=event, user=user, status=initial_status)
    except IntegrityError as e:
        raise DuplicateRegistrationError() from e


def get(event: Event, user: GatherlyUser) -> Participant | None:
    """The user's record for an event, if any."""
    return Participant.objects.filter(event=event, user=user).first()


def get_for_update(event: Event, participant_id: t.Any) -> Participant:
    """Lock and return a record of the event."""
    try:
        return Participant.objects.select_for_update().get(pk=participant_id, event=event)
    except Participant.DoesNotExist as e:
        raise ParticipantNotFoundError() from e


def list_by_event(event: Event, status: Participant.Status | str | None = None) -> ParticipantQuerySet:
    """Records of an event in submission order, optionally filtered by status."""
    qs = Participant.objects.for_event(event.pk).with_user().order_by("created_at")
    if status:
        qs = qs.filter(status=status)
    return qs


def update_status(participant_id: t.Any, new_status: Participant.Status) -> Participant:
    """Persist a new status. Only the state machine and the payment gate call this."""
    try:
        participant = Participant.objects.select_for_update().get(pk=participant_id)
    except Participant.DoesNotExist as e:
        raise ParticipantNotFoundError() from e
    old_status = participant.status
    participant.status = new_status
    participant.save(update_fields=["status", "updated_at"])
    logger.info(
        "participant_status_changed",
        participant_id=str(participant.pk),
        event_id=str(participant.event_id),
        user_id=str(participant.user_id),
        old_status=old_status,
        new_status=new_status,
    )
    return participant
