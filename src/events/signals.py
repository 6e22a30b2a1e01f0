"""Signal handlers for participation status notifications."""

import typing as t

import structlog
from django.db import transaction
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from events.models import Participant
from events.tasks import notify_participant_status_changed

logger = structlog.get_logger(__name__)

SILENT_STATUSES = {Participant.Status.PENDING_PAYMENT}


@receiver(pre_save, sender=Participant)
def capture_participant_old_status(sender: type[Participant], instance: Participant, **kwargs: t.Any) -> None:
    """Capture the old status value before save for change detection."""
    if instance._state.adding:
        return
    old_status = Participant.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
    if old_status is not None and old_status != instance.status:
        instance._old_status = old_status  # type: ignore[attr-defined]


@receiver(post_save, sender=Participant)
def handle_participant_status_change(
    sender: type[Participant], instance: Participant, created: bool, **kwargs: t.Any
) -> None:
    """Notify the participant once a status change is committed."""
    if not created and not hasattr(instance, "_old_status"):
        return
    old_status = getattr(instance, "_old_status", None)
    if hasattr(instance, "_old_status"):
        del instance._old_status
    if instance.status in SILENT_STATUSES:
        return

    participant_id = str(instance.pk)
    logger.debug(
        "participant_notification_scheduled",
        participant_id=participant_id,
        old_status=old_status,
        new_status=instance.status,
    )
    transaction.on_commit(lambda: notify_participant_status_changed.delay(participant_id))
