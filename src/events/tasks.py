"""Celery tasks for event participation.

- Notifying participants of status changes
- Releasing seats held by abandoned checkouts
- Moving finished events to past
"""

import structlog
from celery import shared_task
from django.utils.translation import gettext as _
from django.utils.translation import gettext_noop

from common.models import SiteSettings
from common.tasks import send_email

from .models import Event, Participant
from .service import participation

logger = structlog.get_logger(__name__)

STATUS_MESSAGES = {
    Participant.Status.PENDING: gettext_noop("Your request to join {event} was received and is waiting for approval."),
    Participant.Status.APPROVED: gettext_noop("You're in! Your participation in {event} was approved."),
    Participant.Status.REJECTED: gettext_noop("Unfortunately your request to join {event} was not accepted."),
    Participant.Status.WAITLISTED: gettext_noop("You have been put on the waiting list for {event}."),
}


@shared_task
def notify_participant_status_changed(participant_id: str) -> None:
    """Email a participant about their current status."""
    participant = Participant.objects.select_related("event", "user").filter(pk=participant_id).first()
    if participant is None:
        logger.info("participant_notification_skipped", participant_id=participant_id, reason="deleted")
        return
    message = STATUS_MESSAGES.get(participant.status)
    if message is None or not participant.user.email:
        return
    event = participant.event
    frontend_base_url = SiteSettings.get_solo().frontend_base_url
    body = "\n\n".join(
        [
            _(message).format(event=event.name),
            f"{frontend_base_url}/events/{event.id}",
        ]
    )
    send_email(
        to=participant.user.email,
        subject=_("{event}: your participation").format(event=event.name),
        body=body,
    )
    logger.info("participant_notified", participant_id=participant_id, status=participant.status)


@shared_task(name="events.tasks.cleanup_expired_checkouts")
def cleanup_expired_checkouts() -> int:
    """Delete pending_payment records whose checkout expired, releasing their seats."""
    released = participation.abandon_expired_checkouts()
    logger.info("expired_checkouts_cleaned", released=released)
    return released


@shared_task(name="events.tasks.mark_past_events")
def mark_past_events() -> int:
    """Move published events that are over to past."""
    count = Event.objects.finished().update(status=Event.EventStatus.PAST)
    logger.info("past_events_marked", count=count)
    return count
