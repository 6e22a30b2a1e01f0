"""Tests for the events Celery tasks."""

import typing as t
from datetime import timedelta

import pytest
from django.core import mail
from django.utils import timezone
from freezegun import freeze_time

from accounts.models import GatherlyUser
from common.models import SiteSettings
from events import tasks
from events.models import Event, Participant, Payment

from .conftest import EventFactory

pytestmark = pytest.mark.django_db

Status = Participant.Status


class TestNotifyParticipantStatusChanged:
    def test_sends_the_message_for_the_current_status(
        self, event: Event, user: GatherlyUser, participant_factory: t.Callable[..., Participant]
    ) -> None:
        participant = participant_factory(event, Status.WAITLISTED, user=user)

        tasks.notify_participant_status_changed(str(participant.pk))

        assert len(mail.outbox) == 1
        assert "waiting list" in mail.outbox[0].body
        assert f"/events/{event.id}" in mail.outbox[0].body

    def test_live_emails_reach_the_real_address(
        self, event: Event, user: GatherlyUser, participant_factory: t.Callable[..., Participant]
    ) -> None:
        site_settings = SiteSettings.get_solo()
        site_settings.live_emails = True
        site_settings.save()
        participant = participant_factory(event, Status.APPROVED, user=user)

        tasks.notify_participant_status_changed(str(participant.pk))

        assert mail.outbox[0].bcc == ["member@example.com"]

    def test_deleted_record_is_skipped(
        self, event: Event, participant_factory: t.Callable[..., Participant]
    ) -> None:
        participant = participant_factory(event, Status.PENDING)
        participant_id = str(participant.pk)
        participant.delete()

        tasks.notify_participant_status_changed(participant_id)

        assert mail.outbox == []

    def test_pending_payment_is_not_notified(
        self, paid_event: Event, participant_factory: t.Callable[..., Participant]
    ) -> None:
        participant = participant_factory(paid_event, Status.PENDING_PAYMENT)

        tasks.notify_participant_status_changed(str(participant.pk))

        assert mail.outbox == []


class TestCleanupExpiredCheckouts:
    def test_releases_expired_seats(
        self, paid_event: Event, participant_factory: t.Callable[..., Participant]
    ) -> None:
        participant = participant_factory(paid_event, Status.PENDING_PAYMENT)
        Payment.objects.create(
            participant=participant,
            user=participant.user,
            stripe_session_id="cs_test_expired",
            amount=paid_event.ticket_price,
            currency=paid_event.currency,
        )

        assert tasks.cleanup_expired_checkouts() == 0

        with freeze_time(timezone.now() + timedelta(hours=2)):
            assert tasks.cleanup_expired_checkouts() == 1

        assert not Participant.objects.filter(pk=participant.pk).exists()

    def test_succeeded_payments_are_kept(self, paid_participant: Participant) -> None:
        with freeze_time(timezone.now() + timedelta(hours=1)):
            assert tasks.cleanup_expired_checkouts() == 0

        assert Participant.objects.filter(pk=paid_participant.pk).exists()


class TestMarkPastEvents:
    def test_moves_finished_published_events_to_past(self, event_factory: EventFactory) -> None:
        finished = event_factory(name="Finished")
        draft = event_factory(name="Draft", status=Event.EventStatus.DRAFT)
        upcoming = event_factory(name="Upcoming", start=timezone.now() + timedelta(days=30), end=None)

        with freeze_time(finished.end + timedelta(hours=1)):  # type: ignore[operator]
            assert tasks.mark_past_events() == 1

        finished.refresh_from_db()
        draft.refresh_from_db()
        upcoming.refresh_from_db()
        assert finished.status == Event.EventStatus.PAST
        assert draft.status == Event.EventStatus.DRAFT
        assert upcoming.status == Event.EventStatus.PUBLISHED
