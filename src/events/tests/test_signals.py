"""Tests for participation status notifications."""

import typing as t
from unittest.mock import Mock, patch

import pytest
from django.core import mail

from accounts.models import GatherlyUser
from events.models import Event, Participant
from events.service.participation import ParticipationManager

pytestmark = pytest.mark.django_db

Status = Participant.Status


class TestParticipantStatusSignals:
    @patch("events.signals.notify_participant_status_changed")
    def test_new_record_schedules_a_notification(
        self,
        mock_task: Mock,
        event: Event,
        user: GatherlyUser,
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            participant = ParticipationManager(event).register(user)

        assert len(callbacks) == 1
        mock_task.delay.assert_called_once_with(str(participant.pk))

    @patch("events.signals.notify_participant_status_changed")
    def test_status_change_schedules_a_notification(
        self,
        mock_task: Mock,
        event: Event,
        participant_factory: t.Callable[..., Participant],
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        participant = participant_factory(event, Status.PENDING)

        with django_capture_on_commit_callbacks(execute=True):
            ParticipationManager(event).change_status(participant.pk, Status.APPROVED)

        mock_task.delay.assert_called_once_with(str(participant.pk))

    @patch("events.signals.notify_participant_status_changed")
    def test_saving_without_status_change_is_silent(
        self,
        mock_task: Mock,
        event: Event,
        participant_factory: t.Callable[..., Participant],
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        participant = participant_factory(event, Status.PENDING)

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            participant.save()

        assert callbacks == []
        mock_task.delay.assert_not_called()

    @patch("events.signals.notify_participant_status_changed")
    def test_pending_payment_is_silent(
        self,
        mock_task: Mock,
        paid_event: Event,
        user: GatherlyUser,
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            Participant.objects.create(event=paid_event, user=user, status=Status.PENDING_PAYMENT)

        assert callbacks == []
        mock_task.delay.assert_not_called()

    def test_approval_emails_the_participant(
        self,
        event: Event,
        user: GatherlyUser,
        participant_factory: t.Callable[..., Participant],
        django_capture_on_commit_callbacks: t.Any,
    ) -> None:
        participant = participant_factory(event, Status.PENDING, user=user)

        with django_capture_on_commit_callbacks(execute=True):
            ParticipationManager(event).change_status(participant.pk, Status.APPROVED)

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert event.name in message.subject
        assert "approved" in message.body
        assert message.bcc == ["catchall+member_at_example_dot_com@gatherly.local"]
