"""Tests for the event admin endpoints."""

import typing as t
from unittest.mock import Mock, patch

import pytest
import stripe
from django.test.client import Client
from django.urls import reverse

from accounts.models import GatherlyUser
from conftest import client_for
from events.models import Event, Participant, Payment, RegistrationAnswer, RegistrationQuestion

from ..conftest import EventFactory

pytestmark = pytest.mark.django_db

Status = Participant.Status
ParticipantFactory = t.Callable[..., Participant]


def status_url(event: Event, participant: Participant) -> str:
    return reverse(
        "api:update_participant_status", kwargs={"event_id": event.id, "participant_id": participant.id}
    )


@pytest.fixture
def host_client(host: GatherlyUser) -> Client:
    return client_for(host)


@pytest.fixture
def hosted_event(event_factory: EventFactory, host: GatherlyUser) -> Event:
    return event_factory(name="Host's Dinner", host=host, capacity=2)


class TestPermissions:
    def test_members_cannot_manage_events(self, user_client: Client, event: Event) -> None:
        response = user_client.get(reverse("api:list_participants", kwargs={"event_id": event.id}))

        assert response.status_code == 403

    def test_anonymous_users_are_rejected(self, client: Client, event: Event) -> None:
        response = client.get(reverse("api:list_participants", kwargs={"event_id": event.id}))

        assert response.status_code == 401

    def test_hosts_manage_their_own_events_only(
        self, host_client: Client, hosted_event: Event, event: Event
    ) -> None:
        own = host_client.get(reverse("api:list_participants", kwargs={"event_id": hosted_event.id}))
        other = host_client.get(reverse("api:list_participants", kwargs={"event_id": event.id}))

        assert own.status_code == 200
        assert other.status_code == 403

    def test_unknown_event_is_404(self, superuser_client: Client) -> None:
        response = superuser_client.get(
            reverse("api:list_participants", kwargs={"event_id": "00000000-0000-4000-8000-000000000000"})
        )

        assert response.status_code == 404


class TestListParticipants:
    def test_lists_records_with_answers_in_submission_order(
        self,
        superuser_client: Client,
        event: Event,
        required_question: RegistrationQuestion,
        participant_factory: ParticipantFactory,
    ) -> None:
        first = participant_factory(event, Status.PENDING)
        second = participant_factory(event, Status.WAITLISTED)
        RegistrationAnswer.objects.create(participant=first, question=required_question, answer_value="Curious")

        response = superuser_client.get(reverse("api:list_participants", kwargs={"event_id": event.id}))

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["id"] for r in results] == [str(first.id), str(second.id)]
        assert results[0]["email"] == first.user.email
        assert results[0]["answers"] == [
            {
                "question_id": str(required_question.id),
                "question_text": required_question.question_text,
                "answer_value": "Curious",
            }
        ]
        assert results[0]["payment"] is None

    def test_filter_by_status(
        self, superuser_client: Client, event: Event, participant_factory: ParticipantFactory
    ) -> None:
        participant_factory(event, Status.PENDING)
        waitlisted = participant_factory(event, Status.WAITLISTED)

        response = superuser_client.get(
            reverse("api:list_participants", kwargs={"event_id": event.id}), {"status": "waitlisted"}
        )

        assert [r["id"] for r in response.json()["results"]] == [str(waitlisted.id)]

    def test_paid_records_include_the_payment(self, superuser_client: Client, paid_participant: Participant) -> None:
        response = superuser_client.get(
            reverse("api:list_participants", kwargs={"event_id": paid_participant.event_id})
        )

        payment = response.json()["results"][0]["payment"]
        assert payment["status"] == "succeeded"
        assert payment["currency"] == "EUR"


class TestUpdateStatus:
    def test_approve(
        self, host_client: Client, hosted_event: Event, participant_factory: ParticipantFactory
    ) -> None:
        participant = participant_factory(hosted_event, Status.PENDING)

        response = host_client.post(
            status_url(hosted_event, participant), data={"status": "approved"}, content_type="application/json"
        )

        assert response.status_code == 200, response.content
        assert response.json()["status"] == Status.APPROVED
        participant.refresh_from_db()
        assert participant.status == Status.APPROVED

    def test_approval_at_capacity_is_409(
        self, host_client: Client, hosted_event: Event, participant_factory: ParticipantFactory
    ) -> None:
        participant_factory(hosted_event, Status.APPROVED)
        participant_factory(hosted_event, Status.APPROVED)
        waitlisted = participant_factory(hosted_event, Status.WAITLISTED)

        response = host_client.post(
            status_url(hosted_event, waitlisted), data={"status": "approved"}, content_type="application/json"
        )

        assert response.status_code == 409
        assert response.json()["code"] == "capacity_exceeded"

    def test_invalid_transition_is_400(
        self, host_client: Client, hosted_event: Event, participant_factory: ParticipantFactory
    ) -> None:
        participant = participant_factory(hosted_event, Status.APPROVED)

        response = host_client.post(
            status_url(hosted_event, participant), data={"status": "rejected"}, content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_status_transition"

    def test_unknown_status_is_422(
        self, host_client: Client, hosted_event: Event, participant_factory: ParticipantFactory
    ) -> None:
        participant = participant_factory(hosted_event, Status.PENDING)

        response = host_client.post(
            status_url(hosted_event, participant), data={"status": "maybe"}, content_type="application/json"
        )

        assert response.status_code == 422

    def test_participant_of_another_event_is_404(
        self,
        host_client: Client,
        hosted_event: Event,
        event: Event,
        participant_factory: ParticipantFactory,
    ) -> None:
        participant = participant_factory(event, Status.PENDING)

        response = host_client.post(
            status_url(hosted_event, participant), data={"status": "approved"}, content_type="application/json"
        )

        assert response.status_code == 404

    @patch("stripe.Refund.create")
    def test_failed_refund_is_502_and_changes_nothing(
        self, mock_refund: Mock, superuser_client: Client, paid_participant: Participant
    ) -> None:
        mock_refund.side_effect = stripe.APIError("Stripe is down")

        response = superuser_client.post(
            status_url(paid_participant.event, paid_participant),
            data={"status": "rejected"},
            content_type="application/json",
        )

        assert response.status_code == 502
        assert response.json()["manual_intervention_required"] is True
        paid_participant.refresh_from_db()
        assert paid_participant.status == Status.PENDING
        assert Payment.objects.get(participant=paid_participant).status == Payment.PaymentStatus.SUCCEEDED


class TestApproveAll:
    def test_approves_until_full(
        self, host_client: Client, hosted_event: Event, participant_factory: ParticipantFactory
    ) -> None:
        participant_factory(hosted_event, Status.APPROVED)
        first = participant_factory(hosted_event, Status.PENDING)
        second = participant_factory(hosted_event, Status.PENDING)

        response = host_client.post(reverse("api:approve_all_participants", kwargs={"event_id": hosted_event.id}))

        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data["approved"]] == [str(first.id)]
        assert data["remaining_pending_ids"] == [str(second.id)]


class TestCapacity:
    def test_snapshot(self, host_client: Client, hosted_event: Event, participant_factory: ParticipantFactory) -> None:
        participant_factory(hosted_event, Status.APPROVED)
        participant_factory(hosted_event, Status.WAITLISTED)

        response = host_client.get(reverse("api:event_capacity", kwargs={"event_id": hosted_event.id}))

        assert response.status_code == 200
        assert response.json() == {"capacity": 2, "is_unlimited": False, "counting": 1, "approved": 1, "spots_left": 1}


class TestPendingRequests:
    def test_lists_pending_requests_of_managed_events(
        self,
        host_client: Client,
        hosted_event: Event,
        event: Event,
        participant_factory: ParticipantFactory,
    ) -> None:
        mine = participant_factory(hosted_event, Status.PENDING)
        participant_factory(hosted_event, Status.APPROVED)
        participant_factory(event, Status.PENDING)

        response = host_client.get(reverse("api:list_pending_requests"))

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["id"] for r in results] == [str(mine.id)]
        assert results[0]["event"]["id"] == str(hosted_event.id)

    def test_staff_see_every_event(
        self, superuser_client: Client, event: Event, participant_factory: ParticipantFactory
    ) -> None:
        participant_factory(event, Status.PENDING)

        response = superuser_client.get(reverse("api:list_pending_requests"))

        assert response.json()["count"] == 1


class TestQuestions:
    def test_create_list_and_delete(self, host_client: Client, hosted_event: Event) -> None:
        url = reverse("api:create_registration_question", kwargs={"event_id": hosted_event.id})
        payload = {
            "question_text": "Dietary preference",
            "question_type": "select",
            "options": ["omnivore", "vegetarian"],
            "is_required": True,
            "display_order": 1,
        }

        created = host_client.post(url, data=payload, content_type="application/json")
        assert created.status_code == 201, created.content
        question_id = created.json()["id"]

        listed = host_client.get(reverse("api:admin_list_registration_questions", kwargs={"event_id": hosted_event.id}))
        assert [q["id"] for q in listed.json()] == [question_id]

        deleted = host_client.delete(
            reverse(
                "api:delete_registration_question",
                kwargs={"event_id": hosted_event.id, "question_id": question_id},
            )
        )
        assert deleted.status_code == 204
        assert not RegistrationQuestion.objects.filter(pk=question_id).exists()

    def test_select_question_without_options_is_rejected(self, host_client: Client, hosted_event: Event) -> None:
        url = reverse("api:create_registration_question", kwargs={"event_id": hosted_event.id})

        response = host_client.post(
            url, data={"question_text": "Pick one", "question_type": "select"}, content_type="application/json"
        )

        assert response.status_code == 422
        assert not RegistrationQuestion.objects.filter(event=hosted_event).exists()
