"""End-to-end participation flows through the engine."""

from decimal import Decimal
from unittest.mock import Mock, patch

import pytest

from conftest import GatherlyUserFactory
from events.exceptions import CapacityExceededError
from events.models import Participant, Payment
from events.service import participation
from events.service.participation import ParticipationManager, capacity, payment_gate

from ..conftest import EventFactory

pytestmark = pytest.mark.django_db

Status = Participant.Status


def test_single_seat_free_event(event_factory: EventFactory, user_factory: GatherlyUserFactory) -> None:
    event = event_factory(capacity=1, requires_approval=True)
    alice, bob = user_factory(), user_factory()

    first = participation.register(event, alice).participant
    assert first.status == Status.PENDING
    assert capacity.snapshot(event).spots_left == 0

    with pytest.raises(CapacityExceededError):
        participation.register(event, bob)

    assert ParticipationManager(event).change_status(first.pk, Status.APPROVED).status == Status.APPROVED

    # a second pending record slipped in (e.g. created by staff) cannot be approved
    other = Participant.objects.create(event=event, user=bob, status=Status.PENDING)
    with pytest.raises(CapacityExceededError):
        ParticipationManager(event).change_status(other.pk, Status.APPROVED)
    assert capacity.count_approved(event) == 1


@patch("stripe.Refund.create")
@patch("stripe.checkout.Session.create")
def test_paid_event_rejection_refunds_before_the_status_changes(
    mock_session_create: Mock,
    mock_refund: Mock,
    event_factory: EventFactory,
    user_factory: GatherlyUserFactory,
) -> None:
    event = event_factory(ticket_price=Decimal("20.00"), currency="USD", requires_approval=True)
    user = user_factory()
    mock_session_create.return_value = Mock(id="cs_test_f", url="https://checkout.stripe.com/c/pay/cs_test_f")
    mock_refund.return_value = Mock(id="re_test_f")

    result = participation.register(event, user)
    assert result.participant.status == Status.PENDING_PAYMENT
    assert result.checkout_url

    payment_gate.on_payment_confirmed(event.id, user.id, payment_intent_id="pi_test_f")
    payment_gate.on_payment_confirmed(event.id, user.id, payment_intent_id="pi_test_f")
    participant = Participant.objects.get(pk=result.participant.pk)
    assert participant.status == Status.PENDING

    rejected = ParticipationManager(event).change_status(participant.pk, Status.REJECTED)

    assert rejected.status == Status.REJECTED
    mock_refund.assert_called_once()
    assert Payment.objects.get(participant=participant).status == Payment.PaymentStatus.REFUNDED
