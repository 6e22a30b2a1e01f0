import typing as t
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from accounts.models import GatherlyUser
from conftest import GatherlyUserFactory
from events.models import Event, Participant, Payment, RegistrationQuestion


class EventFactory:
    """Factory for published, upcoming events."""

    def __call__(self, **kwargs: t.Any) -> Event:
        defaults: dict[str, t.Any] = {
            "name": "Community Dinner",
            "description": "An evening of food and conversation.",
            "start": timezone.now() + timedelta(days=7),
            "end": timezone.now() + timedelta(days=7, hours=3),
            "location": "Via Roma 1, Bologna",
            "private_details": "Ring the bell twice.",
            "capacity": 10,
            "status": Event.EventStatus.PUBLISHED,
        }
        defaults.update(kwargs)
        return Event.objects.create(**defaults)


@pytest.fixture
def event_factory() -> EventFactory:
    return EventFactory()


@pytest.fixture
def event(event_factory: EventFactory) -> Event:
    """A free, published event with ten seats that requires approval."""
    return event_factory()


@pytest.fixture
def paid_event(event_factory: EventFactory) -> Event:
    """A paid, published event with two seats."""
    return event_factory(name="Wine Tasting", capacity=2, ticket_price=Decimal("25.00"), currency="EUR")


@pytest.fixture
def participant_factory(user_factory: GatherlyUserFactory) -> t.Callable[..., Participant]:
    def _create(event: Event, status: Participant.Status = Participant.Status.PENDING, **kwargs: t.Any) -> Participant:
        user = kwargs.pop("user", None) or user_factory()
        return Participant.objects.create(event=event, user=user, status=status, **kwargs)

    return _create


@pytest.fixture
def host(user_factory: GatherlyUserFactory) -> GatherlyUser:
    """A user hosting events, without staff rights."""
    return user_factory(username="host@example.com", email="host@example.com")


@pytest.fixture
def required_question(event: Event) -> RegistrationQuestion:
    return RegistrationQuestion.objects.create(
        event=event, question_text="Why do you want to join?", is_required=True, display_order=1
    )


@pytest.fixture
def select_question(event: Event) -> RegistrationQuestion:
    return RegistrationQuestion.objects.create(
        event=event,
        question_text="Dietary preference",
        question_type=RegistrationQuestion.QuestionType.SELECT,
        options=["omnivore", "vegetarian", "vegan"],
        display_order=2,
    )


@pytest.fixture
def paid_participant(
    paid_event: Event, participant_factory: t.Callable[..., Participant]
) -> Participant:
    """A pending participant whose payment succeeded."""
    participant = participant_factory(paid_event, Participant.Status.PENDING)
    Payment.objects.create(
        participant=participant,
        user=participant.user,
        stripe_session_id="cs_test_paid",
        stripe_payment_intent_id="pi_test_paid",
        status=Payment.PaymentStatus.SUCCEEDED,
        amount=paid_event.ticket_price,
        currency=paid_event.currency,
    )
    return participant
