"""Paid-ticket gate.

Paid registrations start as ``pending_payment`` and hold a seat until Stripe
tells us the checkout was paid (the record moves to ``pending``) or abandoned
(the record is deleted and the seat released). Every entry point is idempotent
because Stripe delivers webhooks at least once and in any order.
"""

import typing as t
from datetime import timedelta

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from accounts.models import GatherlyUser
from events.exceptions import EventIsFreeError
from events.models import Event, Participant, Payment
from events.service import stripe_service

from . import capacity, store
from .manager import ParticipationManager
from .types import SubmittedAnswer

logger = structlog.get_logger(__name__)


@transaction.atomic
def initiate_checkout(
    event: Event, user: GatherlyUser, answers: t.Sequence[SubmittedAnswer] = ()
) -> tuple[Participant, str]:
    """Reserve a seat for a paid event and open a Stripe checkout.

    Returns:
        The pending_payment record and the checkout URL.

    Raises:
        EventIsFreeError: the event has no ticket price.
        PaymentGatewayError: Stripe could not create the session. Nothing is persisted.
    """
    event = capacity.lock_event(event.pk)
    if not event.is_paid:
        raise EventIsFreeError()

    manager = ParticipationManager(event)
    participant = manager.open_registration(user, answers, Participant.Status.PENDING_PAYMENT)

    expires_at = timezone.now() + timedelta(minutes=settings.PAYMENT_DEFAULT_EXPIRY_MINUTES)
    session = stripe_service.create_checkout_session(event, user, participant, expires_at)

    Payment.objects.create(
        participant=participant,
        user=user,
        stripe_session_id=session.id,
        amount=event.ticket_price,
        currency=event.currency,
        expires_at=expires_at,
    )
    logger.info(
        "checkout_initiated",
        participant_id=str(participant.pk),
        event_id=str(event.pk),
        session_id=session.id,
        amount=float(event.ticket_price),
        currency=event.currency,
    )
    return participant, t.cast(str, session.url)


@transaction.atomic
def on_payment_confirmed(
    event_id: t.Any,
    user_id: t.Any,
    *,
    payment_intent_id: str | None = None,
    raw_response: dict[str, t.Any] | None = None,
) -> Participant | None:
    """Move a paid record from pending_payment to pending.

    Replays are no-ops. A confirmation without a matching record is logged and ignored.
    """
    try:
        event = capacity.lock_event(event_id)
    except Event.DoesNotExist:
        logger.error("payment_confirmed_unknown_event", event_id=str(event_id), user_id=str(user_id))
        return None

    participant = (
        Participant.objects.select_for_update().filter(event=event, user_id=user_id).select_related("payment").first()
    )
    if participant is None:
        logger.error("payment_confirmed_without_participant", event_id=str(event_id), user_id=str(user_id))
        return None

    if participant.status != Participant.Status.PENDING_PAYMENT:
        logger.warning(
            "payment_confirmed_duplicate",
            participant_id=str(participant.pk),
            status=participant.status,
        )
        return participant

    payment = getattr(participant, "payment", None)
    if payment is not None:
        payment.status = Payment.PaymentStatus.SUCCEEDED
        payment.stripe_payment_intent_id = payment_intent_id
        payment.raw_response = raw_response or {}
        payment.save(update_fields=["status", "stripe_payment_intent_id", "raw_response", "updated_at"])

    participant = store.update_status(participant.pk, Participant.Status.PENDING)
    logger.info(
        "payment_confirmed",
        participant_id=str(participant.pk),
        event_id=str(event.pk),
        payment_intent_id=payment_intent_id,
    )
    return ParticipationManager(event).auto_approve(participant)


@transaction.atomic
def on_payment_abandoned(event_id: t.Any, user_id: t.Any) -> bool:
    """Delete a pending_payment record whose checkout expired or failed, releasing its seat.

    Returns whether a record was removed.
    """
    try:
        event = capacity.lock_event(event_id)
    except Event.DoesNotExist:
        logger.warning("payment_abandoned_unknown_event", event_id=str(event_id))
        return False

    participant = Participant.objects.select_for_update().filter(event=event, user_id=user_id).first()
    if participant is None or participant.status != Participant.Status.PENDING_PAYMENT:
        logger.info(
            "payment_abandoned_noop",
            event_id=str(event_id),
            user_id=str(user_id),
            status=participant.status if participant else None,
        )
        return False

    participant_id = str(participant.pk)
    participant.delete()
    logger.info("payment_abandoned", participant_id=participant_id, event_id=str(event_id), user_id=str(user_id))
    return True


@transaction.atomic
def on_charge_refunded(payment_intent_id: str, *, raw_response: dict[str, t.Any] | None = None) -> Payment | None:
    """Record a refund issued outside the rejection flow (e.g. from the Stripe dashboard).

    The payment is marked refunded and a record still holding a seat is rejected.
    Refunds we issued ourselves arrive here already marked and are ignored.
    """
    event_id = (
        Payment.objects.filter(stripe_payment_intent_id=payment_intent_id)
        .values_list("participant__event_id", flat=True)
        .first()
    )
    if event_id is None:
        logger.warning("stripe_refund_unknown_intent", payment_intent_id=payment_intent_id)
        return None

    capacity.lock_event(event_id)
    payment = (
        Payment.objects.select_for_update()
        .select_related("participant")
        .get(stripe_payment_intent_id=payment_intent_id)
    )
    if payment.status == Payment.PaymentStatus.REFUNDED:
        logger.info("stripe_webhook_duplicate_refund", payment_intent_id=payment_intent_id)
        return payment

    payment.status = Payment.PaymentStatus.REFUNDED
    payment.refunded_at = timezone.now()
    payment.raw_response = raw_response or {}
    payment.save(update_fields=["status", "refunded_at", "raw_response", "updated_at"])

    participant = payment.participant
    if participant.is_counting:
        store.update_status(participant.pk, Participant.Status.REJECTED)
    logger.info(
        "stripe_refund_processed",
        payment_id=str(payment.pk),
        participant_id=str(participant.pk),
        amount=float(payment.amount),
        currency=payment.currency,
    )
    return payment


def abandon_expired_checkouts() -> int:
    """Release seats held by checkouts whose window has closed. Returns how many were released."""
    expired = list(
        Payment.objects.expired_pending()
        .filter(participant__status=Participant.Status.PENDING_PAYMENT)
        .values_list("participant__event_id", "user_id")
    )
    released = 0
    for event_id, user_id in expired:
        if on_payment_abandoned(event_id, user_id):
            released += 1
    return released
