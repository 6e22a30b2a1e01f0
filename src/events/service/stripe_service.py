"""Thin wrapper around the Stripe API calls the participation engine needs."""

import typing as t
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

import stripe
import structlog
from django.conf import settings
from django.utils import timezone
from stripe.checkout import Session

from accounts.models import GatherlyUser
from common.models import SiteSettings
from events.exceptions import PaymentGatewayError, RefundFailedError
from events.models import Event, Participant, Payment

logger = structlog.get_logger(__name__)

stripe.api_key = settings.STRIPE_SECRET_KEY

# ISO 4217 currencies without a minor unit
ZERO_DECIMAL_CURRENCIES = frozenset(
    {"BIF", "CLP", "DJF", "GNF", "JPY", "KMF", "KRW", "MGA", "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF"}
)


def to_minor_units(amount: Decimal, currency: str) -> int:
    """Convert a decimal amount into the smallest currency unit, rounding half up."""
    if currency.upper() in ZERO_DECIMAL_CURRENCIES:
        return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_checkout_session(
    event: Event,
    user: GatherlyUser,
    participant: Participant,
    expires_at: datetime,
) -> Session:
    """Create a Stripe Checkout Session for an event ticket.

    Args:
        event: The paid event.
        user: The user buying the ticket.
        participant: The pending_payment record created for this purchase.
        expires_at: Session expiration timestamp.

    Returns:
        The created Stripe Checkout Session.

    Raises:
        PaymentGatewayError: If the Stripe API call fails.
    """
    frontend_base_url = SiteSettings.get_solo().frontend_base_url
    session_data = dict(  # noqa: C408
        customer_email=user.email or None,
        line_items=[
            {
                "price_data": {
                    "currency": event.currency.lower(),
                    "product_data": {
                        "name": f"Ticket: {event.name}",
                    },
                    "unit_amount": to_minor_units(event.ticket_price, event.currency),
                },
                "quantity": 1,
            }
        ],
        mode="payment",
        success_url=f"{frontend_base_url}/events/{event.id}?payment_success=true",
        cancel_url=f"{frontend_base_url}/events/{event.id}?payment_cancelled=true",
        metadata={
            "participant_id": str(participant.id),
            "event_id": str(event.id),
            "user_id": str(user.id),
        },
        expires_at=int(expires_at.timestamp()),
    )

    try:
        return Session.create(**session_data)  # type: ignore[arg-type]
    except stripe.StripeError as e:
        logger.error(
            "stripe_checkout_session_failed",
            event_id=str(event.id),
            user_id=str(user.id),
            error=str(e),
        )
        raise PaymentGatewayError() from e


def refund_payment(payment: Payment) -> Payment:
    """Refund a succeeded payment in full and mark it refunded.

    Raises:
        RefundFailedError: If there is nothing to refund against or Stripe rejects the refund.
    """
    if not payment.stripe_payment_intent_id:
        logger.error("stripe_refund_missing_intent", payment_id=str(payment.id))
        raise RefundFailedError()
    try:
        refund = stripe.Refund.create(
            payment_intent=payment.stripe_payment_intent_id,
            metadata={"participant_id": str(payment.participant_id), "payment_id": str(payment.id)},
        )
    except stripe.StripeError as e:
        logger.error(
            "stripe_refund_failed",
            payment_id=str(payment.id),
            payment_intent_id=payment.stripe_payment_intent_id,
            error=str(e),
        )
        raise RefundFailedError() from e

    payment.status = Payment.PaymentStatus.REFUNDED
    payment.refunded_at = timezone.now()
    payment.save(update_fields=["status", "refunded_at", "updated_at"])
    logger.info(
        "stripe_refund_issued",
        payment_id=str(payment.id),
        refund_id=t.cast(str, refund.id),
        amount=float(payment.amount),
        currency=payment.currency,
    )
    return payment
