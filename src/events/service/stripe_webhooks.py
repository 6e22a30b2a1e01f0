"""Stripe webhook event handlers."""

import stripe
import structlog

from events.service import participation

logger = structlog.get_logger(__name__)


class StripeEventHandler:
    """Handles the business logic for different types of Stripe webhook events."""

    def __init__(self, event: stripe.Event):
        """Initialize the Stripe event handler."""
        self.event = event

    def handle(self) -> None:
        """Routes the event to the appropriate handler based on its type."""
        event_type = self.event.type
        handler_method = getattr(self, f"handle_{event_type.replace('.', '_')}", self.handle_unknown_event)
        handler_method(self.event)

    def handle_unknown_event(self, event: stripe.Event) -> None:
        """Log unhandled event types."""
        logger.info("stripe_webhook_unhandled_event", event_type=event.type, event_id=event.id)

    @staticmethod
    def _session_metadata(event: stripe.Event) -> tuple[str, str] | None:
        session = event.data.object
        metadata = session.get("metadata") or {}
        event_id, user_id = metadata.get("event_id"), metadata.get("user_id")
        if not event_id or not user_id:
            logger.warning("stripe_session_missing_metadata", session_id=session.get("id"), event_type=event.type)
            return None
        return event_id, user_id

    def handle_checkout_session_completed(self, event: stripe.Event) -> None:
        """Confirm the payment of a completed checkout.

        Sessions paid with delayed methods complete with ``payment_status=unpaid``;
        those are confirmed later by ``checkout.session.async_payment_succeeded``.
        """
        session = event.data.object
        if session["payment_status"] not in {"paid", "no_payment_required"}:
            logger.warning(
                "stripe_session_unresolved_payment",
                session_id=session["id"],
                payment_status=session["payment_status"],
            )
            return
        self._confirm(event)

    def handle_checkout_session_async_payment_succeeded(self, event: stripe.Event) -> None:
        """Confirm a delayed payment."""
        self._confirm(event)

    def handle_checkout_session_expired(self, event: stripe.Event) -> None:
        """Release the seat of a checkout that was never paid."""
        self._abandon(event)

    def handle_checkout_session_async_payment_failed(self, event: stripe.Event) -> None:
        """Release the seat of a delayed payment that failed."""
        self._abandon(event)

    def handle_charge_refunded(self, event: stripe.Event) -> None:
        """Record a full refund issued from the Stripe side.

        Stripe sends the same event for partial refunds; those leave the ticket valid.
        """
        charge = event.data.object
        if not charge.get("refunded"):
            logger.info(
                "stripe_partial_refund_ignored",
                charge_id=charge.get("id"),
                amount_refunded=charge.get("amount_refunded"),
            )
            return
        payment_intent_id = charge.get("payment_intent")
        if not payment_intent_id:
            logger.warning("stripe_refund_missing_intent", charge_id=charge.get("id"))
            return
        participation.on_charge_refunded(payment_intent_id, raw_response=dict(event))

    def _confirm(self, event: stripe.Event) -> None:
        ids = self._session_metadata(event)
        if ids is None:
            return
        session = event.data.object
        participation.on_payment_confirmed(
            *ids,
            payment_intent_id=session.get("payment_intent"),
            raw_response=dict(event),
        )

    def _abandon(self, event: stripe.Event) -> None:
        ids = self._session_metadata(event)
        if ids is None:
            return
        participation.on_payment_abandoned(*ids)
