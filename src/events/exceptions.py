from django.utils.translation import gettext_lazy as _


class ParticipationError(Exception):
    """Base class for errors raised by the participation engine."""

    code = "participation_error"
    default_message = _("The request could not be processed.")

    def __init__(self, message: str | None = None) -> None:
        self.message = message or str(self.default_message)
        super().__init__(self.message)


class DuplicateRegistrationError(ParticipationError):
    """Raised when a user already has a participation record for the event."""

    code = "duplicate_registration"
    default_message = _("You have already registered for this event.")


class CapacityExceededError(ParticipationError):
    """Raised when the event has no free seat for a registration or approval."""

    code = "capacity_exceeded"
    default_message = _("This event is full.")


class EventNotAcceptingSignupsError(ParticipationError):
    """Raised when registering for an event that is not published or already over."""

    code = "event_not_accepting_signups"
    default_message = _("This event is not accepting registrations.")


class EventIsFreeError(ParticipationError):
    """Raised when starting a checkout for an event without a ticket price."""

    code = "event_is_free"
    default_message = _("This event is free, no payment is required.")


class InvalidStatusTransitionError(ParticipationError):
    """Raised when the requested status change is not allowed from the current status."""

    code = "invalid_status_transition"
    default_message = _("This status change is not allowed.")


class ParticipantNotFoundError(ParticipationError):
    """Raised when a participation record does not exist."""

    code = "participant_not_found"
    default_message = _("Participant not found.")


class PaymentGatewayError(ParticipationError):
    """Raised when the payment processor could not create a checkout."""

    code = "payment_gateway_error"
    default_message = _("The payment provider is unavailable. Please try again later.")


class RefundFailedError(ParticipationError):
    """Raised when a refund could not be issued. The participant's status is left unchanged."""

    code = "refund_failed"
    default_message = _("The refund could not be issued. Manual intervention is required.")
