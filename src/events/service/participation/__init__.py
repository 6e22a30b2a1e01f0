"""The participation engine: registration, capacity, approvals, payments and disclosure."""

import typing as t

from accounts.models import GatherlyUser
from events.models import Event

from . import capacity, store
from .disclosure import get_event_view, resolve_disclosure
from .manager import ALLOWED_TRANSITIONS, ParticipationManager, is_allowed_transition
from .payment_gate import (
    abandon_expired_checkouts,
    initiate_checkout,
    on_charge_refunded,
    on_payment_abandoned,
    on_payment_confirmed,
)
from .types import ApproveAllResult, CapacitySnapshot, Disclosure, RegistrationResult, SubmittedAnswer


def register(event: Event, user: GatherlyUser, answers: t.Sequence[SubmittedAnswer] = ()) -> RegistrationResult:
    """Register a user for an event, routing paid events through checkout."""
    if event.is_paid:
        participant, checkout_url = initiate_checkout(event, user, answers)
        return RegistrationResult(participant=participant, checkout_url=checkout_url)
    return RegistrationResult(participant=ParticipationManager(event).register(user, answers))


__all__ = [
    "ALLOWED_TRANSITIONS",
    "ApproveAllResult",
    "CapacitySnapshot",
    "Disclosure",
    "ParticipationManager",
    "RegistrationResult",
    "SubmittedAnswer",
    "abandon_expired_checkouts",
    "capacity",
    "get_event_view",
    "initiate_checkout",
    "is_allowed_transition",
    "on_charge_refunded",
    "on_payment_abandoned",
    "on_payment_confirmed",
    "register",
    "resolve_disclosure",
    "store",
]
