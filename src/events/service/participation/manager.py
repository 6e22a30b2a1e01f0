"""ParticipationManager: the approval state machine."""

import typing as t

import structlog
from django.db import transaction

from accounts.models import GatherlyUser
from events.exceptions import (
    DuplicateRegistrationError,
    EventNotAcceptingSignupsError,
    InvalidStatusTransitionError,
)
from events.models import Event, Participant, Payment
from events.service import stripe_service

from . import answers as answers_service
from . import capacity, store
from .types import ApproveAllResult, SubmittedAnswer

logger = structlog.get_logger(__name__)

Status = Participant.Status

# Moves an administrator may make. pending_payment is only ever moved by the payment gate.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    Status.PENDING: frozenset({Status.APPROVED, Status.REJECTED, Status.WAITLISTED}),
    Status.WAITLISTED: frozenset({Status.APPROVED, Status.REJECTED}),
    Status.APPROVED: frozenset({Status.PENDING, Status.WAITLISTED}),
    Status.REJECTED: frozenset({Status.PENDING, Status.WAITLISTED, Status.APPROVED}),
    Status.PENDING_PAYMENT: frozenset(),
}


def is_allowed_transition(current: str, new: str) -> bool:
    """Whether an administrator may move a record from ``current`` to ``new``."""
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


class ParticipationManager:
    """Handles registrations and status changes for one event.

    Every mutating method re-reads the event under a row lock, so capacity
    checks and the writes that depend on them are atomic per event.
    """

    def __init__(self, event: Event) -> None:
        """Initialize the ParticipationManager."""
        self.event = event

    def open_registration(
        self,
        user: GatherlyUser,
        answers: t.Sequence[SubmittedAnswer],
        initial_status: Participant.Status,
    ) -> Participant:
        """Create a record with its answers. Must run inside an atomic block holding the event lock.

        Raises:
            EventNotAcceptingSignupsError: the event is not published or already over.
            DuplicateRegistrationError: the user already has a record for the event.
            CapacityExceededError: no seat is left.
            DjangoValidationError: the answers are invalid.
        """
        event = self.event
        if not event.accepts_signups:
            raise EventNotAcceptingSignupsError()
        if store.get(event, user) is not None:
            raise DuplicateRegistrationError()
        capacity.assert_can_register(event)
        values = answers_service.validate_answers(event, answers)

        participant = store.create(event, user, initial_status)
        answers_service.save_answers(participant, values)
        logger.info(
            "participant_registered",
            participant_id=str(participant.pk),
            event_id=str(event.pk),
            user_id=str(user.pk),
            status=participant.status,
            answer_count=len(values),
        )
        return participant

    @transaction.atomic
    def register(self, user: GatherlyUser, answers: t.Sequence[SubmittedAnswer] = ()) -> Participant:
        """Register a user for a free event.

        The record starts as pending and is approved right away when the event
        does not require approval and a seat is available.
        """
        self.event = capacity.lock_event(self.event.pk)
        participant = self.open_registration(user, answers, Participant.Status.PENDING)
        return self.auto_approve(participant)

    def auto_approve(self, participant: Participant) -> Participant:
        """Approve a pending record of an event that does not require approval, if capacity allows."""
        if self.event.requires_approval or participant.status != Participant.Status.PENDING:
            return participant
        if not capacity.can_approve(self.event):
            logger.info(
                "participant_auto_approval_skipped",
                participant_id=str(participant.pk),
                event_id=str(self.event.pk),
                reason="capacity",
            )
            return participant
        return store.update_status(participant.pk, Participant.Status.APPROVED)

    @transaction.atomic
    def change_status(self, participant_id: t.Any, new_status: Participant.Status | str) -> Participant:
        """Move a record to a new status on behalf of an administrator.

        Raises:
            ParticipantNotFoundError: no such record for this event.
            InvalidStatusTransitionError: the move is not in the transition table.
            CapacityExceededError: approving would exceed capacity.
            RefundFailedError: rejecting a paid record failed to refund; nothing changes.
        """
        self.event = capacity.lock_event(self.event.pk)
        participant = store.get_for_update(self.event, participant_id)
        new_status = Participant.Status(new_status)
        if not is_allowed_transition(participant.status, new_status):
            logger.warning(
                "participant_invalid_transition",
                participant_id=str(participant.pk),
                current_status=participant.status,
                requested_status=new_status,
            )
            raise InvalidStatusTransitionError(
                f"Cannot move a participant from '{participant.status}' to '{new_status}'."
            )

        if new_status == Participant.Status.APPROVED:
            capacity.assert_can_approve(self.event)

        if new_status == Participant.Status.REJECTED:
            self._refund_if_paid(participant)

        return store.update_status(participant.pk, new_status)

    @transaction.atomic
    def approve_all(self) -> ApproveAllResult:
        """Approve pending records in submission order until the event is full."""
        self.event = capacity.lock_event(self.event.pk)
        pending = list(store.list_by_event(self.event, Participant.Status.PENDING).select_for_update(of=("self",)))
        approved: list[Participant] = []
        for participant in pending:
            if not capacity.can_approve(self.event):
                break
            approved.append(store.update_status(participant.pk, Participant.Status.APPROVED))
        approved_ids = {p.pk for p in approved}
        remaining = [p.pk for p in pending if p.pk not in approved_ids]
        logger.info(
            "participants_bulk_approved",
            event_id=str(self.event.pk),
            approved_count=len(approved),
            remaining_count=len(remaining),
        )
        return ApproveAllResult(approved=approved, remaining_pending_ids=remaining)

    def _refund_if_paid(self, participant: Participant) -> None:
        payment = (
            Payment.objects.select_for_update()
            .filter(participant=participant, status=Payment.PaymentStatus.SUCCEEDED)
            .first()
        )
        if payment is not None:
            stripe_service.refund_payment(payment)
