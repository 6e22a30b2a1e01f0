"""Capacity accounting.

Counts are always read from the database. Callers that act on a count must hold
the event row lock (see ``lock_event``) inside ``transaction.atomic`` so that
check-then-write is atomic per event.
"""

import typing as t

from events.exceptions import CapacityExceededError
from events.models import Event, Participant

from .types import CapacitySnapshot


def lock_event(event_id: t.Any) -> Event:
    """Re-read the event holding a row lock for the rest of the transaction."""
    return Event.objects.select_for_update().get(pk=event_id)


def count_in_counting_states(event: Event) -> int:
    """Records occupying a seat: pending_payment, pending and approved."""
    return Participant.objects.for_event(event.pk).counting().count()


def count_approved(event: Event) -> int:
    """Approved records."""
    return Participant.objects.for_event(event.pk).approved().count()


def has_capacity(event: Event) -> bool:
    """Whether a new registration fits."""
    if event.is_unlimited_capacity:
        return True
    return count_in_counting_states(event) < t.cast(int, event.capacity)


def can_approve(event: Event) -> bool:
    """Whether one more record can be approved."""
    if event.is_unlimited_capacity:
        return True
    return count_approved(event) < t.cast(int, event.capacity)


def assert_can_register(event: Event) -> None:
    """Raise ``CapacityExceededError`` if a new registration does not fit."""
    if not has_capacity(event):
        raise CapacityExceededError()


def assert_can_approve(event: Event) -> None:
    """Raise ``CapacityExceededError`` if the approved count already reached capacity."""
    if not can_approve(event):
        raise CapacityExceededError()


def snapshot(event: Event) -> CapacitySnapshot:
    """Current seat usage of an event."""
    counts = Participant.objects.for_event(event.pk)
    counting = counts.counting().count()
    approved = counts.approved().count()
    if event.is_unlimited_capacity:
        return CapacitySnapshot(
            capacity=None, is_unlimited=True, counting=counting, approved=approved, spots_left=None
        )
    capacity = t.cast(int, event.capacity)
    return CapacitySnapshot(
        capacity=capacity,
        is_unlimited=False,
        counting=counting,
        approved=approved,
        spots_left=max(capacity - counting, 0),
    )
