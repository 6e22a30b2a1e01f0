import typing as t

from django.conf import settings
from django.db import models

from common.models import TimeStampedModel


class ParticipantQuerySet(models.QuerySet["Participant"]):
    """Custom queryset for Participant model."""

    def for_event(self, event_id: t.Any) -> t.Self:
        """Participants of a single event."""
        return self.filter(event_id=event_id)

    def counting(self) -> t.Self:
        """Participants occupying a seat."""
        return self.filter(status__in=Participant.COUNTING_STATUSES)

    def approved(self) -> t.Self:
        """Approved participants."""
        return self.filter(status=Participant.Status.APPROVED)

    def pending(self) -> t.Self:
        """Requests awaiting an administrator decision."""
        return self.filter(status=Participant.Status.PENDING)

    def with_user(self) -> t.Self:
        """Select the related user."""
        return self.select_related("user")

    def with_event(self) -> t.Self:
        """Select the related event."""
        return self.select_related("event")

    def with_answers(self) -> t.Self:
        """Prefetch registration answers and their questions."""
        return self.prefetch_related("answers__question")


class ParticipantManager(models.Manager["Participant"]):
    """Custom manager for Participant."""

    def get_queryset(self) -> ParticipantQuerySet:
        """Get base queryset."""
        return ParticipantQuerySet(self.model, using=self._db)

    def for_event(self, event_id: t.Any) -> ParticipantQuerySet:
        """Returns the participants of an event."""
        return self.get_queryset().for_event(event_id)

    def counting(self) -> ParticipantQuerySet:
        """Returns participants occupying a seat."""
        return self.get_queryset().counting()

    def approved(self) -> ParticipantQuerySet:
        """Returns approved participants."""
        return self.get_queryset().approved()

    def pending(self) -> ParticipantQuerySet:
        """Returns pending requests."""
        return self.get_queryset().pending()

    def with_user(self) -> ParticipantQuerySet:
        """Returns a queryset with the user selected."""
        return self.get_queryset().with_user()

    def with_answers(self) -> ParticipantQuerySet:
        """Returns a queryset with the answers prefetched."""
        return self.get_queryset().with_answers()


class Participant(TimeStampedModel):
    """A user's request to join an event, and where that request stands."""

    class Status(models.TextChoices):
        PENDING_PAYMENT = "pending_payment", "Pending payment"
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"
        WAITLISTED = "waitlisted", "Waitlisted"

    # waitlisted does not hold a seat
    COUNTING_STATUSES: t.ClassVar[tuple[str, ...]] = (
        Status.PENDING_PAYMENT,
        Status.PENDING,
        Status.APPROVED,
    )

    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="participants")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="participations")
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING, db_index=True)

    objects = ParticipantManager()

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "user"],
                name="unique_event_participant",
            )
        ]

    def __str__(self) -> str:
        return f"Participant: {self.user_id} -> {self.event_id} ({self.status})"

    @property
    def is_counting(self) -> bool:
        """Whether this record occupies a seat."""
        return self.status in self.COUNTING_STATUSES
