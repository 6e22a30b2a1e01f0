import typing as t
from datetime import datetime

from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from accounts.models import GatherlyUser
from common.models import TimeStampedModel


class EventQuerySet(models.QuerySet["Event"]):
    def with_host(self) -> t.Self:
        """Select the host as well."""
        return self.select_related("host")

    def upcoming(self) -> t.Self:
        """Events that have not ended yet."""
        now = timezone.now()
        return self.exclude(status=Event.EventStatus.PAST).filter(
            Q(end__gte=now) | Q(end__isnull=True, start__gte=now)
        )

    def finished(self) -> t.Self:
        """Published events whose end (or start, when there is no end) lies in the past."""
        now = timezone.now()
        return self.filter(status=Event.EventStatus.PUBLISHED).filter(
            Q(end__lt=now) | Q(end__isnull=True, start__lt=now)
        )

    def for_user(self, user: GatherlyUser | AnonymousUser, include_past: bool = False) -> t.Self:
        """Events the user is allowed to see.

        Staff see everything. Everybody else sees published public events, plus
        hidden events they already participate in.
        """
        qs = self.with_host()
        if not include_past:
            qs = qs.upcoming()

        if user.is_staff or user.is_superuser:
            return qs

        visible = Q(status=Event.EventStatus.PUBLISHED, visibility=Event.Visibility.PUBLIC)
        if user.is_anonymous:
            return qs.filter(visible)

        participating = Q(participants__user=user) & ~Q(status=Event.EventStatus.DRAFT)
        return qs.filter(visible | participating).distinct()


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        """Get base queryset for events."""
        return EventQuerySet(self.model, using=self._db)

    def with_host(self) -> EventQuerySet:
        """Returns a queryset selecting the host."""
        return self.get_queryset().with_host()

    def upcoming(self) -> EventQuerySet:
        """Returns a queryset of events that have not ended yet."""
        return self.get_queryset().upcoming()

    def finished(self) -> EventQuerySet:
        """Returns published events that are over."""
        return self.get_queryset().finished()

    def for_user(self, user: GatherlyUser | AnonymousUser, include_past: bool = False) -> EventQuerySet:
        """Returns the events visible to the user."""
        return self.get_queryset().for_user(user, include_past=include_past)


class Event(TimeStampedModel):
    class EventStatus(models.TextChoices):
        DRAFT = "draft", "Draft"
        PUBLISHED = "published", "Published"
        PAST = "past", "Past"

    class Visibility(models.TextChoices):
        PUBLIC = "public", "Public"
        HIDDEN = "hidden", "Hidden"

    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True, default="")
    start = models.DateTimeField(db_index=True)
    end = models.DateTimeField(null=True, blank=True, db_index=True)
    location = models.CharField(max_length=512, blank=True, default="")
    private_details = models.TextField(
        blank=True, default="", help_text="Details shown to approved participants only (address, door code, ...)"
    )
    cover_image_url = models.URLField(blank=True, default="")
    host = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name="hosted_events"
    )
    capacity = models.PositiveIntegerField(null=True, blank=True)
    is_unlimited_capacity = models.BooleanField(default=False)
    requires_approval = models.BooleanField(default=True)
    hide_location_until_approved = models.BooleanField(default=False)
    show_participants = models.BooleanField(default=False)
    ticket_price = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    currency = models.CharField(max_length=3, default=settings.DEFAULT_CURRENCY, help_text="ISO 4217 currency code")
    status = models.CharField(
        max_length=20, choices=EventStatus.choices, default=EventStatus.DRAFT, db_index=True
    )
    visibility = models.CharField(
        max_length=20, choices=Visibility.choices, default=Visibility.PUBLIC, db_index=True
    )

    objects = EventManager()

    class Meta:
        ordering = ["start"]

    def __str__(self) -> str:
        return self.name

    def clean(self) -> None:
        """Validate capacity and dates."""
        super().clean()
        errors: dict[str, str] = {}
        if not self.is_unlimited_capacity and (self.capacity is None or self.capacity <= 0):
            errors["capacity"] = "Capacity must be a positive number unless the event has unlimited capacity."
        if self.end and self.start and self.end < self.start:
            errors["end"] = "The end of an event cannot precede its start."
        if errors:
            raise DjangoValidationError(errors)

    @property
    def ends_at(self) -> datetime:
        """The moment after which the event is over."""
        return self.end or self.start

    @property
    def is_past(self) -> bool:
        """Whether the event is over."""
        return self.status == Event.EventStatus.PAST or self.ends_at < timezone.now()

    @property
    def accepts_signups(self) -> bool:
        """Only published, upcoming events accept registrations."""
        return self.status == Event.EventStatus.PUBLISHED and not self.is_past

    @property
    def is_paid(self) -> bool:
        """Whether registering requires a ticket payment."""
        return self.ticket_price > 0
