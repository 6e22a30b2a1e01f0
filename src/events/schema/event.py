"""Event schemas."""

from decimal import Decimal
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime

from accounts.schema import MinimalGatherlyUserSchema
from events.models import Event, Participant


class EventListSchema(ModelSchema):
    """An event as shown in listings. Status-dependent fields are left out."""

    id: UUID
    start: AwareDatetime
    end: AwareDatetime | None = None
    status: Event.EventStatus
    is_paid: bool

    class Meta:
        model = Event
        fields = [
            "id",
            "name",
            "description",
            "start",
            "end",
            "cover_image_url",
            "ticket_price",
            "currency",
            "requires_approval",
            "is_unlimited_capacity",
            "capacity",
            "status",
        ]


class EventViewSchema(Schema):
    """An event as seen by a specific viewer, with status-dependent fields resolved."""

    id: UUID
    name: str
    description: str
    start: AwareDatetime
    end: AwareDatetime | None = None
    cover_image_url: str
    host: MinimalGatherlyUserSchema | None = None
    location: str
    location_hidden: bool
    private_details: str | None = None
    ticket_price: Decimal
    currency: str
    is_paid: bool
    requires_approval: bool
    is_unlimited_capacity: bool
    capacity: int | None = None
    spots_left: int | None = None
    accepts_signups: bool
    participation_status: Participant.Status | None = None
    participants: list[MinimalGatherlyUserSchema] | None = None


class CapacitySnapshotSchema(Schema):
    capacity: int | None = None
    is_unlimited: bool
    counting: int
    approved: int
    spots_left: int | None = None
