"""Value types returned by the participation engine."""

import uuid

from pydantic import BaseModel, ConfigDict

from events.models import Participant


class CapacitySnapshot(BaseModel):
    """Seat usage of an event at a point in time. Computed on every read, never stored."""

    capacity: int | None
    is_unlimited: bool
    counting: int
    approved: int
    spots_left: int | None


class Disclosure(BaseModel):
    """Which status-dependent parts of an event a viewer may see."""

    location_visible: bool
    roster_visible: bool
    private_details_visible: bool


class SubmittedAnswer(BaseModel):
    question_id: uuid.UUID
    answer_value: str = ""


class RegistrationResult(BaseModel):
    """Outcome of a registration: the new record, plus a checkout URL for paid events."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    participant: Participant
    checkout_url: str | None = None


class ApproveAllResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    approved: list[Participant]
    remaining_pending_ids: list[uuid.UUID]
