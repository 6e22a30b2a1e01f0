# src/events/filters.py

from ninja import FilterSchema

from events.models import Participant


class ParticipantFilterSchema(FilterSchema):
    status: Participant.Status | None = None
