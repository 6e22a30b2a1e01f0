from uuid import UUID

from ninja_extra import api_controller, route

from common.authentication import OptionalAuth
from events import models, schema
from events.service import participation

from .base import EventPublicBaseController


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventPublicDetailsController(EventPublicBaseController):
    """Event detail endpoints."""

    @route.get("/{uuid:event_id}", url_name="get_event", response=schema.EventViewSchema)
    def get_event(self, event_id: UUID) -> schema.EventViewSchema:
        """Retrieve an event as the caller may see it.

        The location, the private details and the participant roster depend on the
        caller's participation status and are recomputed on every request.
        """
        return participation.get_event_view(event_id, self.maybe_user())

    @route.get(
        "/{uuid:event_id}/questions",
        url_name="list_registration_questions",
        response=list[schema.RegistrationQuestionSchema],
    )
    def list_questions(self, event_id: UUID) -> list[models.RegistrationQuestion]:
        """The questions to answer when registering for this event."""
        event = self.get_one(event_id)
        return list(event.registration_questions.all())
