from uuid import UUID

from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from common.throttling import RegistrationThrottle
from events import models, schema
from events.service import participation
from events.service.participation import SubmittedAnswer

from .base import EventPublicBaseController


@api_controller("/events", auth=JWTAuth(), tags=["Events"])
class EventPublicAttendanceController(EventPublicBaseController):
    """Registration and participation status."""

    @route.post(
        "/{uuid:event_id}/register",
        url_name="register_for_event",
        response={201: schema.RegistrationResponseSchema},
        throttle=RegistrationThrottle(),
    )
    def register(
        self, event_id: UUID, payload: schema.RegistrationSchema
    ) -> tuple[int, schema.RegistrationResponseSchema]:
        """Register for an event, answering its registration questions.

        Free events create the participation right away: it is approved immediately when the
        event does not require approval and a seat is left, otherwise it waits for an admin.
        Paid events reserve a seat as `pending_payment` and return a Stripe `checkout_url`;
        the seat is released if the checkout is not completed in time.
        """
        event = self.get_one(event_id)
        answers = [SubmittedAnswer(question_id=a.question_id, answer_value=a.answer_value) for a in payload.answers]
        result = participation.register(event, self.user(), answers)
        return 201, schema.RegistrationResponseSchema(
            participant=schema.ParticipantSchema.from_orm(result.participant),
            checkout_url=result.checkout_url,
        )

    @route.get("/{uuid:event_id}/my-status", url_name="get_my_event_status", response=schema.ParticipantSchema)
    def get_my_status(self, event_id: UUID) -> models.Participant:
        """The authenticated user's participation in this event. 404 if they never registered."""
        event = self.get_one(event_id)
        return get_object_or_404(models.Participant, event=event, user=self.user())
