from uuid import UUID

from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route
from ninja_jwt.authentication import JWTAuth

from common.throttling import WriteThrottle
from events import models, schema
from events.controllers.permissions import EventAdminPermission

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=JWTAuth(),
    permissions=[EventAdminPermission],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminQuestionsController(EventAdminBaseController):
    """Registration question management."""

    @route.get(
        "/questions",
        url_name="admin_list_registration_questions",
        response=list[schema.RegistrationQuestionSchema],
    )
    def list_questions(self, event_id: UUID) -> list[models.RegistrationQuestion]:
        """List the event's registration questions in display order."""
        event = self.get_one(event_id)
        return list(event.registration_questions.all())

    @route.post(
        "/questions",
        url_name="create_registration_question",
        response={201: schema.RegistrationQuestionSchema},
    )
    def create_question(
        self, event_id: UUID, payload: schema.RegistrationQuestionCreateSchema
    ) -> tuple[int, models.RegistrationQuestion]:
        """Add a question. Only affects registrations submitted afterwards."""
        event = self.get_one(event_id)
        question = models.RegistrationQuestion.objects.create(event=event, **payload.model_dump())
        return 201, question

    @route.delete(
        "/questions/{uuid:question_id}",
        url_name="delete_registration_question",
        response={204: None},
    )
    def delete_question(self, event_id: UUID, question_id: UUID) -> tuple[int, None]:
        """Delete a question together with the answers already given to it."""
        event = self.get_one(event_id)
        question = get_object_or_404(models.RegistrationQuestion, pk=question_id, event=event)
        question.delete()
        return 204, None
