from uuid import UUID

from django.db.models import QuerySet
from ninja import Query
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching
from ninja_jwt.authentication import JWTAuth

from common.throttling import UserDefaultThrottle, WriteThrottle
from events import filters, models, schema
from events.controllers.permissions import EventAdminPermission
from events.service import participation

from .base import EventAdminBaseController


@api_controller(
    "/event-admin/{uuid:event_id}",
    auth=JWTAuth(),
    permissions=[EventAdminPermission],
    tags=["Event Admin"],
    throttle=WriteThrottle(),
)
class EventAdminParticipantsController(EventAdminBaseController):
    """Participant management for a single event."""

    @route.get(
        "/participants",
        url_name="list_participants",
        response=PaginatedResponseSchema[schema.ParticipantAdminSchema],
        throttle=UserDefaultThrottle(),
    )
    @paginate(PageNumberPaginationExtra, page_size=50)
    @searching(Searching, search_fields=["user__email", "user__first_name", "user__last_name", "user__preferred_name"])
    def list_participants(
        self,
        event_id: UUID,
        params: filters.ParticipantFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> QuerySet[models.Participant]:
        """List the event's participation records in submission order, optionally by status."""
        event = self.get_one(event_id)
        qs = participation.store.list_by_event(event).select_related("payment").with_answers()
        return params.filter(qs)

    @route.post(
        "/participants/{uuid:participant_id}/status",
        url_name="update_participant_status",
        response=schema.ParticipantAdminSchema,
    )
    def update_participant_status(
        self, event_id: UUID, participant_id: UUID, payload: schema.StatusUpdateSchema
    ) -> models.Participant:
        """Approve, reject, waitlist or re-open a request.

        Allowed moves: pending to approved/rejected/waitlisted, waitlisted to approved/rejected,
        approved to pending/waitlisted, rejected to pending/waitlisted/approved. Approving fails with
        409 when the event is full. Rejecting a paid participant refunds the payment first; if the
        refund fails nothing changes and 502 is returned.
        """
        event = self.get_one(event_id)
        participant = participation.ParticipationManager(event).change_status(participant_id, payload.status)
        return self._reload(participant)

    @route.post(
        "/participants/approve-all",
        url_name="approve_all_participants",
        response=schema.ApproveAllResponseSchema,
    )
    def approve_all(self, event_id: UUID) -> schema.ApproveAllResponseSchema:
        """Approve pending requests, oldest first, until the event is full."""
        event = self.get_one(event_id)
        result = participation.ParticipationManager(event).approve_all()
        return schema.ApproveAllResponseSchema(
            approved=[schema.ParticipantAdminSchema.from_orm(self._reload(p)) for p in result.approved],
            remaining_pending_ids=result.remaining_pending_ids,
        )

    @route.get(
        "/capacity",
        url_name="event_capacity",
        response=schema.CapacitySnapshotSchema,
        throttle=UserDefaultThrottle(),
    )
    def get_capacity(self, event_id: UUID) -> participation.CapacitySnapshot:
        """Current seat usage: counting records, approved records and spots left."""
        event = self.get_one(event_id)
        return participation.capacity.snapshot(event)

    @staticmethod
    def _reload(participant: models.Participant) -> models.Participant:
        return (
            models.Participant.objects.select_related("user", "payment")
            .with_answers()
            .get(pk=participant.pk)
        )
