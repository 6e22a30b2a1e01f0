from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching
from ninja_jwt.authentication import JWTAuth

from common.throttling import UserDefaultThrottle
from events import models, schema

from .base import EventAdminBaseController


@api_controller("/event-admin", auth=JWTAuth(), tags=["Event Admin"], throttle=UserDefaultThrottle())
class EventAdminRequestsController(EventAdminBaseController):
    """Pending requests across every event the caller administers."""

    @route.get(
        "/requests",
        url_name="list_pending_requests",
        response=PaginatedResponseSchema[schema.PendingRequestSchema],
    )
    @paginate(PageNumberPaginationExtra, page_size=50)
    @searching(Searching, search_fields=["user__email", "user__first_name", "user__last_name", "event__name"])
    def list_pending_requests(self) -> QuerySet[models.Participant]:
        """List requests waiting for a decision, oldest first, across all managed events."""
        return (
            models.Participant.objects.pending()
            .filter(event__in=self.managed_events())
            .select_related("user", "event", "payment")
            .with_answers()
            .order_by("created_at")
        )
