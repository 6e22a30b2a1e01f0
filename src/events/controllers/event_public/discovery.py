from django.db.models import QuerySet
from ninja_extra import api_controller, route
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching
from ninja_jwt.authentication import JWTAuth

from common.authentication import OptionalAuth
from events import models, schema

from .base import EventPublicBaseController


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventPublicDiscoveryController(EventPublicBaseController):
    """Event listing endpoints."""

    @route.get("/", url_name="list_events", response=PaginatedResponseSchema[schema.EventListSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    @searching(Searching, search_fields=["name", "description"])
    def list_events(self) -> QuerySet[models.Event]:
        """Browse upcoming events.

        Anonymous users see published public events; signed-in users also see hidden
        events they already joined. Ordered by start date.
        """
        return self.get_queryset().order_by("start")

    @route.get(
        "/mine",
        url_name="my_participations",
        response=PaginatedResponseSchema[schema.MyParticipationSchema],
        auth=JWTAuth(),
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    def my_participations(self) -> QuerySet[models.Participant]:
        """List every event the authenticated user registered for, with the current status."""
        return models.Participant.objects.filter(user=self.user()).with_event().order_by("-event__start")
