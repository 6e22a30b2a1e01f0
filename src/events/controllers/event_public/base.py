import typing as t
from uuid import UUID

from common.controllers import UserAwareController
from events import models
from events.service.participation.disclosure import viewable_events


class EventPublicBaseController(UserAwareController):
    """Base controller for public event endpoints.

    Subclasses should be decorated with @api_controller to register routes.
    """

    def get_queryset(self, include_past: bool = False) -> models.event.EventQuerySet:
        """Events listed to the current user."""
        return models.Event.objects.for_user(self.maybe_user(), include_past=include_past)

    def get_one(self, event_id: UUID) -> models.Event:
        """An event the current user may open by id, listed or not."""
        return t.cast(models.Event, self.get_object_or_exception(viewable_events(self.maybe_user()), pk=event_id))
