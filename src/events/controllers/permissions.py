from django.http import HttpRequest
from ninja_extra import ControllerBase
from ninja_extra.permissions import BasePermission

from events import models


class EventAdminPermission(BasePermission):
    """Staff manage every event; hosts manage their own."""

    def has_permission(self, request: HttpRequest, controller: ControllerBase) -> bool:
        """Object-level checks decide. Anonymous users never get this far (JWT auth)."""
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(
        self,
        request: HttpRequest,
        controller: ControllerBase,
        obj: models.Event,
    ) -> bool:
        """Can manage the participants of this event."""
        user = request.user
        if user.is_staff or user.is_superuser:
            return True
        return obj.host_id is not None and obj.host_id == user.id
