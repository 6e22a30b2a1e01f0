"""Event admin controllers package."""

from .participants import EventAdminParticipantsController
from .questions import EventAdminQuestionsController
from .requests import EventAdminRequestsController

EVENT_ADMIN_CONTROLLERS: list[type] = [
    EventAdminRequestsController,
    EventAdminParticipantsController,
    EventAdminQuestionsController,
]

__all__ = [
    "EventAdminParticipantsController",
    "EventAdminQuestionsController",
    "EventAdminRequestsController",
    "EVENT_ADMIN_CONTROLLERS",
]
