"""Public event controllers package."""

from .attendance import EventPublicAttendanceController
from .details import EventPublicDetailsController
from .discovery import EventPublicDiscoveryController

EVENT_PUBLIC_CONTROLLERS: list[type] = [
    EventPublicDiscoveryController,
    EventPublicDetailsController,
    EventPublicAttendanceController,
]

__all__ = [
    "EventPublicAttendanceController",
    "EventPublicDetailsController",
    "EventPublicDiscoveryController",
    "EVENT_PUBLIC_CONTROLLERS",
]
