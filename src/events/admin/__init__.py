"""Admin interface for events app."""

from .event import EventAdmin, RegistrationQuestionInline
from .participant import ParticipantAdmin, PaymentAdmin

__all__ = ["EventAdmin", "ParticipantAdmin", "PaymentAdmin", "RegistrationQuestionInline"]
