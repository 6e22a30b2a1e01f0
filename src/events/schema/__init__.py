"""Events schema package."""

from .event import CapacitySnapshotSchema, EventListSchema, EventViewSchema
from .participant import (
    AnswerInSchema,
    AnswerSchema,
    ApproveAllResponseSchema,
    MyParticipationSchema,
    ParticipantAdminSchema,
    ParticipantSchema,
    PaymentSummarySchema,
    PendingRequestSchema,
    RegistrationResponseSchema,
    RegistrationSchema,
    StatusUpdateSchema,
)
from .registration import RegistrationQuestionCreateSchema, RegistrationQuestionSchema

__all__ = [
    "AnswerInSchema",
    "AnswerSchema",
    "ApproveAllResponseSchema",
    "CapacitySnapshotSchema",
    "EventListSchema",
    "EventViewSchema",
    "MyParticipationSchema",
    "ParticipantAdminSchema",
    "ParticipantSchema",
    "PaymentSummarySchema",
    "PendingRequestSchema",
    "RegistrationQuestionCreateSchema",
    "RegistrationQuestionSchema",
    "RegistrationResponseSchema",
    "RegistrationSchema",
    "StatusUpdateSchema",
]
