"""Participation schemas."""

from decimal import Decimal
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime, Field

from accounts.schema import MinimalGatherlyUserSchema
from events.models import Participant, Payment, RegistrationAnswer

from .event import EventListSchema


class AnswerInSchema(Schema):
    question_id: UUID
    answer_value: str = Field("", max_length=5000)


class RegistrationSchema(Schema):
    answers: list[AnswerInSchema] = Field(default_factory=list)


class ParticipantSchema(ModelSchema):
    """A user's own participation record."""

    id: UUID
    event_id: UUID
    status: Participant.Status
    created_at: AwareDatetime
    updated_at: AwareDatetime

    class Meta:
        model = Participant
        fields = ["id", "status", "created_at", "updated_at"]


class RegistrationResponseSchema(Schema):
    participant: ParticipantSchema
    checkout_url: str | None = None


class MyParticipationSchema(ModelSchema):
    id: UUID
    status: Participant.Status
    event: EventListSchema
    created_at: AwareDatetime

    class Meta:
        model = Participant
        fields = ["id", "status", "created_at"]


class AnswerSchema(ModelSchema):
    question_id: UUID
    question_text: str

    class Meta:
        model = RegistrationAnswer
        fields = ["answer_value"]

    @staticmethod
    def resolve_question_text(obj: RegistrationAnswer) -> str:
        """The text of the answered question."""
        return obj.question.question_text


class PaymentSummarySchema(ModelSchema):
    status: Payment.PaymentStatus
    amount: Decimal

    class Meta:
        model = Payment
        fields = ["status", "amount", "currency", "refunded_at"]


class ParticipantAdminSchema(ModelSchema):
    """A participation record as administrators see it."""

    id: UUID
    event_id: UUID
    user: MinimalGatherlyUserSchema
    email: str
    status: Participant.Status
    created_at: AwareDatetime
    updated_at: AwareDatetime
    answers: list[AnswerSchema]
    payment: PaymentSummarySchema | None = None

    class Meta:
        model = Participant
        fields = ["id", "status", "created_at", "updated_at"]

    @staticmethod
    def resolve_email(obj: Participant) -> str:
        """The participant's email."""
        return obj.user.email

    @staticmethod
    def resolve_answers(obj: Participant) -> list[RegistrationAnswer]:
        """Answers in question order."""
        return sorted(obj.answers.all(), key=lambda a: (a.question.display_order, a.question.created_at))

    @staticmethod
    def resolve_payment(obj: Participant) -> Payment | None:
        """The payment, for paid registrations."""
        return getattr(obj, "payment", None)


class PendingRequestSchema(ParticipantAdminSchema):
    event: EventListSchema


class StatusUpdateSchema(Schema):
    status: Participant.Status


class ApproveAllResponseSchema(Schema):
    approved: list[ParticipantAdminSchema]
    remaining_pending_ids: list[UUID]
