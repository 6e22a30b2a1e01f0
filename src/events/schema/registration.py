"""Registration question schemas."""

from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import Field, model_validator

from common.schema import StrippedString
from events.models import RegistrationQuestion


class RegistrationQuestionSchema(ModelSchema):
    id: UUID
    question_type: RegistrationQuestion.QuestionType
    options: list[str]

    class Meta:
        model = RegistrationQuestion
        fields = ["id", "question_text", "question_type", "is_required", "options", "display_order"]


class RegistrationQuestionCreateSchema(Schema):
    question_text: StrippedString = Field(..., min_length=1, max_length=500)
    question_type: RegistrationQuestion.QuestionType = RegistrationQuestion.QuestionType.TEXT
    is_required: bool = False
    options: list[StrippedString] = Field(default_factory=list)
    display_order: int = Field(0, ge=0)

    @model_validator(mode="after")
    def validate_options(self) -> "RegistrationQuestionCreateSchema":
        """Select questions need options; other types must not have any."""
        if self.question_type == RegistrationQuestion.QuestionType.SELECT and not self.options:
            raise ValueError("Select questions require at least one option.")
        if self.question_type != RegistrationQuestion.QuestionType.SELECT and self.options:
            raise ValueError("Only select questions can have options.")
        return self
