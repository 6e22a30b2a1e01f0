from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models

from common.models import TimeStampedModel


class RegistrationQuestion(TimeStampedModel):
    """A question an event asks at registration time."""

    class QuestionType(models.TextChoices):
        TEXT = "text", "Text"
        TEXTAREA = "textarea", "Text area"
        SELECT = "select", "Select"
        CHECKBOX = "checkbox", "Checkbox"

    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="registration_questions")
    question_text = models.CharField(max_length=500)
    question_type = models.CharField(max_length=20, choices=QuestionType.choices, default=QuestionType.TEXT)
    is_required = models.BooleanField(default=False)
    options = models.JSONField(default=list, blank=True, help_text="Choices for select questions")
    display_order = models.PositiveIntegerField(default=0, db_index=True)

    class Meta:
        ordering = ["display_order", "created_at"]

    def __str__(self) -> str:
        return self.question_text

    def clean(self) -> None:
        """Select questions need a non-empty list of string options."""
        super().clean()
        if not isinstance(self.options, list) or not all(isinstance(o, str) for o in self.options):
            raise DjangoValidationError({"options": "Options must be a list of strings."})
        if self.question_type == self.QuestionType.SELECT and not self.options:
            raise DjangoValidationError({"options": "Select questions require at least one option."})


class RegistrationAnswer(TimeStampedModel):
    """A participant's answer to a registration question. Written once, at submission time."""

    participant = models.ForeignKey("events.Participant", on_delete=models.CASCADE, related_name="answers")
    question = models.ForeignKey(RegistrationQuestion, on_delete=models.CASCADE, related_name="answers")
    answer_value = models.TextField(blank=True, default="")

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["participant", "question"],
                name="unique_answer_per_participant_question",
            )
        ]

    def __str__(self) -> str:
        return f"Answer: {self.participant_id} -> {self.question_id}"
