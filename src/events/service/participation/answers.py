"""Validation and storage of registration answers."""

import typing as t
import uuid

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.translation import gettext as _

from events.models import Event, Participant, RegistrationAnswer, RegistrationQuestion

from .types import SubmittedAnswer

CHECKBOX_VALUES = {"true", "false"}


def validate_answers(event: Event, answers: t.Sequence[SubmittedAnswer]) -> dict[uuid.UUID, str]:
    """Check submitted answers against the event's questions.

    Returns the answers keyed by question id, trimmed of surrounding whitespace.

    Raises:
        DjangoValidationError: with an ``answers`` entry listing every problem found.
    """
    questions = {q.id: q for q in RegistrationQuestion.objects.filter(event=event)}
    values: dict[uuid.UUID, str] = {}
    errors: list[str] = []

    for answer in answers:
        if answer.question_id not in questions:
            errors.append(_("Unknown question {question_id}.").format(question_id=answer.question_id))
            continue
        if answer.question_id in values:
            errors.append(_("Question {question_id} answered more than once.").format(question_id=answer.question_id))
            continue
        values[answer.question_id] = answer.answer_value.strip()

    for question in questions.values():
        value = values.get(question.id, "")
        if not value:
            if question.is_required:
                errors.append(_("'{question}' is required.").format(question=question.question_text))
            continue
        if question.question_type == RegistrationQuestion.QuestionType.SELECT and value not in question.options:
            errors.append(_("'{value}' is not a valid choice for '{question}'.").format(
                value=value, question=question.question_text
            ))
        elif question.question_type == RegistrationQuestion.QuestionType.CHECKBOX and value not in CHECKBOX_VALUES:
            errors.append(_("'{question}' must be true or false.").format(question=question.question_text))

    if errors:
        raise DjangoValidationError({"answers": errors})
    return {question_id: value for question_id, value in values.items() if value}


def save_answers(participant: Participant, values: dict[uuid.UUID, str]) -> list[RegistrationAnswer]:
    """Store validated answers for a freshly created record."""
    return RegistrationAnswer.objects.bulk_create(
        [
            RegistrationAnswer(participant=participant, question_id=question_id, answer_value=value)
            for question_id, value in values.items()
        ]
    )
