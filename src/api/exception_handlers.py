"""Exception handlers for the API."""

import traceback
import typing as t
from copy import deepcopy

import structlog
from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.http import HttpRequest
from ninja.responses import Response

from events.exceptions import (
    CapacityExceededError,
    DuplicateRegistrationError,
    ParticipantNotFoundError,
    ParticipationError,
    PaymentGatewayError,
    RefundFailedError,
)

logger = structlog.get_logger(__name__)

PARTICIPATION_ERROR_STATUS: dict[type[ParticipationError], int] = {
    DuplicateRegistrationError: 409,
    CapacityExceededError: 409,
    ParticipantNotFoundError: 404,
    PaymentGatewayError: 502,
    RefundFailedError: 502,
}


def handle_general_exception(request: HttpRequest, exc: Exception | t.Type[Exception]) -> Response:
    """Handle a general exception.

    Args:
        request: The incoming HTTP request.
        exc: The exception.

    Returns:
        The response.
    """
    logger.exception(
        "INTERNAL_SERVER_ERROR",
        method=request.method,
        path=request.path,
        headers=obfuscate(dict(request.headers)),
        query=obfuscate(request.GET.dict()),
    )
    data = {"detail": "Internal Server Error.", "code": "internal_error"}
    is_staff = getattr(request, "user", None) and request.user.is_staff
    if settings.DEBUG or is_staff:  # pragma: no cover
        data["traceback"] = traceback.format_exc()
    return Response(status=500, data=data)


def handle_django_validation_error(request: HttpRequest, exc: ValidationError | t.Type[ValidationError]) -> Response:
    """Handle a validation error.

    Args:
        request: The incoming HTTP request.
        exc: The exception.
    """
    logger.warning("VALIDATION_ERROR", path=request.path, errors=getattr(exc, "messages", None))
    if hasattr(exc, "error_dict"):
        error_dict = {k: [ee for e in v for ee in e] for k, v in exc.error_dict.items()}
    else:
        error_dict = {"__all__": list(exc.messages)}  # type: ignore[union-attr]
    return Response(status=400, data={"errors": error_dict})


def handle_object_does_not_exist(
    request: HttpRequest, exc: ObjectDoesNotExist | t.Type[ObjectDoesNotExist]
) -> Response:
    """Handle a lookup of a missing object."""
    return Response(status=404, data={"detail": "Not Found", "code": "not_found"})


def handle_participation_error(
    request: HttpRequest, exc: ParticipationError | t.Type[ParticipationError]
) -> Response:
    """Handle an error raised by the participation engine."""
    status = PARTICIPATION_ERROR_STATUS.get(type(exc), 400)  # type: ignore[arg-type]
    data: dict[str, t.Any] = {"detail": exc.message, "code": exc.code}  # type: ignore[union-attr]
    if isinstance(exc, RefundFailedError):
        data["manual_intervention_required"] = True
        logger.error("refund_failed_manual_intervention_required", path=request.path)
    else:
        logger.info("participation_error", code=exc.code, status=status, path=request.path)
    return Response(status=status, data=data)


SENSITIVE_KEYS = {"password", "token", "x-api-key", "authorization", "authentication", "stripe-signature"}


def obfuscate(data: dict[str, t.Any]) -> dict[str, t.Any]:
    """Obfuscate sensitive data in payloads and headers."""
    new_data = deepcopy(data)
    for key in data.keys():
        if key.lower() in SENSITIVE_KEYS:
            new_data[key] = "********"
    return new_data
