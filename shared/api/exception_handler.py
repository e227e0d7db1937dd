"""DRF exception handler producing the failure envelope.

Registered as ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``. Domain errors raised
by services map to their own status code; everything DRF already knows how
to render (validation, authentication, permission, 404) keeps its status
and gets a single human-readable ``message`` on top.
"""

from __future__ import annotations

import logging
from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.serializers import as_serializer_error  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import DomainError
from .responses import failure_body

logger = logging.getLogger(__name__)


def _first_message(data: Any) -> str:
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        for field, value in data.items():
            inner = _first_message(value)
            if field in ("non_field_errors", "__all__"):
                return inner
            return f"{field}: {inner}"
        return "Invalid request."
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else "Invalid request."
    return str(data)


def envelope_exception_handler(exc: Exception, context: dict) -> Response | None:
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else None

    if isinstance(exc, DomainError):
        logger.info(
            "Request rejected by %s: %s (%s)", view_name, exc.message, exc.__class__.__name__
        )
        return Response(failure_body(exc.message, exc.errors), status=exc.status_code)

    if isinstance(exc, DjangoValidationError):
        errors = as_serializer_error(exc)
        return Response(
            failure_body(_first_message(errors), errors),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is None:
        logger.error("Unhandled error in %s", view_name, exc_info=exc)
        return None

    errors = response.data
    field_errors = errors if isinstance(errors, dict) and "detail" not in errors else None
    response.data = failure_body(_first_message(errors), field_errors)
    return response
