"""Success envelope used by every endpoint: ``{"success": true, ...payload}``."""

from __future__ import annotations

from typing import Any

from rest_framework import status as http_status  # type: ignore
from rest_framework.response import Response  # type: ignore


def success_response(status: int = http_status.HTTP_200_OK, **payload: Any) -> Response:
    return Response({"success": True, **payload}, status=status)


def failure_body(message: str, errors: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return body
