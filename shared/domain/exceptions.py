"""
Domain exceptions

Services raise these; the API layer turns them into the failure envelope.
Each category carries the HTTP status it maps to.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 400
    default_message = "Request could not be processed."

    def __init__(self, message: str | None = None, *, errors: dict | None = None):
        self.message = message or self.default_message
        self.errors = errors or {}
        super().__init__(self.message)


class ValidationFailed(DomainError):
    """Missing or invalid input, rejected before persistence."""

    status_code = 400
    default_message = "Invalid request."


class AuthorizationError(DomainError):
    """The acting user lacks rights for the operation."""

    status_code = 403
    default_message = "Not authorized."


class NotFoundError(DomainError):
    status_code = 404
    default_message = "Not found."


class ConflictError(DomainError):
    """The request collides with existing state (date overlap, duplicates)."""

    status_code = 409
    default_message = "Conflict with existing data."
