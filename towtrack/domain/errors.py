"""
Domain exception hierarchy.

Every exception carries the HTTP status it maps to, so the API layer can
translate them with a single handler (see ``towtrack.api.app``).
"""

from __future__ import annotations

from typing import Any, Optional


class TowTrackError(Exception):
    """Base class for all errors raised by the rule core and services."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message}


class ValidationError(TowTrackError):
    """A field is malformed or out of range."""

    status_code = 422

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        loc = ["body", self.field] if self.field else ["body"]
        return {"detail": [{"loc": loc, "msg": self.message, "type": "value_error"}]}


class NotFoundError(TowTrackError):
    """Record is missing, or exists but is not visible to the actor."""

    status_code = 404

    def __init__(self, resource: str, identifier: Any = None):
        super().__init__(f"{resource} not found")
        self.resource = resource
        self.identifier = identifier


class NotAuthenticatedError(TowTrackError):
    status_code = 401


class AuthorizationError(TowTrackError):
    """Actor lacks the role or ownership the mutation requires."""

    status_code = 403


class ConflictError(TowTrackError):
    """Delete blocked by existing references."""

    status_code = 409

    def __init__(self, message: str, dependents: int = 0):
        super().__init__(message)
        self.dependents = dependents

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "dependents": self.dependents}


class InvalidStateTransition(TowTrackError):
    """Raised when a trip status change violates the state machine."""

    status_code = 409
