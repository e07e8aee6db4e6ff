"""Application error taxonomy.

Every error carries a stable machine-checkable ``code``, the HTTP status it
maps to, and a human-readable message. The FastAPI handlers in
``checkup.main`` render them all the same way.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """One violated rule, pinned to the field that broke it."""

    field: str
    message: str
    rule: str = "invalid"

    def as_dict(self) -> dict[str, str]:
        return asdict(self)


class CheckupError(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error message.
        code: Stable error kind returned to clients.
        status_code: HTTP status code to return.
    """

    code = "internal_error"
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def details(self) -> list[dict[str, Any]]:
        return []

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "success": False,
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(CheckupError):
    """Malformed or out-of-policy input. Lists every failing field."""

    code = "validation_error"
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None) -> None:
        self.errors = list(errors)
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str, rule: str = "invalid") -> ValidationError:
        return cls([FieldError(field, message, rule)], message)

    @property
    def details(self) -> list[dict[str, Any]]:
        return [e.as_dict() for e in self.errors]

    @property
    def rules(self) -> set[str]:
        return {e.rule for e in self.errors}

    @property
    def fields(self) -> set[str]:
        return {e.field for e in self.errors}


class AuthError(CheckupError):
    """No session or insufficient role. Deliberately generic."""

    code = "unauthorized"
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(CheckupError):
    code = "not_found"
    status_code = 404
    default_message = "Resource not found"


class DuplicateUsernameError(CheckupError):
    code = "duplicate_username"
    status_code = 409
    default_message = "Username already exists"


class PersistenceError(CheckupError):
    """Storage layer failure. Nothing from the request was committed."""

    code = "persistence_error"
    status_code = 500
    default_message = "Failed to save to the database"


class UploadError(CheckupError):
    """Object-storage call failed for one photo."""

    code = "upload_error"
    status_code = 502
    default_message = "Failed to upload to object storage"
